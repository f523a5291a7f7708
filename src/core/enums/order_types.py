"""
Order type, side and status enumerations.

This module defines the order vocabulary shared by the order engine
and the portfolio manager.
"""

from enum import StrEnum


class OrderType(StrEnum):
    """
    Supported order types.

    Market orders fill at the current price, limit orders at the better of
    price and limit, stop orders once the stop price is crossed.
    """

    MARKET = "market"
    LIMIT = "limit"
    STOP = "stop"
    STOP_LIMIT = "stop_limit"

    @property
    def requires_limit_price(self) -> bool:
        """Check if order type needs a limit price."""
        return self == self.LIMIT

    @property
    def requires_stop_price(self) -> bool:
        """Check if order type needs a stop price."""
        return self in [self.STOP, self.STOP_LIMIT]


class OrderSide(StrEnum):
    """
    Order direction.
    """

    BUY = "buy"
    SELL = "sell"

    @property
    def is_buy(self) -> bool:
        """Check if side is buy."""
        return self == self.BUY


class OrderStatus(StrEnum):
    """
    Order lifecycle status.

    An order starts pending and moves exactly once to a terminal status.
    """

    PENDING = "pending"
    FILLED = "filled"
    CANCELLED = "cancelled"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        """Check if status is final."""
        return self != self.PENDING
