"""
Executed trade domain model.
"""

from dataclasses import dataclass

from src.core.enums import OrderSide
from src.core.exceptions.simulation import ValidationError


@dataclass(frozen=True)
class ExecutedTrade:
    """Represents a fill, to be applied to a portfolio exactly once."""

    order_id: str
    ticker: str
    side: OrderSide
    shares: float
    price: float
    total_value: float
    fee: float
    executed_at: int  # Turn number

    def __post_init__(self) -> None:
        """Validate trade data after initialization."""
        if self.shares <= 0:
            raise ValidationError(f"Shares must be positive, got {self.shares}")
        if self.price <= 0:
            raise ValidationError(f"Price must be positive, got {self.price}")
        if self.fee < 0:
            raise ValidationError(f"Fee must be non-negative, got {self.fee}")

    @property
    def net_cash_flow(self) -> float:
        """Cash change this trade causes, fee included."""
        if self.side == OrderSide.BUY:
            return -(self.total_value + self.fee)
        return self.total_value - self.fee
