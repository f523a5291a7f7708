"""
Order engine.

Owns pending and archived orders. Each turn it expires stale orders, matches
the rest against current prices and emits executed trades for the caller to
apply to the portfolio; it never changes portfolio state itself.
"""

from collections.abc import Mapping
from dataclasses import replace

from loguru import logger

from src.core.constants import DEFAULT_EXPIRATION_TURNS, DEFAULT_TRANSACTION_FEE
from src.core.enums import OrderStatus
from src.core.exceptions.simulation import ConfigurationError
from src.core.interfaces.orders import IOrderEngine
from src.core.models.holdings import PortfolioState
from src.core.models.order import (
    ExecutionReport,
    Order,
    OrderFill,
    OrderRequest,
    OrderSubmitResult,
    OrderValidationResult,
    generate_order_id,
)
from src.core.models.trade import ExecutedTrade
from src.core.types.financial import calculate_notional_value
from src.core.utils.decorators import log_operation

from .order_helpers import ExecutionRules, OrderValidator


class OrderEngine(IOrderEngine):
    """Order lifecycle: pending -> filled | cancelled | expired.

    Terminal orders are archived in history and never change again.
    """

    def __init__(self, default_expiration_turns: int = DEFAULT_EXPIRATION_TURNS) -> None:
        """Initialize order engine.

        Args:
            default_expiration_turns: Turns an order lives when the request
                does not say otherwise

        Raises:
            ConfigurationError: If default_expiration_turns is not positive
        """
        if default_expiration_turns <= 0:
            raise ConfigurationError(
                f"default_expiration_turns must be positive, got {default_expiration_turns}"
            )

        self.default_expiration_turns = default_expiration_turns
        self._pending: dict[str, Order] = {}
        self._history: list[Order] = []

    # === Commands ===

    def submit_order(self, request: OrderRequest, current_turn: int) -> OrderSubmitResult:
        """Queue an order without market checks.

        Call validate_order first when invalid requests should be rejected.

        Args:
            request: Order request
            current_turn: Turn the order is placed on

        Returns:
            Successful result carrying the pending order
        """
        expires_in = (
            request.expires_in_turns
            if request.expires_in_turns is not None
            else self.default_expiration_turns
        )
        order = Order(
            id=generate_order_id(),
            type=request.type,
            side=request.side,
            ticker=request.ticker,
            quantity=request.quantity,
            limit_price=request.limit_price,
            stop_price=request.stop_price,
            placed_at=current_turn,
            expires_at=current_turn + expires_in,
        )
        self._pending[order.id] = order

        logger.debug(
            f"Order {order.id} submitted: {order.side.value} {order.quantity:g} {order.ticker} "
            f"({order.type.value}, expires turn {order.expires_at})"
        )
        return OrderSubmitResult(success=True, order=order)

    def cancel_order(self, order_id: str) -> bool:
        """Cancel a pending order.

        Returns:
            True if the order was pending and is now cancelled
        """
        order = self._pending.pop(order_id, None)
        if order is None:
            return False

        self._history.append(replace(order, status=OrderStatus.CANCELLED))
        logger.debug(f"Order {order_id} cancelled")
        return True

    @log_operation
    def process_end_of_turn(
        self,
        prices: Mapping[str, float],
        portfolio: PortfolioState,
        current_turn: int,
        fee: float = DEFAULT_TRANSACTION_FEE,
    ) -> ExecutionReport:
        """Expire, match and fill pending orders.

        Expiration is checked before fill eligibility. Orders without a price
        or whose conditions are not met stay pending. Orders are matched in
        submission order against running cash and share balances, so each
        fill reduces what later orders in the same pass can use.

        Args:
            prices: Current prices
            portfolio: Portfolio at the start of the pass
            current_turn: Turn being processed
            fee: Fee charged per fill

        Returns:
            Report of fills, expirations, still-pending orders and trades
        """
        fills: list[OrderFill] = []
        expired: list[Order] = []
        trades: list[ExecutedTrade] = []
        still_pending: dict[str, Order] = {}
        available = portfolio

        for order in self._pending.values():
            if current_turn >= order.expires_at:
                expired_order = replace(order, status=OrderStatus.EXPIRED)
                expired.append(expired_order)
                self._history.append(expired_order)
                continue

            price = prices.get(order.ticker)
            if price is None or not ExecutionRules.can_execute(order, price, available, fee):
                still_pending[order.id] = order
                continue

            fill_price = ExecutionRules.get_fill_price(order, price)
            available = ExecutionRules.reserve(order, fill_price, available, fee)
            fills.append(OrderFill(order=order, price=fill_price, quantity=order.quantity))
            trades.append(
                ExecutedTrade(
                    order_id=order.id,
                    ticker=order.ticker,
                    side=order.side,
                    shares=order.quantity,
                    price=fill_price,
                    total_value=calculate_notional_value(order.quantity, fill_price),
                    fee=fee,
                    executed_at=current_turn,
                )
            )
            self._history.append(
                replace(
                    order,
                    status=OrderStatus.FILLED,
                    filled_quantity=order.quantity,
                    fill_price=fill_price,
                    filled_at=current_turn,
                )
            )

        self._pending = still_pending

        if fills or expired:
            logger.info(
                f"Turn {current_turn}: {len(fills)} filled, {len(expired)} expired, "
                f"{len(still_pending)} pending"
            )

        return ExecutionReport(
            turn=current_turn,
            fills=tuple(fills),
            expired=tuple(expired),
            pending=tuple(still_pending.values()),
            trades=tuple(trades),
        )

    # === Queries ===

    def get_pending_orders(self) -> list[Order]:
        return list(self._pending.values())

    def get_order_history(self) -> list[Order]:
        return list(self._history)

    def get_order(self, order_id: str) -> Order | None:
        """Find an order among pending orders, then history."""
        if order_id in self._pending:
            return self._pending[order_id]
        return next((order for order in self._history if order.id == order_id), None)

    # === Validation ===

    def validate_order(
        self,
        request: OrderRequest,
        portfolio: PortfolioState,
        prices: Mapping[str, float],
        fee: float = DEFAULT_TRANSACTION_FEE,
    ) -> OrderValidationResult:
        """Check a request against portfolio and prices without queuing it."""
        return OrderValidator.validate(request, portfolio, prices, fee)

    def clear(self) -> None:
        """Drop all pending orders and history."""
        self._pending.clear()
        self._history.clear()


def create_order_engine(default_expiration_turns: int | None = None) -> OrderEngine:
    """Create an OrderEngine, using the default expiration when None."""
    if default_expiration_turns is None:
        return OrderEngine()
    return OrderEngine(default_expiration_turns)
