"""
Order domain models.

Orders are frozen; every status transition produces a new Order via
dataclasses.replace.
"""

import uuid
from dataclasses import dataclass

from src.core.enums import OrderSide, OrderStatus, OrderType
from src.core.exceptions.simulation import OrderError
from src.core.models.trade import ExecutedTrade


@dataclass(frozen=True)
class OrderRequest:
    """Order as requested by the player, before it gets an ID.

    Not validated on construction; use OrderEngine.validate_order.
    """

    type: OrderType
    side: OrderSide
    ticker: str
    quantity: float
    limit_price: float | None = None
    stop_price: float | None = None
    expires_in_turns: int | None = None


@dataclass(frozen=True)
class Order:
    """Order owned by the order engine."""

    id: str
    type: OrderType
    side: OrderSide
    ticker: str
    quantity: float
    placed_at: int
    expires_at: int
    status: OrderStatus = OrderStatus.PENDING
    filled_quantity: float = 0.0
    limit_price: float | None = None
    stop_price: float | None = None
    fill_price: float | None = None
    filled_at: int | None = None

    def __post_init__(self) -> None:
        """Validate order lifetime."""
        if self.expires_at < self.placed_at:
            raise OrderError(
                f"Order {self.id} expires at turn {self.expires_at}, "
                f"before it was placed at turn {self.placed_at}"
            )

    @property
    def is_terminal(self) -> bool:
        """Check if order reached a final status."""
        return self.status.is_terminal

    def to_dict(self) -> dict:
        """Convert order to dictionary."""
        return {
            "id": self.id,
            "type": self.type.value,
            "side": self.side.value,
            "ticker": self.ticker,
            "quantity": self.quantity,
            "filled_quantity": self.filled_quantity,
            "limit_price": self.limit_price,
            "stop_price": self.stop_price,
            "status": self.status.value,
            "placed_at": self.placed_at,
            "expires_at": self.expires_at,
            "fill_price": self.fill_price,
            "filled_at": self.filled_at,
        }


@dataclass(frozen=True)
class OrderSubmitResult:
    """Result of submitting an order."""

    success: bool
    order: Order | None = None
    error: str | None = None
    validation_errors: tuple[str, ...] = ()


@dataclass(frozen=True)
class OrderValidationResult:
    """Advisory validation outcome; warnings never make an order invalid."""

    valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class OrderFill:
    """A single order fill."""

    order: Order
    price: float
    quantity: float


@dataclass(frozen=True)
class ExecutionReport:
    """End-of-turn order execution report."""

    turn: int
    fills: tuple[OrderFill, ...]
    expired: tuple[Order, ...]
    pending: tuple[Order, ...]
    trades: tuple[ExecutedTrade, ...]


def generate_order_id() -> str:
    """Generate a unique order ID."""
    return f"ORD-{uuid.uuid4().hex[:12]}"
