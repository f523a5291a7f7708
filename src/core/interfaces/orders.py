"""
Order engine interface.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping

from src.core.constants import DEFAULT_TRANSACTION_FEE
from src.core.models.holdings import PortfolioState
from src.core.models.order import (
    ExecutionReport,
    Order,
    OrderRequest,
    OrderSubmitResult,
    OrderValidationResult,
)


class IOrderEngine(ABC):
    """Abstract interface for order handling."""

    @abstractmethod
    def submit_order(self, request: OrderRequest, current_turn: int) -> OrderSubmitResult:
        """Queue an order."""
        pass

    @abstractmethod
    def cancel_order(self, order_id: str) -> bool:
        """Cancel a pending order."""
        pass

    @abstractmethod
    def process_end_of_turn(
        self,
        prices: Mapping[str, float],
        portfolio: PortfolioState,
        current_turn: int,
        fee: float = DEFAULT_TRANSACTION_FEE,
    ) -> ExecutionReport:
        """Match, fill and expire pending orders."""
        pass

    @abstractmethod
    def get_pending_orders(self) -> list[Order]:
        """Get orders still pending."""
        pass

    @abstractmethod
    def get_order_history(self) -> list[Order]:
        """Get terminal orders, oldest first."""
        pass

    @abstractmethod
    def get_order(self, order_id: str) -> Order | None:
        """Find an order by ID."""
        pass

    @abstractmethod
    def validate_order(
        self,
        request: OrderRequest,
        portfolio: PortfolioState,
        prices: Mapping[str, float],
        fee: float = DEFAULT_TRANSACTION_FEE,
    ) -> OrderValidationResult:
        """Check an order request against portfolio and prices."""
        pass
