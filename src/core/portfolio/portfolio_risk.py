"""
Portfolio risk checks.

Checks are advisory: they describe what a trade would do and leave the
decision to block it to the caller.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING

from src.core.constants import DEFAULT_CONCENTRATION_LIMIT
from src.core.enums import RiskCheckType
from src.core.models.holdings import RiskCheckResult

if TYPE_CHECKING:
    from .portfolio_core import PortfolioCore
    from .portfolio_metrics import PortfolioMetrics


class PortfolioRisk:
    """Pre-trade risk checks."""

    def __init__(self, portfolio_core: "PortfolioCore", metrics: "PortfolioMetrics") -> None:
        """Initialize with portfolio core state.

        Args:
            portfolio_core: The portfolio core state to check
            metrics: Metrics calculator over the same core
        """
        self.core = portfolio_core
        self.metrics = metrics

    def check_concentration_limit(
        self,
        ticker: str,
        additional_value: float,
        prices: Mapping[str, float],
        limit: float = DEFAULT_CONCENTRATION_LIMIT,
    ) -> RiskCheckResult:
        """Check whether adding value to a position breaches a concentration limit.

        Args:
            ticker: Ticker being bought
            additional_value: Dollar value being added
            prices: Current prices
            limit: Maximum fraction of total value in one ticker (default 50%)

        Returns:
            Failed result with a player-facing message when the limit is exceeded
        """
        holding = self.metrics.get_holding(ticker, prices)
        current_value = holding.market_value if holding is not None else 0.0
        total_value = self.metrics.get_total_value(prices) + additional_value

        if total_value <= 0:
            return RiskCheckResult(passed=True, type=RiskCheckType.CONCENTRATION)

        new_concentration = (current_value + additional_value) / total_value

        if new_concentration > limit:
            return RiskCheckResult(
                passed=False,
                type=RiskCheckType.CONCENTRATION,
                message=(
                    f"This trade would put {new_concentration * 100:.1f}% of your portfolio "
                    f"in {ticker}. Limit is {limit * 100:.0f}%."
                ),
                current_value=new_concentration,
                limit=limit,
            )

        return RiskCheckResult(passed=True, type=RiskCheckType.CONCENTRATION)

    def check_cash_reserve(self, cost: float, minimum_cash: float = 0.0) -> RiskCheckResult:
        """Check whether spending cost would leave at least minimum_cash.

        Args:
            cost: Dollar amount about to be spent, fees included
            minimum_cash: Cash that should remain afterwards

        Returns:
            Failed result with a player-facing message when the reserve is breached
        """
        remaining = self.core.cash - cost

        if remaining < minimum_cash:
            return RiskCheckResult(
                passed=False,
                type=RiskCheckType.CASH,
                message=(
                    f"This trade would leave ${remaining:.2f} in cash. "
                    f"Keep at least ${minimum_cash:.2f}."
                ),
                current_value=remaining,
                limit=minimum_cash,
            )

        return RiskCheckResult(passed=True, type=RiskCheckType.CASH)
