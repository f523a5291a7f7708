"""
Portfolio core state management.

Holds the current PortfolioState and is the only place that swaps it for a
new one. Trading, metrics and risk components all read through this core.
"""

import time
from dataclasses import dataclass, replace
from typing import Any

from src.core.models.holdings import Lot, PortfolioState

from .lot_tracker import get_shares_for_ticker


@dataclass
class PortfolioCore:
    """Core portfolio state holder.

    The wrapped PortfolioState is frozen; updates replace it wholesale, so
    states handed out earlier are never modified.
    """

    state: PortfolioState

    @property
    def cash(self) -> float:
        return self.state.cash

    @property
    def lots(self) -> tuple[Lot, ...]:
        return self.state.lots

    def shares_for(self, ticker: str) -> float:
        """Total shares held for a ticker."""
        return get_shares_for_ticker(self.state.lots, ticker)

    def update(self, **changes: Any) -> PortfolioState:
        """Replace the state with a modified copy and stamp last_updated.

        Args:
            **changes: PortfolioState fields to change

        Returns:
            The new state
        """
        self.state = replace(self.state, last_updated=time.time(), **changes)
        return self.state
