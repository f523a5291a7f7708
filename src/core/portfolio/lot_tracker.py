"""
Lot tracker.

Pure functions over immutable lot tuples for FIFO cost basis tracking.
Every operation returns new lots; inputs are never modified.
"""

from collections.abc import Sequence
from dataclasses import dataclass, replace

from src.core.models.holdings import Lot
from src.core.utils.decorators import validate_inputs


@dataclass(frozen=True)
class SellResult:
    """Result of selling shares FIFO.

    Attributes:
        lots: Updated lots
        shares_sold: Shares actually sold (may be fewer than requested)
        cost_basis: Total cost basis of the shares sold
        realized_pnl: Sale proceeds minus cost basis
        consumed_lots: Lots fully or partially consumed, partial ones trimmed
            to the consumed share count
    """

    lots: tuple[Lot, ...]
    shares_sold: float
    cost_basis: float
    realized_pnl: float
    consumed_lots: tuple[Lot, ...]


@validate_inputs
def add_lot(
    lots: Sequence[Lot], ticker: str, shares: float, cost_per_share: float, turn: int
) -> tuple[Lot, ...]:
    """Append a purchase lot.

    Lots are never merged, even for the same ticker, so each keeps its own
    acquisition turn and cost basis.

    Raises:
        ValidationError: If ticker is blank or shares or cost is not positive
    """
    new_lot = Lot(ticker=ticker, shares=shares, cost_basis=cost_per_share, acquired_at=turn)
    return (*lots, new_lot)


def sell_lots_fifo(
    lots: Sequence[Lot], ticker: str, shares_to_sell: float, sale_price: float
) -> SellResult:
    """Sell shares oldest-lot-first.

    Only the ticker's lots are touched. Selling more than is held sells
    whatever is available; callers must check quantities beforehand.

    Args:
        lots: Current lots
        ticker: Ticker to sell
        shares_to_sell: Requested share count
        sale_price: Price per share

    Returns:
        SellResult with updated lots and realized PnL
    """
    ticker_lots = sorted(
        (lot for lot in lots if lot.ticker == ticker), key=lambda lot: lot.acquired_at
    )
    other_lots = [lot for lot in lots if lot.ticker != ticker]

    remaining = shares_to_sell
    total_cost_basis = 0.0
    consumed_lots: list[Lot] = []
    kept_lots: list[Lot] = []

    for lot in ticker_lots:
        if remaining <= 0:
            kept_lots.append(lot)
            continue

        if lot.shares <= remaining:
            remaining -= lot.shares
            total_cost_basis += lot.shares * lot.cost_basis
            consumed_lots.append(lot)
        else:
            total_cost_basis += remaining * lot.cost_basis
            consumed_lots.append(replace(lot, shares=remaining))
            kept_lots.append(replace(lot, shares=lot.shares - remaining))
            remaining = 0

    shares_sold = max(shares_to_sell, 0.0) - max(remaining, 0.0)
    realized_pnl = shares_sold * sale_price - total_cost_basis

    return SellResult(
        lots=(*other_lots, *kept_lots),
        shares_sold=shares_sold,
        cost_basis=total_cost_basis,
        realized_pnl=realized_pnl,
        consumed_lots=tuple(consumed_lots),
    )


def get_shares_for_ticker(lots: Sequence[Lot], ticker: str) -> float:
    """Total shares held for a ticker."""
    return sum((lot.shares for lot in lots if lot.ticker == ticker), 0.0)


def get_average_cost(lots: Sequence[Lot], ticker: str) -> float:
    """Share-weighted average cost for a ticker, 0 when none are held."""
    ticker_lots = [lot for lot in lots if lot.ticker == ticker]
    total_shares = sum((lot.shares for lot in ticker_lots), 0.0)
    if total_shares <= 0:
        return 0.0

    return sum((lot.total_cost for lot in ticker_lots), 0.0) / total_shares


def get_unique_tickers(lots: Sequence[Lot]) -> list[str]:
    """Tickers present in the lots, in first-seen order."""
    return list(dict.fromkeys(lot.ticker for lot in lots))


def get_total_cost_basis(lots: Sequence[Lot]) -> float:
    """Total cost across all lots."""
    return sum((lot.total_cost for lot in lots), 0.0)
