"""
Portfolio trading operations.

Applies executed trades and dividends to the portfolio state. Trades are
trusted: the order engine has already checked funds and shares.
"""

from typing import TYPE_CHECKING

from loguru import logger

from src.core.enums import OrderSide
from src.core.models.holdings import Lot, PortfolioState
from src.core.models.trade import ExecutedTrade
from src.core.types.financial import calculate_notional_value, round_price
from src.core.utils.decorators import log_operation, validate_inputs

from .lot_tracker import add_lot, sell_lots_fifo

if TYPE_CHECKING:
    from .portfolio_core import PortfolioCore


class PortfolioTrading:
    """Portfolio trading operations.

    Handles trade application (lots, cash, realized PnL) and dividends.
    """

    def __init__(self, portfolio_core: "PortfolioCore") -> None:
        """Initialize with portfolio core state.

        Args:
            portfolio_core: The portfolio core state to apply trades to
        """
        self.core = portfolio_core

    @log_operation
    def apply_trade(self, trade: ExecutedTrade) -> PortfolioState:
        """Apply an executed trade.

        - BUY: cash -= total_value + fee, new lot at the trade price
        - SELL: FIFO lot consumption, cash += value of shares sold - fee,
          realized PnL accumulated

        Args:
            trade: Trade produced by the order engine

        Returns:
            The new portfolio state
        """
        if trade.side == OrderSide.BUY:
            lots, cash, realized_pnl = self._apply_buy(trade)
        else:
            lots, cash, realized_pnl = self._apply_sell(trade)

        state = self.core.state
        logger.debug(
            f"Applied {trade.side.value} {trade.shares} {trade.ticker} @ {trade.price:.2f} "
            f"(order {trade.order_id})"
        )
        return self.core.update(
            lots=lots,
            cash=round_price(cash),
            realized_pnl=round_price(realized_pnl),
            total_fees=round_price(state.total_fees + trade.fee),
            trade_count=state.trade_count + 1,
        )

    def _apply_buy(self, trade: ExecutedTrade) -> tuple[tuple[Lot, ...], float, float]:
        """Compute lots and cash after a buy."""
        state = self.core.state
        lots = add_lot(state.lots, trade.ticker, trade.shares, trade.price, trade.executed_at)
        cash = state.cash + trade.net_cash_flow
        return lots, cash, state.realized_pnl

    def _apply_sell(self, trade: ExecutedTrade) -> tuple[tuple[Lot, ...], float, float]:
        """Compute lots, cash and realized PnL after a FIFO sell."""
        state = self.core.state
        result = sell_lots_fifo(state.lots, trade.ticker, trade.shares, trade.price)

        if result.shares_sold >= trade.shares:
            cash = state.cash + trade.net_cash_flow
            return result.lots, cash, state.realized_pnl + result.realized_pnl

        logger.warning(
            f"Sell of {trade.shares} {trade.ticker} only matched {result.shares_sold} "
            f"held shares (order {trade.order_id})"
        )
        # Proceeds only for shares that actually left a lot.
        proceeds = calculate_notional_value(result.shares_sold, trade.price) - trade.fee
        return result.lots, state.cash + proceeds, state.realized_pnl + result.realized_pnl

    @validate_inputs
    def apply_dividend(self, ticker: str, per_share_amount: float) -> PortfolioState:
        """Credit a dividend on every held share of a ticker.

        Args:
            ticker: Paying ticker
            per_share_amount: Dividend per share

        Returns:
            The new portfolio state

        Raises:
            ValidationError: If per_share_amount is not positive
        """
        state = self.core.state
        total_dividend = round_price(self.core.shares_for(ticker) * per_share_amount)

        if total_dividend > 0:
            logger.info(f"Dividend credited: {ticker} ${total_dividend:.2f}")

        return self.core.update(
            cash=round_price(state.cash + total_dividend),
            total_dividends=round_price(state.total_dividends + total_dividend),
        )
