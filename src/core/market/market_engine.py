"""
Market engine.

Owns the asset registry, current prices, per-ticker bounded history and
pending event impacts, and advances every asset by one tick per turn.
"""

import time
from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import Any

import pandas as pd
from loguru import logger

from src.core.constants import ALL_TICKERS
from src.core.exceptions.simulation import DuplicateTickerError
from src.core.interfaces.market import IMarketEngine, PriceChangeListener
from src.core.models.asset import Asset
from src.core.models.market import (
    DEFAULT_PRICE_GENERATOR_CONFIG,
    MarketConfig,
    MarketState,
    PriceChange,
    PriceGeneratorConfig,
    PricePoint,
    TickResult,
)
from src.core.utils.decorators import log_operation
from src.core.utils.ring_buffer import RingBuffer
from src.core.utils.rng import create_random

from .price_generator import PriceContext, generate_next_price


class MarketEngine(IMarketEngine):
    """Market state and per-turn price simulation.

    Listeners registered with on_price_change run synchronously inside
    tick() and must not call tick() themselves.
    """

    def __init__(
        self,
        assets: Sequence[Asset],
        config: MarketConfig | None = None,
        generator_config: PriceGeneratorConfig = DEFAULT_PRICE_GENERATOR_CONFIG,
    ) -> None:
        """Initialize market with base prices.

        Args:
            assets: Asset registry; tickers must be unique
            config: Market configuration (defaults when None)
            generator_config: Price generator weights

        Raises:
            DuplicateTickerError: If two assets share a ticker
        """
        self.config = config if config is not None else MarketConfig()
        self.generator_config = generator_config

        # Fix the seed now so reset() replays the same sequence
        self._rng = create_random(self.config.seed)
        self._seed = self._rng.seed

        self._assets: dict[str, Asset] = {}
        self._prices: dict[str, float] = {}
        self._history: dict[str, RingBuffer[PricePoint]] = {}
        self._pending_impacts: dict[str, tuple[float, str]] = {}
        self._active_events: list[str] = []
        self._listeners: list[PriceChangeListener] = []
        self._turn = 0

        for asset in assets:
            if asset.ticker in self._assets:
                raise DuplicateTickerError(asset.ticker)
            self._assets[asset.ticker] = asset

        self._initialize_prices()
        logger.debug(f"Market initialized with {len(self._assets)} assets (seed={self._seed})")

    def _initialize_prices(self) -> None:
        """Set every asset to its base price with a single-point history."""
        now = time.time()
        for ticker, asset in self._assets.items():
            self._prices[ticker] = asset.base_price
            history: RingBuffer[PricePoint] = RingBuffer(self.config.max_history_length)
            history.push(PricePoint(price=asset.base_price, turn=0, timestamp=now))
            self._history[ticker] = history

    # === Queries ===

    @property
    def seed(self) -> int:
        """Seed used for this market's random source."""
        return self._seed

    def get_price(self, ticker: str) -> float | None:
        """Get current price, None for an unknown ticker."""
        return self._prices.get(ticker)

    def get_prices(self) -> dict[str, float]:
        """Get a copy of all current prices."""
        return dict(self._prices)

    def get_price_history(self, ticker: str) -> list[PricePoint]:
        """Get a ticker's price history, oldest first."""
        history = self._history.get(ticker)
        return history.to_list() if history is not None else []

    def get_price_history_frame(self, ticker: str) -> pd.DataFrame:
        """Get a ticker's price history as a DataFrame indexed by turn."""
        rows = [
            {
                "turn": point.turn,
                "price": point.price,
                "change": point.change,
                "change_percent": point.change_percent,
                "trigger": point.trigger.type.value if point.trigger else None,
                "timestamp": pd.to_datetime(point.timestamp, unit="s", utc=True),
            }
            for point in self.get_price_history(ticker)
        ]
        columns = ["turn", "price", "change", "change_percent", "trigger", "timestamp"]
        return pd.DataFrame(rows, columns=columns).set_index("turn")

    def get_asset(self, ticker: str) -> Asset | None:
        return self._assets.get(ticker)

    def get_all_assets(self) -> list[Asset]:
        return list(self._assets.values())

    def get_sector_map(self) -> dict[str, str]:
        """Map each ticker to its sector name."""
        return {ticker: asset.sector.value for ticker, asset in self._assets.items()}

    def get_turn(self) -> int:
        return self._turn

    # === Commands ===

    @log_operation
    def tick(self) -> TickResult:
        """Advance every asset by one tick.

        Returns:
            New turn, prices, per-ticker changes and the events that fired
        """
        start_time = time.perf_counter()
        self._turn += 1
        now = time.time()

        changes: list[PriceChange] = []
        triggered_events: list[str] = []

        for ticker, asset in self._assets.items():
            current_price = self._prices[ticker]
            history = self._history[ticker]
            pending = self._pending_impacts.get(ticker)

            context = PriceContext(
                current_price=current_price,
                volatility=asset.volatility,
                recent_prices=[point.price for point in history],
                event_impact=pending[0] if pending else None,
                event_id=pending[1] if pending else None,
            )
            result = generate_next_price(context, self._rng, self.generator_config)

            self._prices[ticker] = result.price
            history.push(
                PricePoint(
                    price=result.price,
                    turn=self._turn,
                    timestamp=now,
                    change=result.change,
                    change_percent=result.change_percent,
                    trigger=result.trigger,
                )
            )
            changes.append(
                PriceChange(
                    ticker=ticker,
                    previous_price=current_price,
                    new_price=result.price,
                    change=result.change,
                    change_percent=result.change_percent,
                    trigger=result.trigger,
                )
            )

            if pending:
                triggered_events.append(pending[1])

        # Impacts last exactly one tick
        self._pending_impacts.clear()
        self._active_events = list(dict.fromkeys(triggered_events))

        self._notify_listeners(changes)

        compute_time_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"Turn {self._turn}: {len(changes)} prices updated, "
            f"{len(triggered_events)} event impacts applied"
        )

        return TickResult(
            turn=self._turn,
            prices=self.get_prices(),
            changes=tuple(changes),
            triggered_events=tuple(triggered_events),
            compute_time_ms=compute_time_ms,
        )

    def apply_event(self, ticker_or_all: str, impact: float, event_id: str) -> None:
        """Queue a one-tick price override for the next tick.

        Args:
            ticker_or_all: Ticker, or "all" for every asset
            impact: Fractional price impact (0.15 = +15%)
            event_id: ID of the narrative event
        """
        if ticker_or_all == ALL_TICKERS:
            for ticker in self._assets:
                self._pending_impacts[ticker] = (impact, event_id)
            logger.debug(f"Event {event_id} queued for all {len(self._assets)} assets")
        elif ticker_or_all in self._assets:
            self._pending_impacts[ticker_or_all] = (impact, event_id)
            logger.debug(f"Event {event_id} queued for {ticker_or_all} (impact={impact:+.2%})")
        else:
            logger.debug(f"Ignoring event {event_id} for unknown ticker: {ticker_or_all}")

    def reset(self) -> None:
        """Restore base prices, history and the random sequence."""
        self._turn = 0
        self._pending_impacts.clear()
        self._active_events.clear()
        self._rng.reset(self._seed)
        self._initialize_prices()
        logger.info(f"Market reset to base prices (seed={self._seed})")

    # === Subscriptions ===

    def on_price_change(self, callback: PriceChangeListener) -> Callable[[], None]:
        """Register a listener for each tick's changes.

        Returns:
            Function that unregisters the listener
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify_listeners(self, changes: list[PriceChange]) -> None:
        batch = tuple(changes)
        for listener in list(self._listeners):
            listener(batch)

    # === State Export ===

    def get_state(self) -> MarketState:
        """Export current market state."""
        return MarketState(
            prices=self.get_prices(),
            price_history={
                ticker: tuple(buffer) for ticker, buffer in self._history.items()
            },
            active_events=tuple(self._active_events),
            turn=self._turn,
        )


def create_market_engine(
    assets: Sequence[Asset],
    generator_config: PriceGeneratorConfig = DEFAULT_PRICE_GENERATOR_CONFIG,
    **config_overrides: Any,
) -> MarketEngine:
    """Create a MarketEngine, overriding individual MarketConfig fields.

    Example:
        >>> engine = create_market_engine(assets, seed=42, max_history_length=30)
    """
    config = replace(MarketConfig(), **config_overrides)
    return MarketEngine(assets, config, generator_config)
