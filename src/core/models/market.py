"""
Market domain models: price triggers, price points, tick results and
market configuration.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Literal

from src.core.constants import (
    DEFAULT_MAX_HISTORY_LENGTH,
    DEFAULT_MOMENTUM_DECAY,
    DEFAULT_MOMENTUM_WEIGHT,
    DEFAULT_NEWS_WEIGHT,
    DEFAULT_RANDOM_WALK_WEIGHT,
    DEFAULT_SPREAD_PERCENT,
    DEFAULT_TRANSACTION_FEE,
    DEFAULT_VOLUME_WEIGHT,
)
from src.core.enums import TrendDirection, TriggerType, VolumeSentiment
from src.core.exceptions.simulation import ConfigurationError


@dataclass(frozen=True)
class RandomWalkTrigger:
    """Price moved mostly by random noise."""

    type: Literal[TriggerType.RANDOM_WALK] = field(default=TriggerType.RANDOM_WALK, init=False)


@dataclass(frozen=True)
class MomentumTrigger:
    """Price moved mostly by recent trend."""

    direction: TrendDirection
    strength: float
    type: Literal[TriggerType.MOMENTUM] = field(default=TriggerType.MOMENTUM, init=False)


@dataclass(frozen=True)
class NewsTrigger:
    """Price was overridden by a narrative event."""

    event_id: str
    impact: float
    type: Literal[TriggerType.NEWS] = field(default=TriggerType.NEWS, init=False)


@dataclass(frozen=True)
class VolumeTrigger:
    """Price moved mostly by simulated buying or selling pressure."""

    sentiment: VolumeSentiment
    type: Literal[TriggerType.VOLUME] = field(default=TriggerType.VOLUME, init=False)


PriceTrigger = RandomWalkTrigger | MomentumTrigger | NewsTrigger | VolumeTrigger


@dataclass(frozen=True)
class PricePoint:
    """Single price point in a ticker's history."""

    price: float
    turn: int
    timestamp: float
    change: float = 0.0
    change_percent: float = 0.0
    trigger: PriceTrigger | None = None


@dataclass(frozen=True)
class PriceChange:
    """Price change for a single ticker during one tick."""

    ticker: str
    previous_price: float
    new_price: float
    change: float
    change_percent: float
    trigger: PriceTrigger | None = None


@dataclass(frozen=True)
class TickResult:
    """Result of advancing the market by one tick."""

    turn: int
    prices: Mapping[str, float]
    changes: tuple[PriceChange, ...]
    triggered_events: tuple[str, ...]
    compute_time_ms: float


@dataclass(frozen=True)
class MarketState:
    """Exported market state."""

    prices: Mapping[str, float]
    price_history: Mapping[str, tuple[PricePoint, ...]]
    active_events: tuple[str, ...]
    turn: int

    def to_dict(self) -> dict:
        """Convert state to dictionary."""
        return {
            "turn": self.turn,
            "prices": dict(self.prices),
            "active_events": list(self.active_events),
            "price_history": {
                ticker: [
                    {
                        "price": point.price,
                        "turn": point.turn,
                        "timestamp": point.timestamp,
                        "change": point.change,
                        "change_percent": point.change_percent,
                        "trigger": point.trigger.type.value if point.trigger else None,
                    }
                    for point in points
                ]
                for ticker, points in self.price_history.items()
            },
        }


@dataclass(frozen=True)
class MarketConfig:
    """Configuration for a market engine.

    Attributes:
        max_history_length: Price points kept per ticker
        transaction_fee: Flat fee charged per executed trade
        spread_percent: Bid-ask spread as a fraction
        seed: Random seed for reproducible simulations (random when None)
    """

    max_history_length: int = DEFAULT_MAX_HISTORY_LENGTH
    transaction_fee: float = DEFAULT_TRANSACTION_FEE
    spread_percent: float = DEFAULT_SPREAD_PERCENT
    seed: int | None = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_history_length <= 0:
            raise ConfigurationError(
                f"max_history_length must be positive, got {self.max_history_length}"
            )
        if self.transaction_fee < 0:
            raise ConfigurationError(
                f"transaction_fee must be non-negative, got {self.transaction_fee}"
            )
        if not 0 <= self.spread_percent < 1:
            raise ConfigurationError(
                f"spread_percent must be in [0, 1), got {self.spread_percent}"
            )


@dataclass(frozen=True)
class PriceGeneratorConfig:
    """Weights for the price generator's components.

    Attributes:
        random_walk_weight: Scale of the Gaussian random walk
        momentum_weight: Scale of the momentum component
        news_weight: Weight of news impact (events currently override outright)
        volume_weight: Scale of the volume sentiment component
        momentum_decay: Extra damping applied to momentum
    """

    random_walk_weight: float = DEFAULT_RANDOM_WALK_WEIGHT
    momentum_weight: float = DEFAULT_MOMENTUM_WEIGHT
    news_weight: float = DEFAULT_NEWS_WEIGHT
    volume_weight: float = DEFAULT_VOLUME_WEIGHT
    momentum_decay: float = DEFAULT_MOMENTUM_DECAY

    def __post_init__(self) -> None:
        """Validate configuration values."""
        for name in (
            "random_walk_weight",
            "momentum_weight",
            "news_weight",
            "volume_weight",
            "momentum_decay",
        ):
            value = getattr(self, name)
            if value < 0:
                raise ConfigurationError(f"{name} must be non-negative, got {value}")

DEFAULT_PRICE_GENERATOR_CONFIG = PriceGeneratorConfig()
