"""
Price generator.

Pure functions that turn a price context into the next price. A move is the
sum of a Gaussian random walk, a momentum term from recent price changes and
a uniform volume sentiment term, capped at three times the asset's volatility.
A pending news event overrides all of it for that tick.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from src.core.constants import (
    INITIAL_HISTORY_WINDOW,
    MAX_CHANGE_VOLATILITY_MULTIPLE,
    MIN_PRICE,
    MOMENTUM_LOOKBACK_DECAY,
)
from src.core.enums import TrendDirection, VolumeSentiment
from src.core.models.asset import Asset
from src.core.models.market import (
    DEFAULT_PRICE_GENERATOR_CONFIG,
    MomentumTrigger,
    NewsTrigger,
    PriceGeneratorConfig,
    PriceTrigger,
    RandomWalkTrigger,
    VolumeTrigger,
)
from src.core.types.financial import clamp, percent_change, round_price
from src.core.utils.rng import SeededRandom


@dataclass(frozen=True)
class PriceContext:
    """Inputs for generating one asset's next price.

    Attributes:
        current_price: Current price
        volatility: Asset volatility (0-1)
        recent_prices: Recent price history, most recent last
        event_impact: Fractional price impact of a pending event, if any
        event_id: ID of the pending event, if any
    """

    current_price: float
    volatility: float
    recent_prices: Sequence[float] = ()
    event_impact: float | None = None
    event_id: str | None = None


@dataclass(frozen=True)
class GeneratedPrice:
    """Result of generating a new price."""

    price: float
    change: float
    change_percent: float
    trigger: PriceTrigger


def calculate_momentum(prices: Sequence[float]) -> float:
    """Calculate momentum from recent prices.

    Walks pairwise percentage changes from newest to oldest, weighting the
    newest change 1.0 and decaying the weight by 0.7 per step back.

    Args:
        prices: Price sequence, most recent last

    Returns:
        Momentum clamped to [-1, 1]; 0 for fewer than two prices
    """
    if len(prices) < 2:
        return 0.0

    momentum = 0.0
    weight = 1.0
    for i in range(len(prices) - 1, 0, -1):
        change = (prices[i] - prices[i - 1]) / prices[i - 1]
        momentum += change * weight
        weight *= MOMENTUM_LOOKBACK_DECAY

    return clamp(momentum, -1.0, 1.0)


def _apply_event_impact(current_price: float, impact: float, event_id: str) -> GeneratedPrice:
    """Build the news-driven price, floored at one cent."""
    new_price = max(round_price(current_price * (1 + impact)), MIN_PRICE)

    return GeneratedPrice(
        price=new_price,
        change=round_price(new_price - current_price),
        change_percent=percent_change(current_price, new_price),
        trigger=NewsTrigger(event_id=event_id, impact=impact),
    )


def _classify_trigger(
    momentum: float, momentum_component: float, random_walk: float, volume_sentiment: float
) -> PriceTrigger:
    """Pick the single label that best explains the move."""
    if abs(momentum_component) > abs(random_walk):
        return MomentumTrigger(
            direction=TrendDirection.UP if momentum > 0 else TrendDirection.DOWN,
            strength=abs(momentum),
        )
    if abs(volume_sentiment) > abs(random_walk) * 0.5:
        return VolumeTrigger(
            sentiment=VolumeSentiment.BUYING if volume_sentiment > 0 else VolumeSentiment.SELLING
        )
    return RandomWalkTrigger()


def generate_next_price(
    context: PriceContext,
    rng: SeededRandom,
    config: PriceGeneratorConfig = DEFAULT_PRICE_GENERATOR_CONFIG,
) -> GeneratedPrice:
    """Generate the next price for one asset.

    Args:
        context: Current price, volatility, history and pending event
        rng: Random source; consumed only when no event is pending
        config: Component weights

    Returns:
        New price with absolute and fractional change and its trigger
    """
    current_price = context.current_price
    volatility = context.volatility

    if context.event_impact is not None and context.event_id:
        return _apply_event_impact(current_price, context.event_impact, context.event_id)

    random_walk = rng.next_gaussian(0.0, volatility * config.random_walk_weight)

    momentum = calculate_momentum(context.recent_prices)
    momentum_component = momentum * config.momentum_weight * config.momentum_decay

    volume_sentiment = rng.next_float(-1.0, 1.0) * config.volume_weight * volatility

    max_change = volatility * MAX_CHANGE_VOLATILITY_MULTIPLE
    total_change = clamp(random_walk + momentum_component + volume_sentiment, -max_change, max_change)

    new_price = round_price(max(current_price * (1 + total_change), MIN_PRICE))
    change = round_price(new_price - current_price)

    return GeneratedPrice(
        price=new_price,
        change=change,
        change_percent=change / current_price,
        trigger=_classify_trigger(momentum, momentum_component, random_walk, volume_sentiment),
    )


def generate_initial_history(
    asset: Asset,
    length: int,
    rng: SeededRandom,
    config: PriceGeneratorConfig = DEFAULT_PRICE_GENERATOR_CONFIG,
) -> list[float]:
    """Generate a warm-up price series starting at the asset's base price.

    Args:
        asset: Asset to simulate
        length: Number of prices, base price included
        rng: Random source
        config: Component weights

    Returns:
        List of prices, oldest first
    """
    history = [asset.base_price]

    for _ in range(1, length):
        context = PriceContext(
            current_price=history[-1],
            volatility=asset.volatility,
            recent_prices=history[-INITIAL_HISTORY_WINDOW:],
        )
        history.append(generate_next_price(context, rng, config).price)

    return history
