"""
Price movement trigger enumerations.

This module tags what caused a price move, for explanatory text only.
"""

from enum import StrEnum


class TriggerType(StrEnum):
    """
    Cause attached to a generated price.
    """

    RANDOM_WALK = "random_walk"
    MOMENTUM = "momentum"
    NEWS = "news"
    VOLUME = "volume"


class TrendDirection(StrEnum):
    """Momentum direction."""

    UP = "up"
    DOWN = "down"


class VolumeSentiment(StrEnum):
    """Volume sentiment lean."""

    BUYING = "buying"
    SELLING = "selling"
