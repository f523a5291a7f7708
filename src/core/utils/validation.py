"""
Validation utilities for core domain models.

Provides consistent validation across the application.
"""

from typing import Any

from src.core.constants import MAX_RISK_RATING, MIN_RISK_RATING
from src.core.exceptions.simulation import ValidationError


def validate_ticker(ticker: Any, param_name: str = "ticker") -> str:
    """Validate that a value is a non-empty ticker string.

    Args:
        ticker: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The validated ticker

    Raises:
        TypeError: If ticker is not a string
        ValidationError: If ticker is blank
    """
    if not isinstance(ticker, str):
        raise TypeError(f"{param_name} must be str, got {type(ticker).__name__}")
    if not ticker.strip():
        raise ValidationError(f"{param_name} must not be empty")
    return ticker


def validate_positive(value: float, param_name: str) -> float:
    """Validate that a numeric value is positive.

    Args:
        value: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The validated value

    Raises:
        ValidationError: If value is not positive
    """
    if value <= 0:
        raise ValidationError(f"{param_name} must be positive, got {value}")
    return value


def validate_fraction(value: float, param_name: str = "fraction") -> float:
    """Validate that a value lies in [0, 1].

    Args:
        value: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The validated fraction

    Raises:
        ValidationError: If value is outside [0, 1]
    """
    if value < 0 or value > 1:
        raise ValidationError(f"{param_name} must be between 0 and 1, got {value}")
    return value


def validate_risk_rating(rating: int, param_name: str = "risk_rating") -> int:
    """Validate that a risk rating is within the supported scale.

    Raises:
        ValidationError: If rating is outside 1-4
    """
    if not MIN_RISK_RATING <= rating <= MAX_RISK_RATING:
        raise ValidationError(
            f"{param_name} must be between {MIN_RISK_RATING} and {MAX_RISK_RATING}, got {rating}"
        )
    return rating
