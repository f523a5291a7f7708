"""
Financial helpers for the simulation's price and cash arithmetic.

All money is carried as float and rounded to cents at the points where the
game shows or stores it (prices, cash, trade totals). Percentages are
fractions: 0.15 means +15%.

Precision Considerations:
- Float64 provides ~15-16 significant decimal digits, plenty for game money
- Always use the provided rounding functions for consistent precision
- Compare floats with safe_float_comparison, never with ==, in new code paths
"""

# Financial calculation precision (number of decimal places)
PRICE_DECIMALS = 2  # Cents

# Common financial values as float constants
ZERO = 0.0


def round_to(value: float, decimals: int) -> float:
    """Round value to the given number of decimals.

    Args:
        value: Value to round
        decimals: Number of decimal places

    Returns:
        Rounded value
    """
    return round(value, decimals)


def round_price(price: float) -> float:
    """Round price to cents.

    Args:
        price: Price value to round

    Returns:
        Rounded price as float
    """
    return round_to(price, PRICE_DECIMALS)


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp a value between minimum and maximum."""
    return min(max(value, minimum), maximum)


def percent_change(old_value: float, new_value: float) -> float:
    """Calculate fractional change between two values.

    Args:
        old_value: Previous value
        new_value: Current value

    Returns:
        Change as a fraction of the old value, 0 when old value is zero
    """
    if old_value == ZERO:
        return ZERO
    return (new_value - old_value) / old_value


def calculate_notional_value(shares: float, price: float) -> float:
    """Calculate trade value rounded to cents.

    Args:
        shares: Number of shares
        price: Price per share

    Returns:
        Notional value as float
    """
    return round_price(shares * price)


def safe_float_comparison(a: float, b: float, tolerance: float = 1e-9) -> bool:
    """Compare floats with tolerance for precision issues.

    Args:
        a: First float to compare
        b: Second float to compare
        tolerance: Acceptable difference (default: 1e-9)

    Returns:
        True if floats are equal within tolerance

    Examples:
        >>> safe_float_comparison(0.1 + 0.2, 0.3)
        True
        >>> safe_float_comparison(1000000.1, 1000000.2, 0.01)
        False
    """
    return abs(a - b) < tolerance
