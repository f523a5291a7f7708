"""
Custom exception hierarchy for the trading simulation.

Normal trading flow never raises: insufficient funds or shares leave an
order pending and order validation reports messages instead. These
exceptions signal programmer errors such as invalid configuration or
malformed value objects.
"""


class SimulationException(Exception):
    """Base exception for all simulation errors."""

    pass


class ValidationError(SimulationException):
    """Raised when input validation fails."""

    pass


class ConfigurationError(SimulationException):
    """Raised when configuration is invalid."""

    pass


class MarketError(SimulationException):
    """Raised when the market engine is set up incorrectly."""

    pass


class DuplicateTickerError(MarketError, ConfigurationError):
    """Raised when two assets in a registry share a ticker."""

    def __init__(self, ticker: str):
        self.ticker = ticker
        super().__init__(f"Duplicate ticker in asset registry: {ticker}")


class OrderError(SimulationException):
    """Raised when order objects are constructed incorrectly."""

    pass


class PortfolioError(SimulationException):
    """Raised when portfolio operations receive invalid input."""

    pass
