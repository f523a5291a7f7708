"""
Unit tests for custom exceptions.
Testing the exception hierarchy and its attributes.
"""

import pytest

from src.core.exceptions.simulation import (
    ConfigurationError,
    DuplicateTickerError,
    MarketError,
    OrderError,
    PortfolioError,
    SimulationException,
    ValidationError,
)


class TestSimulationException:
    """Tests for SimulationException base class."""

    def test_should_create_base_exception_with_message(self) -> None:
        """Test creating base exception with message."""
        exc = SimulationException("Test error message")
        assert str(exc) == "Test error message"
        assert isinstance(exc, Exception)

    @pytest.mark.parametrize(
        "exc_class", [ValidationError, ConfigurationError, MarketError, OrderError, PortfolioError]
    )
    def test_should_derive_from_base_exception(self, exc_class: type[Exception]) -> None:
        """Test every simulation error can be caught as SimulationException."""
        exc = exc_class("boom")
        assert isinstance(exc, SimulationException)
        assert str(exc) == "boom"


class TestDuplicateTickerError:
    """Tests for DuplicateTickerError."""

    def test_should_carry_ticker_and_message(self) -> None:
        """Test ticker attribute and formatted message."""
        exc = DuplicateTickerError("ZAP")

        assert exc.ticker == "ZAP"
        assert "Duplicate ticker" in str(exc)
        assert "ZAP" in str(exc)

    def test_should_be_market_and_configuration_error(self) -> None:
        """Test it can be caught as either parent."""
        exc = DuplicateTickerError("ZAP")

        assert isinstance(exc, MarketError)
        assert isinstance(exc, ConfigurationError)

    def test_should_be_catchable_as_configuration_error(self) -> None:
        """Test raising and catching via the configuration parent."""
        with pytest.raises(ConfigurationError):
            raise DuplicateTickerError("BURG")
