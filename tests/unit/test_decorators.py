"""
Unit tests for utility decorators.
Testing input validation and operation logging.
"""
# ruff: noqa: ARG001

from collections.abc import Iterator

import pytest
from loguru import logger

from src.core.exceptions.simulation import ValidationError
from src.core.utils.decorators import log_operation, validate_inputs


@pytest.fixture
def log_records() -> Iterator[list[dict]]:
    """Capture loguru records emitted during a test."""
    records: list[dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


class TestValidateInputsDecorator:
    """Test suite for @validate_inputs decorator."""

    def test_should_validate_ticker_parameter(self) -> None:
        """Test that ticker must be a non-empty string."""

        @validate_inputs
        def test_function(ticker: str, shares: float) -> bool:
            return True

        assert test_function("ZAP", 1.0) is True

        with pytest.raises(ValidationError, match="Invalid ticker"):
            test_function(42, 1.0)  # type: ignore[arg-type]

        with pytest.raises(ValidationError, match="ticker must not be empty"):
            test_function("", 1.0)

    def test_should_validate_shares_parameter(self) -> None:
        """Test that shares must be positive."""

        @validate_inputs
        def test_function(ticker: str, shares: float) -> bool:
            return True

        with pytest.raises(ValidationError, match="shares must be positive"):
            test_function("ZAP", 0.0)

        with pytest.raises(ValidationError, match="shares must be positive"):
            test_function("ZAP", -1.0)

    def test_should_validate_price_parameters(self) -> None:
        """Test that per-share amounts must be positive."""

        @validate_inputs
        def test_function(ticker: str, cost_per_share: float, per_share_amount: float) -> bool:
            return True

        assert test_function("ZAP", 10.0, 0.5) is True

        with pytest.raises(ValidationError, match="cost_per_share must be positive"):
            test_function("ZAP", 0.0, 0.5)

        with pytest.raises(ValidationError, match="per_share_amount must be positive"):
            test_function("ZAP", 10.0, -0.5)

    def test_should_skip_none_values(self) -> None:
        """Test that None values are skipped in validation."""

        @validate_inputs
        def test_function(ticker: str | None = None, shares: float | None = None) -> bool:
            return True

        assert test_function() is True

    def test_should_ignore_unrelated_parameters(self) -> None:
        """Test that parameters outside the known set are not checked."""

        @validate_inputs
        def test_function(ticker: str, turn: int) -> int:
            return turn

        assert test_function("ZAP", -5) == -5

    def test_should_preserve_function_metadata(self) -> None:
        """Test that decorator preserves function metadata."""

        @validate_inputs
        def original_function(ticker: str, shares: float) -> bool:
            """Original function docstring."""
            return True

        assert original_function.__name__ == "original_function"
        assert (
            original_function.__doc__ is not None
            and "Original function docstring" in original_function.__doc__
        )


class TestLogOperationDecorator:
    """Test suite for @log_operation decorator."""

    def test_should_log_start_and_completion(self, log_records: list[dict]) -> None:
        """Test that a successful call logs start and completion with context."""

        @log_operation
        def test_function(ticker: str, quantity: float) -> str:
            return "done"

        # Act
        result = test_function("ZAP", 5.0)

        # Assert
        assert result == "done"
        messages = [record["message"] for record in log_records]
        assert any("Operation started" in message for message in messages)
        assert any("Operation completed" in message for message in messages)

        completed = next(r for r in log_records if "Operation completed" in r["message"])
        assert completed["extra"]["success"] is True
        assert completed["extra"]["ticker"] == "ZAP"
        assert completed["extra"]["quantity"] == 5.0
        assert "correlation_id" in completed["extra"]
        assert "execution_time_ms" in completed["extra"]

    def test_should_log_and_reraise_errors(self, log_records: list[dict]) -> None:
        """Test that failures are logged at error level and propagated."""

        @log_operation
        def test_function(ticker: str) -> None:
            raise ValueError("bad things")

        with pytest.raises(ValueError, match="bad things"):
            test_function("ZAP")

        failed = next(r for r in log_records if "Operation failed" in r["message"])
        assert failed["level"].name == "ERROR"
        assert failed["extra"]["success"] is False
        assert failed["extra"]["error_type"] == "ValueError"

    def test_should_preserve_function_metadata(self) -> None:
        """Test that decorator preserves function metadata."""

        @log_operation
        def original_function() -> None:
            """Logged docstring."""

        assert original_function.__name__ == "original_function"
        assert original_function.__doc__ == "Logged docstring."
