"""
Utility decorators for input validation and operation logging.
"""

import functools
import inspect
import time
import uuid
from collections.abc import Callable
from typing import Any, TypeVar

from loguru import logger

from src.core.exceptions.simulation import ValidationError
from src.core.utils.validation import validate_positive, validate_ticker

F = TypeVar("F", bound=Callable[..., Any])

_NUMERIC_PARAMS = ("shares", "quantity", "price", "cost_per_share", "per_share_amount")
_CONTEXT_PARAMS = ("ticker", "shares", "quantity", "price", "current_turn", "fee")


def _validate_simulation_parameter(param_name: str, value: Any, bound_args: Any) -> None:
    """Validate a single simulation parameter."""
    if value is None:
        return

    if param_name == "ticker":
        try:
            bound_args.arguments[param_name] = validate_ticker(value)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid {param_name}: {e}") from e

    elif param_name in _NUMERIC_PARAMS:
        try:
            bound_args.arguments[param_name] = validate_positive(value, param_name)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid {param_name}: {e}") from e


def _process_function_arguments(
    func: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]
) -> Any:
    """Process and validate function arguments."""
    sig = inspect.signature(func)
    bound_args = sig.bind(*args, **kwargs)
    bound_args.apply_defaults()

    for param_name, value in bound_args.arguments.items():
        if param_name != "self":
            _validate_simulation_parameter(param_name, value, bound_args)

    return func(*bound_args.args, **bound_args.kwargs)


def validate_inputs(func: F) -> F:
    """Decorator to validate simulation inputs (ticker, shares, price, amounts)."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return _process_function_arguments(func, args, kwargs)

    return wrapper  # type: ignore


def _serialize_parameter_value(value: Any) -> Any:
    """Serialize parameter value for logging."""
    if hasattr(value, "value") and hasattr(value, "name"):
        return str(value.value)  # Handle enum values
    if isinstance(value, bool | int | float | str):
        return value
    return type(value).__name__


def _extract_operation_context(bound_args: Any) -> dict[str, Any]:
    """Extract loggable context from function arguments."""
    context = {}
    for param_name, value in bound_args.arguments.items():
        if param_name in _CONTEXT_PARAMS:
            context[param_name] = _serialize_parameter_value(value)
    return context


def _setup_logging_context(
    func: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]
) -> dict[str, Any]:
    """Setup logging context for a simulation operation."""
    sig = inspect.signature(func)
    bound_args = sig.bind(*args, **kwargs)
    bound_args.apply_defaults()

    return {
        "correlation_id": str(uuid.uuid4())[:8],
        "operation": func.__qualname__,
        **_extract_operation_context(bound_args),
    }


def log_operation(func: F) -> F:
    """Decorator to log simulation operations with correlation IDs and timing."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        context = _setup_logging_context(func, args, kwargs)
        bound_logger = logger.bind(**context)
        bound_logger.debug(f"Operation started: {context['operation']}")
        start_time = time.perf_counter()

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            execution_time_ms = round((time.perf_counter() - start_time) * 1000, 2)
            bound_logger.bind(
                success=False,
                execution_time_ms=execution_time_ms,
                error_type=type(e).__name__,
            ).error(f"Operation failed: {context['operation']}: {e}")
            raise

        execution_time_ms = round((time.perf_counter() - start_time) * 1000, 2)
        bound_logger.bind(success=True, execution_time_ms=execution_time_ms).debug(
            f"Operation completed: {context['operation']}"
        )
        return result

    return wrapper  # type: ignore
