"""Error types and error-context helpers for the forecasting toolkit."""

from typing import Any, Dict, Optional


class ForecastingError(Exception):
    """Base class for all errors raised by the toolkit."""


class UninitializedError(ForecastingError):
    """Raised when an operation requires a trained model."""

    def __init__(self, message: str = "Model has not been trained"):
        super().__init__(message)


class IllegalArgumentError(ForecastingError, ValueError):
    """Raised for malformed input (ambiguous time variable, short dataset, ...)."""


class NotFoundError(ForecastingError, LookupError):
    """
    Raised when no observed value exists for a time point.

    Concrete models treat this as a fallback signal rather than a failure.
    """

    def __init__(
        self,
        message: str,
        time_value: Optional[float] = None,
        variable: Optional[str] = None,
    ):
        super().__init__(message)
        self.time_value = time_value
        self.variable = variable


class InconsistentIntervalsError(IllegalArgumentError):
    """Raised when training data is not on a regular time grid."""

    def __init__(
        self,
        variable: str,
        expected_step: float,
        actual_step: float,
        time_value: float,
    ):
        super().__init__(
            f"Inconsistent intervals found in time series, using variable "
            f"'{variable}': expected step {expected_step}, found {actual_step} "
            f"ending at {variable}={time_value}"
        )
        self.variable = variable
        self.expected_step = expected_step
        self.actual_step = actual_step
        self.time_value = time_value


class UnforecastableTimeError(IllegalArgumentError):
    """
    Raised when a queried time cannot be forecast, e.g. it precedes the
    first observation or lies off the time grid.
    """

    def __init__(self, message: str, time_value: float, variable: str):
        super().__init__(message)
        self.time_value = time_value
        self.variable = variable


class PointForecastError(ForecastingError):
    """Raised by batch forecasting when a single point cannot be forecast."""

    def __init__(self, point: Any, cause: Exception):
        super().__init__(f"Failed to forecast {point}: {cause}")
        self.point = point
        self.cause = cause


_CONTEXT_ATTRIBUTES = (
    "variable",
    "time_value",
    "expected_step",
    "actual_step",
    "point",
)


def format_error_context(exc: BaseException) -> Dict[str, Any]:
    """
    Build a loggable dictionary describing an exception.

    Args:
        exc: Exception to describe

    Returns:
        Dictionary with the exception type, message and any diagnostic
        attributes it carries
    """
    context: Dict[str, Any] = {
        "type": type(exc).__name__,
        "message": str(exc),
    }
    for attr in _CONTEXT_ATTRIBUTES:
        value = getattr(exc, attr, None)
        if value is not None:
            context[attr] = value if isinstance(value, (int, float, str)) else str(value)
    return context
