"""Utility functions for logging, configuration and error handling."""

from openforecast.utils.error_handling import (
    ForecastingError,
    IllegalArgumentError,
    InconsistentIntervalsError,
    NotFoundError,
    PointForecastError,
    UnforecastableTimeError,
    UninitializedError,
)

__all__ = [
    "ForecastingError",
    "IllegalArgumentError",
    "InconsistentIntervalsError",
    "NotFoundError",
    "PointForecastError",
    "UnforecastableTimeError",
    "UninitializedError",
]
