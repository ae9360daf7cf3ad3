"""Accuracy indicators computed from a forecast-vs-actual comparison."""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict
import logging
import sys

import numpy as np
from sklearn.metrics import mean_absolute_error, mean_squared_error

from openforecast.data.dataset import DataSet
from openforecast.utils.error_handling import IllegalArgumentError

logger = logging.getLogger(__name__)

_UNINITIALIZED_VALUE = -1.0
_DEFAULT_VALUE = sys.float_info.max


@dataclass(frozen=True)
class AccuracyIndicators:
    """Immutable snapshot of the six summary statistics of a model fit."""
    aic: float
    bias: float
    mad: float
    mape: float
    mse: float
    sae: float

    @classmethod
    def uninitialized(cls) -> "AccuracyIndicators":
        """All fields -1: the model was never trained."""
        v = _UNINITIALIZED_VALUE
        return cls(aic=v, bias=v, mad=v, mape=v, mse=v, sae=v)

    @classmethod
    def default(cls) -> "AccuracyIndicators":
        """All fields max-float: trained, indicators not computed yet."""
        v = _DEFAULT_VALUE
        return cls(aic=v, bias=v, mad=v, mape=v, mse=v, sae=v)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    def __str__(self) -> str:
        return (
            f"AIC={self.aic:f}, Bias={self.bias:f}, MAD={self.mad:f}, "
            f"MAPE={self.mape:f}, MSE={self.mse:f}, SAE={self.sae:f}"
        )


class IndicatorState(Enum):
    """Training state of a model as seen through its indicators."""
    UNINITIALIZED = "uninitialized"
    DEFAULT = "default"
    COMPUTED = "computed"


@dataclass(frozen=True)
class IndicatorStatus:
    """A model's indicator state together with the matching indicators."""
    state: IndicatorState
    indicators: AccuracyIndicators

    @classmethod
    def uninitialized(cls) -> "IndicatorStatus":
        return cls(IndicatorState.UNINITIALIZED, AccuracyIndicators.uninitialized())

    @classmethod
    def default(cls) -> "IndicatorStatus":
        return cls(IndicatorState.DEFAULT, AccuracyIndicators.default())

    @classmethod
    def computed(cls, indicators: AccuracyIndicators) -> "IndicatorStatus":
        return cls(IndicatorState.COMPUTED, indicators)

    @property
    def is_initialized(self) -> bool:
        return self.state is not IndicatorState.UNINITIALIZED


def compute_accuracy_indicators(
    actual: DataSet,
    forecast: DataSet,
    number_of_predictors: int,
) -> AccuracyIndicators:
    """
    Compare forecast values against actual values point by point.

    AIC  = n*ln(2*pi) + ln(SSE/n) + 2*(p+2)
    Bias = sum(err)/n, MAD = sum(|err|)/n, MAPE = sum(|err/actual|)/n,
    MSE  = SSE/n, SAE = sum(|err|), where err = forecast - actual.

    An actual value of exactly zero yields a non-finite MAPE rather than
    an error.

    Args:
        actual: Dataset holding the observed dependent values
        forecast: Dataset holding the forecast dependent values, aligned
            by index with ``actual``
        number_of_predictors: Number of predictors used by the model

    Returns:
        AccuracyIndicators for the comparison

    Raises:
        IllegalArgumentError: If the datasets differ in length, are empty
            or hold non-finite values
    """
    if len(actual) != len(forecast):
        raise IllegalArgumentError(
            f"Cannot compare {len(forecast)} forecast values against "
            f"{len(actual)} actual values"
        )
    if len(actual) == 0:
        raise IllegalArgumentError("Cannot compute accuracy indicators on an empty dataset")

    y_true = actual.dependent_values()
    y_pred = forecast.dependent_values()
    if not (np.all(np.isfinite(y_true)) and np.all(np.isfinite(y_pred))):
        raise IllegalArgumentError(
            "Cannot compute accuracy indicators on non-finite values (NaN or infinity)"
        )
    delta = y_pred - y_true

    n = float(len(delta))
    p = float(number_of_predictors)

    sum_err = float(np.sum(delta))
    sum_abs_err = float(np.sum(np.abs(delta)))
    sum_sq_err = float(np.sum(delta * delta))

    with np.errstate(divide="ignore", invalid="ignore"):
        sum_abs_percent_err = float(np.sum(np.abs(delta / y_true)))
        aic = float(n * np.log(2 * np.pi) + np.log(sum_sq_err / n) + 2 * (p + 2))

    if not np.isfinite(sum_abs_percent_err):
        logger.warning("MAPE is not finite: actual values contain zero")

    return AccuracyIndicators(
        aic=aic,
        bias=sum_err / n,
        mad=float(mean_absolute_error(y_true, y_pred)),
        mape=sum_abs_percent_err / n,
        mse=float(mean_squared_error(y_true, y_pred)),
        sae=sum_abs_err,
    )
