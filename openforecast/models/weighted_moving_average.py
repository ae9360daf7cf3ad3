"""
Weighted moving average model.
"""

from typing import Optional, Sequence, Tuple
import logging
import math

from openforecast.data.dataset import DataSet
from openforecast.data.observation import Observation
from openforecast.evaluation.metrics import AccuracyIndicators
from openforecast.models.base_model import TOLERANCE, ForecastingStrategy
from openforecast.models.time_based import TimeBasedEngine
from openforecast.utils.error_handling import IllegalArgumentError, NotFoundError

logger = logging.getLogger(__name__)


class WeightedMovingAverageModel(ForecastingStrategy):
    """
    Forecasts a time point as the weighted sum of the values in the
    preceding window.

    The last weight applies to the most recent period. Weights that do not
    sum to 1 are rescaled by their sum.

    Args:
        weights: Positive weights, one per period of the window
    """

    def __init__(self, weights: Sequence[float]):
        self._weights = self._normalize_weights(weights)
        self._engine = TimeBasedEngine(self)

    @staticmethod
    def _normalize_weights(weights: Sequence[float]) -> Tuple[float, ...]:
        try:
            weights = [float(w) for w in weights]
        except (TypeError, ValueError) as e:
            raise IllegalArgumentError(f"Weights must be numbers: {e}") from e
        if not weights:
            raise IllegalArgumentError("At least one weight is required")
        if any(not math.isfinite(w) or w <= 0 for w in weights):
            raise IllegalArgumentError(f"Weights must be positive, got {weights}")

        total = sum(weights)
        if abs(total - 1.0) > TOLERANCE:
            logger.debug(f"Normalizing weights {weights} by their sum {total}")
            return tuple(w / total for w in weights)
        return tuple(weights)

    @property
    def model_type(self) -> str:
        return "Weighted Moving Average"

    @property
    def number_of_predictors(self) -> int:
        return 1

    @property
    def number_of_periods(self) -> int:
        return len(self._weights)

    @property
    def weights(self) -> Tuple[float, ...]:
        return self._weights

    @property
    def engine(self) -> TimeBasedEngine:
        return self._engine

    def forecast_time(self, time_value: float) -> float:
        engine = self._engine
        periods = self.number_of_periods
        step = engine.time_step

        # Not enough history before this point for a full window
        if time_value - step * periods < engine.min_time_value - TOLERANCE:
            return engine.get_observed_value(time_value)

        forecast = 0.0
        for p in range(periods - 1, -1, -1):
            time_value -= step
            try:
                value = engine.get_observed_value(time_value)
            except NotFoundError:
                value = engine.get_forecast_value(time_value)
            forecast += self._weights[p] * value

        return forecast

    # Caller-facing surface, delegated to the engine

    def train(self, dataset: DataSet) -> AccuracyIndicators:
        """
        Train the model.

        Args:
            dataset: Observations on a regular time grid

        Returns:
            Accuracy indicators over the hold-out suffix
        """
        return self._engine.train(dataset)

    def forecast(self, point: Observation) -> float:
        """Forecast the dependent value of a single observation."""
        return self._engine.forecast(point)

    def forecast_all(self, dataset: DataSet) -> DataSet:
        """Return a copy of ``dataset`` with every dependent value forecast."""
        return self._engine.forecast_all(dataset)

    @property
    def is_trained(self) -> bool:
        return self._engine.is_trained

    @property
    def time_variable(self) -> Optional[str]:
        return self._engine.time_variable or None

    @property
    def time_interval(self) -> float:
        return self._engine.time_step

    @property
    def accuracy_indicators(self) -> AccuracyIndicators:
        return self._engine.model.accuracy_indicators

    @property
    def aic(self) -> float:
        return self._engine.model.aic

    @property
    def bias(self) -> float:
        return self._engine.model.bias

    @property
    def mad(self) -> float:
        return self._engine.model.mad

    @property
    def mape(self) -> float:
        return self._engine.model.mape

    @property
    def mse(self) -> float:
        return self._engine.model.mse

    @property
    def sae(self) -> float:
        return self._engine.model.sae

    def __repr__(self) -> str:
        weights = ", ".join(f"{w:g}" for w in self._weights)
        return f"{self.__class__.__name__}(weights=[{weights}], trained={self.is_trained})"
