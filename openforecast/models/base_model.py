"""Base forecasting capability shared by every model."""

from abc import ABC, abstractmethod
from typing import Callable
import logging

from openforecast.data.dataset import DataSet
from openforecast.data.observation import Observation
from openforecast.evaluation.metrics import (
    AccuracyIndicators,
    IndicatorStatus,
    compute_accuracy_indicators,
)
from openforecast.utils.error_handling import PointForecastError, UninitializedError

logger = logging.getLogger(__name__)

# Maximum difference between two time values still treated as equal
TOLERANCE = 1.0e-8


class ForecastingStrategy(ABC):
    """
    Capabilities a concrete model supplies to the time-based engine.
    """

    @property
    @abstractmethod
    def model_type(self) -> str:
        """Return the human-readable model type."""
        pass

    @property
    @abstractmethod
    def number_of_predictors(self) -> int:
        """Return the number of predictors used by the model."""
        pass

    @property
    @abstractmethod
    def number_of_periods(self) -> int:
        """Return the minimum number of periods needed before forecasting."""
        pass

    @abstractmethod
    def forecast_time(self, time_value: float) -> float:
        """
        Forecast the dependent value at a single time point.

        Args:
            time_value: Value of the time variable to forecast

        Returns:
            Forecast dependent value
        """
        pass


class ForecastingModel:
    """
    Holds a model's accuracy indicators and provides batch forecasting.

    Args:
        point_forecaster: Forecasts the dependent value of one observation
        number_of_predictors: Number of predictors the model uses, needed
            for the AIC
    """

    def __init__(
        self,
        point_forecaster: Callable[[Observation], float],
        number_of_predictors: int,
    ):
        self._point_forecaster = point_forecaster
        self.number_of_predictors = number_of_predictors
        self.status: IndicatorStatus = IndicatorStatus.uninitialized()

    @property
    def is_trained(self) -> bool:
        return self.status.is_initialized

    @property
    def accuracy_indicators(self) -> AccuracyIndicators:
        return self.status.indicators

    @property
    def aic(self) -> float:
        return self.status.indicators.aic

    @property
    def bias(self) -> float:
        return self.status.indicators.bias

    @property
    def mad(self) -> float:
        return self.status.indicators.mad

    @property
    def mape(self) -> float:
        return self.status.indicators.mape

    @property
    def mse(self) -> float:
        return self.status.indicators.mse

    @property
    def sae(self) -> float:
        return self.status.indicators.sae

    def forecast_all(self, dataset: DataSet) -> DataSet:
        """
        Forecast every point of a dataset.

        The input is not modified; a forecast copy is returned.

        Raises:
            UninitializedError: If the model has not been trained
            PointForecastError: If any single point cannot be forecast
        """
        if not self.is_trained:
            raise UninitializedError()

        result = dataset.copy()
        for point in result:
            try:
                value = self._point_forecaster(point)
            except Exception as e:
                raise PointForecastError(point, e) from e
            point.dependent_value = value
        return result

    def calculate_accuracy_indicators(self, dataset: DataSet) -> AccuracyIndicators:
        """
        Forecast ``dataset`` and publish indicators comparing it to the
        recorded values.

        Returns:
            The published indicators
        """
        self.status = IndicatorStatus.default()
        forecast = self.forecast_all(dataset)
        indicators = compute_accuracy_indicators(
            dataset, forecast, self.number_of_predictors
        )
        self.status = IndicatorStatus.computed(indicators)
        return indicators
