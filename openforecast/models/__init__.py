"""Model implementations for forecasting."""

from openforecast.models.base_model import TOLERANCE, ForecastingModel, ForecastingStrategy
from openforecast.models.time_based import TimeBasedEngine
from openforecast.models.weighted_moving_average import WeightedMovingAverageModel
from openforecast.models.moving_average import MovingAverageModel
from openforecast.models.factory import create_model, load_model_from_config

__all__ = [
    "TOLERANCE",
    "ForecastingModel",
    "ForecastingStrategy",
    "TimeBasedEngine",
    "WeightedMovingAverageModel",
    "MovingAverageModel",
    "create_model",
    "load_model_from_config",
]
