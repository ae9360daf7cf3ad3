"""Time-series forecasting with moving average models."""

from openforecast.data import DataSet, Observation
from openforecast.evaluation import AccuracyIndicators, ModelComparator
from openforecast.models import MovingAverageModel, WeightedMovingAverageModel

__version__ = "0.1.0"

__all__ = [
    "DataSet",
    "Observation",
    "AccuracyIndicators",
    "ModelComparator",
    "MovingAverageModel",
    "WeightedMovingAverageModel",
]
