"""Accuracy indicators and model comparison."""

from openforecast.evaluation.metrics import (
    AccuracyIndicators,
    IndicatorState,
    IndicatorStatus,
    compute_accuracy_indicators,
)
from openforecast.evaluation.comparison import ModelComparator

__all__ = [
    "AccuracyIndicators",
    "IndicatorState",
    "IndicatorStatus",
    "compute_accuracy_indicators",
    "ModelComparator",
]
