"""
Simple moving average model.
"""

import numbers

from openforecast.models.weighted_moving_average import WeightedMovingAverageModel
from openforecast.utils.error_handling import IllegalArgumentError


class MovingAverageModel(WeightedMovingAverageModel):
    """Weighted moving average with equal weights of 1/period."""

    def __init__(self, period: int):
        if isinstance(period, bool) or not isinstance(period, numbers.Integral):
            raise IllegalArgumentError(f"Period must be an integer, got {period!r}")
        if period < 1:
            raise IllegalArgumentError(f"Period must be at least 1, got {period}")
        period = int(period)
        super().__init__([1.0 / period] * period)

    @property
    def model_type(self) -> str:
        return "Moving average"

    @property
    def period(self) -> int:
        return self.number_of_periods

    def __repr__(self) -> str:
        return f"MovingAverageModel(period={self.period}, trained={self.is_trained})"
