"""
Training and forecast-caching engine for models over a regular time grid.

The engine resolves the time variable, checks that observations are
evenly spaced, primes a cache of forecast values and computes accuracy
indicators over a hold-out suffix. Concrete models plug in through
ForecastingStrategy and read the engine's state (time step, bounds,
observed and cached values) from inside ``forecast_time``.
"""

import logging
import threading
from typing import List, Optional

import numpy as np

from openforecast.data.dataset import DataSet
from openforecast.data.observation import Observation
from openforecast.evaluation.metrics import AccuracyIndicators, IndicatorStatus
from openforecast.models.base_model import TOLERANCE, ForecastingModel, ForecastingStrategy
from openforecast.utils.error_handling import (
    IllegalArgumentError,
    InconsistentIntervalsError,
    NotFoundError,
    UnforecastableTimeError,
    UninitializedError,
    format_error_context,
)

logger = logging.getLogger(__name__)


class TimeBasedEngine:
    """
    State machine (untrained -> trained) behind every time-based model.

    Args:
        strategy: The concrete model supplying the single time point
            forecast and its minimum number of periods
    """

    def __init__(self, strategy: ForecastingStrategy):
        self.strategy = strategy
        self.model = ForecastingModel(self.forecast, strategy.number_of_predictors)

        self.time_variable: str = ""
        self.time_step: float = 0.0
        self.min_time_value: float = 0.0
        self.max_time_value: float = 0.0
        self.observed_values: Optional[DataSet] = None
        self.forecast_values: Optional[DataSet] = None
        self._observed_times = np.empty(0)
        self._forecast_times: List[float] = []
        # Guards forecast_values and max_time_value; re-entrant because
        # forecast_time calls back into get_forecast_value
        self._cache_lock = threading.RLock()

    @property
    def min_periods(self) -> int:
        return self.strategy.number_of_periods

    @property
    def is_trained(self) -> bool:
        return self.model.is_trained

    @property
    def cache_size(self) -> int:
        with self._cache_lock:
            return len(self.forecast_values) if self.forecast_values is not None else 0

    def train(self, dataset: DataSet) -> AccuracyIndicators:
        """
        Train on a dataset with a regular time grid.

        On failure the engine is restored to its state before the call,
        so a fresh model stays untrained.

        Args:
            dataset: Observations to train on; not modified

        Returns:
            Accuracy indicators over the hold-out suffix

        Raises:
            IllegalArgumentError: If the time variable is ambiguous, the
                dataset is shorter than the model's number of periods, or
                it holds non-finite or duplicate values
            InconsistentIntervalsError: If the time grid is irregular
        """
        snapshot = self._snapshot()
        logger.info(
            f"Training {self.strategy.model_type} on {len(dataset)} points"
        )
        try:
            indicators = self._train(dataset)
        except Exception as e:
            self._restore(snapshot)
            logger.warning(
                f"Training {self.strategy.model_type} failed: {e}",
                extra={"props": format_error_context(e)},
            )
            raise

        logger.info(f"Trained {self.strategy.model_type}: {indicators}")
        return indicators

    def _train(self, dataset: DataSet) -> AccuracyIndicators:
        time_variable = dataset.resolve_time_variable()
        if len(dataset) < self.min_periods:
            raise IllegalArgumentError(
                f"{self.strategy.model_type} needs at least {self.min_periods} "
                f"points to train, got {len(dataset)}"
            )
        if len(dataset) < 2:
            raise IllegalArgumentError(
                f"At least 2 points are needed to determine the time step, got {len(dataset)}"
            )

        observed = dataset.copy()
        observed.time_variable = time_variable
        try:
            observed.sort(time_variable)
        except NotFoundError as e:
            raise IllegalArgumentError(
                f"Every point needs a value for time variable '{time_variable}': {e}"
            ) from e
        times = np.array(
            [point.get_independent_value(time_variable) for point in observed]
        )
        values = observed.dependent_values()
        if not (np.all(np.isfinite(times)) and np.all(np.isfinite(values))):
            raise IllegalArgumentError(
                "Training data contains non-finite values (NaN or infinity)"
            )
        if times[1] - times[0] <= TOLERANCE:
            raise IllegalArgumentError(
                f"Duplicate time values found for '{time_variable}' at {times[0]}"
            )

        with self._cache_lock:
            self.model.status = IndicatorStatus.uninitialized()
            self.time_variable = time_variable
            self.observed_values = observed
            self._observed_times = times
            self.forecast_values = DataSet(time_variable, dataset.periods_per_year)
            self._forecast_times = []
            self.time_step = float(times[1] - times[0])
            self.min_time_value = float(times[0])
            self.max_time_value = float(times[1])

            logger.debug(
                f"Resolved time variable '{time_variable}' with step {self.time_step}"
            )

            for i in range(2, len(times)):
                step = float(times[i] - times[i - 1])
                if abs(self.time_step - step) > TOLERANCE:
                    raise InconsistentIntervalsError(
                        time_variable, self.time_step, step, float(times[i])
                    )
                self.init_forecast_value(float(times[i]))

            logger.debug(f"Primed forecast cache with {len(self.forecast_values)} values")

        holdout = observed.drop_first(self.min_periods)
        return self.model.calculate_accuracy_indicators(holdout)

    def forecast(self, point: Observation) -> float:
        """
        Forecast the dependent value of one observation.

        Raises:
            UninitializedError: If the model has not been trained
            IllegalArgumentError: If the point has no value for the time
                variable
            UnforecastableTimeError: If the time precedes the observed
                data or lies off the time grid
        """
        if not self.is_trained:
            raise UninitializedError()
        if not point.has_independent_value(self.time_variable):
            raise IllegalArgumentError(
                f"{point} has no value for time variable '{self.time_variable}'"
            )
        time_value = point.get_independent_value(self.time_variable)
        try:
            return self.get_forecast_value(time_value)
        except NotFoundError as e:
            raise UnforecastableTimeError(
                f"Cannot forecast {self.time_variable}={time_value}: {e}",
                time_value=time_value,
                variable=self.time_variable,
            ) from e

    def forecast_all(self, dataset: DataSet) -> DataSet:
        return self.model.forecast_all(dataset)

    def get_forecast_value(self, time_value: float) -> float:
        """
        Return the forecast at ``time_value``, computing and caching it on
        a miss.
        """
        with self._cache_lock:
            index = self._cache_index(time_value)
            if index is not None:
                return self.forecast_values[index].dependent_value

            logger.debug(f"Forecast cache miss for {self.time_variable}={time_value}")
            self._fill_history(time_value)
            return self.init_forecast_value(time_value)

    def init_forecast_value(self, time_value: float) -> float:
        """
        Compute the forecast at ``time_value`` and append it to the cache.

        Cache entries are kept in computation order, not time order.
        """
        with self._cache_lock:
            value = self.strategy.forecast_time(time_value)
            self.forecast_values.add(
                Observation(value, {self.time_variable: time_value})
            )
            self._forecast_times.append(time_value)
            if time_value > self.max_time_value:
                self.max_time_value = time_value
            return value

    def _cache_index(self, time_value: float) -> Optional[int]:
        if not (
            self.min_time_value - TOLERANCE <= time_value
            <= self.max_time_value + TOLERANCE
        ):
            return None
        matches = np.flatnonzero(
            np.abs(np.asarray(self._forecast_times) - time_value) <= TOLERANCE
        )
        return int(matches[0]) if len(matches) else None

    def _is_known(self, time_value: float) -> bool:
        if self._cache_index(time_value) is not None:
            return True
        return bool(np.any(np.abs(self._observed_times - time_value) <= TOLERANCE))

    def _fill_history(self, time_value: float) -> None:
        """
        Compute the missing forecasts one step apart behind ``time_value``,
        oldest first.

        A window forecast then finds every earlier value already cached,
        so reaching a time far past the data takes a loop rather than one
        nested call per step.
        """
        pending = []
        t = time_value - self.time_step
        while t >= self.min_time_value - TOLERANCE:
            # Nothing past max_time_value is cached or observed yet
            if t <= self.max_time_value + TOLERANCE and self._is_known(t):
                break
            pending.append(t)
            t -= self.time_step

        if pending:
            logger.debug(
                f"Computing {len(pending)} forecasts behind {self.time_variable}={time_value}"
            )
        for t in reversed(pending):
            self.init_forecast_value(t)

    def get_observed_value(self, time_value: float) -> float:
        """
        Return the observed dependent value at ``time_value``.

        Raises:
            NotFoundError: If no observation lies within tolerance of
                ``time_value``
        """
        if self.observed_values is not None and len(self._observed_times):
            matches = np.flatnonzero(np.abs(self._observed_times - time_value) <= TOLERANCE)
            if len(matches):
                return self.observed_values[int(matches[0])].dependent_value
        raise NotFoundError(
            f"No observed value for {self.time_variable}={time_value}",
            time_value=time_value,
            variable=self.time_variable,
        )

    def _snapshot(self) -> tuple:
        return (
            self.model.status,
            self.time_variable,
            self.time_step,
            self.min_time_value,
            self.max_time_value,
            self.observed_values,
            self.forecast_values,
            self._forecast_times,
            self._observed_times,
        )

    def _restore(self, snapshot: tuple) -> None:
        with self._cache_lock:
            (
                self.model.status,
                self.time_variable,
                self.time_step,
                self.min_time_value,
                self.max_time_value,
                self.observed_values,
                self.forecast_values,
                self._forecast_times,
                self._observed_times,
            ) = snapshot
