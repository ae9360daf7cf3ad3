"""Unit tests for accuracy indicators."""

import math
import sys

import numpy as np
import pytest

from openforecast.data import DataSet
from openforecast.evaluation.metrics import (
    AccuracyIndicators,
    IndicatorState,
    IndicatorStatus,
    compute_accuracy_indicators,
)
from openforecast.utils.error_handling import IllegalArgumentError


def _series(values):
    return DataSet.from_records(
        [(v, {"t": float(i)}) for i, v in enumerate(values)], time_variable="t"
    )


class TestAccuracyIndicators:
    """Tests for the indicator value object and its sentinels."""

    def test_uninitialized_sentinel(self):
        indicators = AccuracyIndicators.uninitialized()
        assert indicators.to_dict() == {
            "aic": -1.0, "bias": -1.0, "mad": -1.0,
            "mape": -1.0, "mse": -1.0, "sae": -1.0,
        }

    def test_default_placeholder(self):
        indicators = AccuracyIndicators.default()
        assert all(v == sys.float_info.max for v in indicators.to_dict().values())

    def test_is_immutable(self):
        indicators = AccuracyIndicators.uninitialized()
        with pytest.raises(AttributeError):
            indicators.aic = 0.0

    def test_str(self):
        text = str(AccuracyIndicators(1, 2, 3, 4, 5, 6))
        assert text == (
            "AIC=1.000000, Bias=2.000000, MAD=3.000000, "
            "MAPE=4.000000, MSE=5.000000, SAE=6.000000"
        )

    def test_status_states(self):
        assert not IndicatorStatus.uninitialized().is_initialized
        assert IndicatorStatus.default().state is IndicatorState.DEFAULT
        computed = IndicatorStatus.computed(AccuracyIndicators(0, 0, 0, 0, 0, 0))
        assert computed.is_initialized
        assert computed.state is IndicatorState.COMPUTED


class TestComputeAccuracyIndicators:
    """Tests for compute_accuracy_indicators."""

    def test_reference_example(self):
        actual = _series([10.0, 10.0, 10.0])
        forecast = _series([11.0, 9.0, 10.0])

        result = compute_accuracy_indicators(actual, forecast, 1)

        assert result.bias == pytest.approx(0.0)
        assert result.mad == pytest.approx(2 / 3)
        assert result.mse == pytest.approx(2 / 3)
        assert result.sae == pytest.approx(2.0)
        assert result.mape == pytest.approx(0.2 / 3)
        expected_aic = 3 * math.log(2 * math.pi) + math.log(2 / 3) + 2 * 3
        assert result.aic == pytest.approx(expected_aic)

    def test_bias_sign_follows_forecast_minus_actual(self):
        result = compute_accuracy_indicators(_series([1.0, 2.0]), _series([2.0, 3.0]), 1)
        assert result.bias == pytest.approx(1.0)

    def test_length_mismatch_raises(self):
        with pytest.raises(IllegalArgumentError):
            compute_accuracy_indicators(_series([1.0, 2.0]), _series([1.0]), 1)

    def test_empty_raises(self):
        with pytest.raises(IllegalArgumentError):
            compute_accuracy_indicators(_series([]), _series([]), 1)

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), -float("inf")])
    def test_non_finite_values_raise(self, bad):
        with pytest.raises(IllegalArgumentError, match="non-finite"):
            compute_accuracy_indicators(_series([1.0, bad]), _series([1.0, 2.0]), 1)
        with pytest.raises(IllegalArgumentError, match="non-finite"):
            compute_accuracy_indicators(_series([1.0, 2.0]), _series([bad, 2.0]), 1)

    def test_zero_actual_gives_non_finite_mape(self):
        result = compute_accuracy_indicators(_series([0.0, 2.0]), _series([1.0, 2.0]), 1)
        assert np.isinf(result.mape)
        assert result.mad == pytest.approx(0.5)

    def test_perfect_forecast_has_negative_infinite_aic(self):
        result = compute_accuracy_indicators(_series([1.0, 2.0]), _series([1.0, 2.0]), 1)
        assert result.mse == 0.0
        assert result.aic == -math.inf
