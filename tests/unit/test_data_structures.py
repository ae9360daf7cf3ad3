"""Unit tests for observations and datasets."""

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pandas as pd
import pytest

from openforecast.data import DataSet, Observation, SynchronizedValues
from openforecast.utils.error_handling import IllegalArgumentError, NotFoundError


class TestObservation:
    """Tests for Observation."""

    def test_independent_value_roundtrip(self):
        point = Observation(5.0, {"time": 3.0})
        point.set_independent_value("price", 9.5)
        assert point.get_independent_value("time") == 3.0
        assert point.get_independent_value("price") == 9.5
        assert point.independent_variable_names() == ["price", "time"]

    def test_missing_independent_value_raises(self):
        point = Observation(5.0, {"time": 3.0})
        with pytest.raises(NotFoundError):
            point.get_independent_value("price")

    def test_copy_is_not_aliased(self):
        point = Observation(5.0, {"time": 3.0})
        clone = point.copy()
        clone.set_independent_value("time", 99.0)
        clone.dependent_value = 1.0
        assert point.get_independent_value("time") == 3.0
        assert point.dependent_value == 5.0

    def test_equality(self):
        assert Observation(1.0, {"t": 2.0}) == Observation(1.0, {"t": 2.0})
        assert Observation(1.0, {"t": 2.0}) != Observation(1.0, {"t": 3.0})

    def test_repr_names_values(self):
        assert repr(Observation(1.5, {"t": 2.0})) == "Observation(dependent=1.5, t=2.0)"


class TestSynchronizedValues:
    """Tests for the thread-safe value container."""

    def test_concurrent_writes_are_all_kept(self):
        values = SynchronizedValues()

        def write(i):
            values.set(f"v{i}", i)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(write, range(500)))

        assert len(values) == 500
        assert values.get("v499") == 499.0

    def test_items_is_a_snapshot(self):
        values = SynchronizedValues({"a": 1.0})
        snapshot = values.items()
        values.set("b", 2.0)
        assert snapshot == [("a", 1.0)]


class TestDataSet:
    """Tests for DataSet."""

    def test_copy_is_deep(self, linear_dataset):
        clone = linear_dataset.copy()
        clone[0].dependent_value = -1.0
        clone[0].set_independent_value("t", -1.0)
        assert linear_dataset[0].dependent_value == 1.0
        assert linear_dataset[0].get_independent_value("t") == 0.0

    def test_sort_ascending(self, shuffled_dataset):
        shuffled_dataset.sort("t")
        times = [p.get_independent_value("t") for p in shuffled_dataset]
        assert times == sorted(times)

    def test_resolve_declared_time_variable(self):
        data = DataSet.from_records([(1.0, {"t": 0.0, "x": 1.0})], time_variable="t")
        assert data.resolve_time_variable() == "t"

    def test_resolve_single_independent_variable(self, shuffled_dataset):
        assert shuffled_dataset.resolve_time_variable() == "t"

    def test_resolve_ambiguous_time_variable_raises(self):
        data = DataSet.from_records([(1.0, {"t": 0.0}), (2.0, {"x": 1.0})])
        with pytest.raises(IllegalArgumentError, match="time variable"):
            data.resolve_time_variable()

    def test_drop_first(self, linear_dataset):
        suffix = linear_dataset.drop_first(3)
        assert len(suffix) == 7
        assert suffix[0].dependent_value == 4.0
        assert len(linear_dataset) == 10

    def test_dependent_values(self, linear_dataset):
        np.testing.assert_array_equal(
            linear_dataset.dependent_values(), np.arange(1, 11, dtype=float)
        )

    def test_from_dataframe(self, sample_timeseries_df):
        data = DataSet.from_dataframe(sample_timeseries_df, "sales", periods_per_year=12)
        assert len(data) == 36
        assert data.periods_per_year == 12
        assert data.independent_variables() == ["period"]
        assert data[5].get_independent_value("period") == 5.0
        assert data[5].dependent_value == pytest.approx(sample_timeseries_df["sales"].iloc[5])

    def test_from_dataframe_missing_column_raises(self, sample_timeseries_df):
        with pytest.raises(IllegalArgumentError, match="revenue"):
            DataSet.from_dataframe(sample_timeseries_df, "revenue")

    def test_to_dataframe(self, linear_dataset):
        df = linear_dataset.to_dataframe()
        assert list(df.columns) == ["t", "dependent"]
        assert len(df) == 10
        pd.testing.assert_series_equal(
            df["dependent"], pd.Series(np.arange(1, 11, dtype=float), name="dependent")
        )
