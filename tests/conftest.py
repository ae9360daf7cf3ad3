"""Pytest configuration and shared fixtures."""

import logging

import pytest
import pandas as pd
import numpy as np

from openforecast.data import DataSet


@pytest.fixture
def linear_dataset():
    """Ten points on a unit time grid with values 1..10."""
    return DataSet.from_records(
        [(float(i + 1), {"t": float(i)}) for i in range(10)],
        time_variable="t",
    )


@pytest.fixture
def shuffled_dataset():
    """The linear series with points out of time order and no declared time variable."""
    order = [4, 0, 9, 2, 7, 1, 8, 3, 6, 5]
    return DataSet.from_records([(float(i + 1), {"t": float(i)}) for i in order])


@pytest.fixture
def irregular_dataset():
    """Regular grid of step 1 with one gap of 2 between t=4 and t=6."""
    times = [0, 1, 2, 3, 4, 6, 7, 8]
    return DataSet.from_records(
        [(10.0 + i, {"t": float(t)}) for i, t in enumerate(times)],
        time_variable="t",
    )


@pytest.fixture
def sample_timeseries_df():
    """Monthly series as a DataFrame with a numeric period column."""
    np.random.seed(42)
    n = 36
    return pd.DataFrame({
        "period": np.arange(n, dtype=float),
        "sales": 100 + np.arange(n) * 2.0 + np.random.uniform(-5, 5, n),
    })


@pytest.fixture
def restore_root_logging():
    """Restore root logger handlers and level after a test reconfigures them."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
