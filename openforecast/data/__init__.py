"""Observation and dataset containers."""

from .observation import Observation, SynchronizedValues
from .dataset import DataSet

__all__ = [
    "Observation",
    "SynchronizedValues",
    "DataSet",
]
