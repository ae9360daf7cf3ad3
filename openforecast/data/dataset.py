"""Ordered collections of observations with time-axis metadata."""

from typing import Any, Iterable, Iterator, List, Mapping, Optional, Tuple, Union
import logging

import numpy as np
import pandas as pd

from openforecast.data.observation import Observation
from openforecast.utils.error_handling import IllegalArgumentError

logger = logging.getLogger(__name__)

DEPENDENT_COLUMN = "dependent"


class DataSet:
    """
    Ordered sequence of observations.

    Attributes:
        time_variable: Name of the independent variable used as the time
            axis; empty means "infer from the data"
        periods_per_year: Number of periods that make up one year
    """

    def __init__(
        self,
        time_variable: str = "",
        periods_per_year: int = 0,
        points: Optional[Iterable[Observation]] = None,
    ):
        self.time_variable = time_variable or ""
        self.periods_per_year = int(periods_per_year)
        self._points: List[Observation] = list(points) if points is not None else []

    @classmethod
    def from_records(
        cls,
        records: Iterable[Tuple[float, Mapping[str, float]]],
        time_variable: str = "",
        periods_per_year: int = 0,
    ) -> "DataSet":
        """
        Build a dataset from (dependent value, {name: value}) tuples.

        Example:
            >>> DataSet.from_records([(1.0, {"t": 0}), (2.0, {"t": 1})], "t")
        """
        points = [Observation(dep, indep) for dep, indep in records]
        return cls(time_variable, periods_per_year, points)

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        dependent_column: str,
        time_variable: str = "",
        periods_per_year: int = 0,
    ) -> "DataSet":
        """
        Build a dataset from a DataFrame.

        Every numeric column other than ``dependent_column`` becomes an
        independent variable.

        Raises:
            IllegalArgumentError: If ``dependent_column`` is missing
        """
        if dependent_column not in df.columns:
            raise IllegalArgumentError(
                f"Dependent column '{dependent_column}' not found in DataFrame "
                f"columns {list(df.columns)}"
            )

        independent_cols = [
            col for col in df.select_dtypes(include=[np.number]).columns
            if col != dependent_column
        ]
        points = [
            Observation(
                row[dependent_column],
                {str(col): row[col] for col in independent_cols},
            )
            for _, row in df.iterrows()
        ]
        logger.debug(
            f"Built dataset of {len(points)} points with independent "
            f"variables {independent_cols}"
        )
        return cls(time_variable, periods_per_year, points)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a DataFrame with one column per independent variable."""
        rows = []
        for point in self._points:
            row = point.independent_values()
            row[DEPENDENT_COLUMN] = point.dependent_value
            rows.append(row)
        columns = self.independent_variables() + [DEPENDENT_COLUMN]
        return pd.DataFrame(rows, columns=columns)

    def add(self, point: Observation) -> None:
        self._points.append(point)

    def copy(self) -> "DataSet":
        """Deep clone: every observation is copied."""
        return DataSet(
            self.time_variable,
            self.periods_per_year,
            [point.copy() for point in self._points],
        )

    def sort(self, variable: str) -> None:
        """Sort in place, ascending by the named independent variable."""
        self._points.sort(key=lambda point: point.get_independent_value(variable))

    def drop_first(self, n: int) -> "DataSet":
        """Return a cloned dataset without the first ``n`` points."""
        return DataSet(
            self.time_variable,
            self.periods_per_year,
            [point.copy() for point in self._points[n:]],
        )

    def independent_variables(self) -> List[str]:
        """Sorted union of independent variable names over all points."""
        names = set()
        for point in self._points:
            names.update(point.independent_variable_names())
        return sorted(names)

    def resolve_time_variable(self) -> str:
        """
        Determine which independent variable is the time axis.

        Returns the declared time variable if set, otherwise the only
        independent variable present.

        Raises:
            IllegalArgumentError: If no time variable is declared and the
                points do not carry exactly one independent variable
        """
        if self.time_variable:
            return self.time_variable

        names = self.independent_variables()
        if len(names) == 1:
            return names[0]

        raise IllegalArgumentError(
            f"Unable to determine the time variable: none declared and "
            f"found independent variables {names}"
        )

    def dependent_values(self) -> np.ndarray:
        return np.array([point.dependent_value for point in self._points], dtype=float)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Observation]:
        return iter(self._points)

    def __getitem__(self, index: Union[int, slice]) -> Any:
        if isinstance(index, slice):
            return DataSet(self.time_variable, self.periods_per_year, self._points[index])
        return self._points[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataSet):
            return NotImplemented
        return self.time_variable == other.time_variable and self._points == other._points

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"DataSet(time_variable='{self.time_variable}', "
            f"periods_per_year={self.periods_per_year}, points={len(self._points)})"
        )
