"""Single data records and their thread-safe named-value storage."""

import threading
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from openforecast.utils.error_handling import NotFoundError


class SynchronizedValues:
    """
    Mapping of variable name to float guarded by a re-entrant lock.

    Only individual reads and writes are atomic; a sequence of calls is
    not consistent as a whole.
    """

    def __init__(self, values: Optional[Mapping[str, float]] = None):
        self._lock = threading.RLock()
        self._values: Dict[str, float] = {
            str(k): float(v) for k, v in (values or {}).items()
        }

    def get(self, name: str, default: Optional[float] = None) -> Optional[float]:
        with self._lock:
            return self._values.get(name, default)

    def set(self, name: str, value: float) -> None:
        with self._lock:
            self._values[name] = float(value)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._values)

    def items(self) -> List[Tuple[str, float]]:
        """Snapshot of the current (name, value) pairs."""
        with self._lock:
            return list(self._values.items())

    def copy(self) -> "SynchronizedValues":
        with self._lock:
            return SynchronizedValues(self._values)

    def to_dict(self) -> Dict[str, float]:
        with self._lock:
            return dict(self._values)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._values

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())


class Observation:
    """
    One dependent (target) value plus named independent values.

    Args:
        dependent_value: Target value of the record
        independent_values: Named inputs, e.g. {"time": 3.0}
    """

    def __init__(
        self,
        dependent_value: float = 0.0,
        independent_values: Optional[Mapping[str, float]] = None,
    ):
        self._dependent_value = float(dependent_value)
        self._independent_values = SynchronizedValues(independent_values)

    @property
    def dependent_value(self) -> float:
        return self._dependent_value

    @dependent_value.setter
    def dependent_value(self, value: float) -> None:
        self._dependent_value = float(value)

    def get_independent_value(self, name: str) -> float:
        """
        Get the value of a named independent variable.

        Raises:
            NotFoundError: If this observation has no such variable
        """
        value = self._independent_values.get(name)
        if value is None:
            raise NotFoundError(
                f"{self} has no value for independent variable '{name}'",
                variable=name,
            )
        return value

    def has_independent_value(self, name: str) -> bool:
        return name in self._independent_values

    def set_independent_value(self, name: str, value: float) -> None:
        self._independent_values.set(name, value)

    def independent_variable_names(self) -> List[str]:
        return sorted(self._independent_values.keys())

    def independent_values(self) -> Dict[str, float]:
        """Snapshot of all independent values."""
        return self._independent_values.to_dict()

    def copy(self) -> "Observation":
        """Deep copy; the clone shares no mutable state with this record."""
        clone = Observation(self._dependent_value)
        clone._independent_values = self._independent_values.copy()
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Observation):
            return NotImplemented
        return (
            self._dependent_value == other._dependent_value
            and self.independent_values() == other.independent_values()
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        parts = [f"dependent={self._dependent_value!r}"]
        parts.extend(f"{k}={v!r}" for k, v in sorted(self._independent_values.items()))
        return f"Observation({', '.join(parts)})"
