"""
Composable field constraints.

Each constraint is a predicate over a field value and the mapping that holds
it (so date-ordering checks can look at a sibling field). Constraints other
than ``Required`` treat a missing value as satisfied; optional fields only
get checked when present.
"""

import math
from typing import Any, Callable, Iterable, Mapping, Optional, Union

Bound = Union[int, float, Callable[[], Union[int, float]]]


class Constraint:
    name = "constraint"
    skip_missing = True

    def __call__(self, value: Any, parent: Optional[Mapping[str, Any]] = None) -> bool:
        if value is None and self.skip_missing:
            return True
        return self.check(value, parent or {})

    def check(self, value: Any, parent: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def describe(self) -> str:
        return self.name

    def __repr__(self):
        return f"<{type(self).__name__} {self.describe()}>"


class Required(Constraint):
    name = "required"
    skip_missing = False

    def check(self, value, parent):
        if value is None:
            return False
        if isinstance(value, str):
            return bool(value.strip())
        return True


class MaxLength(Constraint):
    name = "max_length"

    def __init__(self, limit: int):
        self.limit = limit

    def check(self, value, parent):
        return len(value) <= self.limit

    def describe(self):
        return f"{self.name}({self.limit})"


class Range(Constraint):
    """
    Inclusive numeric range; bounds may be callables evaluated per check.
    NaN and infinities never satisfy a range, open-ended or not.
    """

    name = "range"

    def __init__(self, minimum: Optional[Bound] = None, maximum: Optional[Bound] = None):
        self.minimum = minimum
        self.maximum = maximum

    @staticmethod
    def _resolve(bound):
        return bound() if callable(bound) else bound

    def check(self, value, parent):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if not math.isfinite(value):
            return False
        low = self._resolve(self.minimum)
        high = self._resolve(self.maximum)
        if low is not None and value < low:
            return False
        if high is not None and value > high:
            return False
        return True

    def describe(self):
        low = self._resolve(self.minimum)
        high = self._resolve(self.maximum)
        return f"{self.name}({low}, {high})"


class OneOf(Constraint):
    name = "one_of"

    def __init__(self, choices: Iterable[str]):
        self.choices = tuple(choices)

    def check(self, value, parent):
        return value in self.choices


class NotBefore(Constraint):
    """Value must be on or after the sibling field, when both are set."""

    name = "not_before"

    def __init__(self, sibling: str):
        self.sibling = sibling

    def check(self, value, parent):
        other = parent.get(self.sibling)
        if other is None:
            return True
        return value >= other

    def describe(self):
        return f"{self.name}({self.sibling})"
