"""
Date ranges bounded by partial dates, and the specifier-or-range window type.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from .duration import Duration
from .errors import MalformedPeriodError
from .specifier import Specifier


@dataclass(frozen=True)
class DateRange:
    """
    Span between two optional specifiers.

    The lower bound is inclusive. The upper bound excludes everything from
    the first date the upper specifier matches unless ``end_inclusive`` is
    set, in which case the whole upper specifier is included.
    """

    lower: Optional[Specifier] = None
    upper: Optional[Specifier] = None
    end_inclusive: bool = False

    def begin(self, current_year: Optional[int] = None) -> Optional[date]:
        if self.lower is None:
            return None
        return self.lower.begin(current_year)

    def end(self, current_year: Optional[int] = None) -> Optional[date]:
        if self.upper is None:
            return None
        if self.end_inclusive:
            return self.upper.end(current_year)
        return self.upper.begin(current_year)

    def is_within(self, when: date, current_year: Optional[int] = None) -> bool:
        b = self.begin(current_year)
        e = self.end(current_year)
        after_begin = when >= b if b is not None else True
        before_end = when < e if e is not None else True
        return after_begin and before_end

    def validate(self, current_year: Optional[int] = None) -> None:
        """Raise MalformedPeriodError if both bounds resolve and are out of order."""
        b = self.begin(current_year)
        e = self.end(current_year)
        if b is not None and e is not None and b > e:
            raise MalformedPeriodError(
                f"Date range begins after it ends: {b.isoformat()} > {e.isoformat()}"
            )

    def describe(self) -> str:
        out = ""
        if self.lower is not None:
            out += "from" + self.lower.describe()
        if self.upper is not None:
            out += " to" + self.upper.describe()
        return out.strip()


class SpecifierOrRange:
    """
    Window of an interval: either a single specifier or a range.

    A specifier stands for every date it matches, the same as an inclusive
    range whose bounds are both that specifier.
    """

    def __init__(self, value: Union[Specifier, DateRange]):
        if not isinstance(value, (Specifier, DateRange)):
            raise TypeError(
                f"Expected Specifier or DateRange, got {type(value).__name__}"
            )
        self.value = value

    @property
    def is_specifier(self) -> bool:
        return isinstance(self.value, Specifier)

    @property
    def is_range(self) -> bool:
        return isinstance(self.value, DateRange)

    def begin(self, current_year: Optional[int] = None) -> Optional[date]:
        return self.value.begin(current_year)

    def end(self, current_year: Optional[int] = None) -> Optional[date]:
        return self.value.end(current_year)

    def is_within(self, when: date, current_year: Optional[int] = None) -> bool:
        return self.value.is_within(when, current_year)

    def has_lower_bound(self) -> bool:
        if isinstance(self.value, Specifier):
            return True
        elif isinstance(self.value, DateRange):
            return self.value.lower is not None
        raise TypeError(f"Unexpected window value: {self.value!r}")

    def has_upper_bound(self) -> bool:
        if isinstance(self.value, Specifier):
            return True
        elif isinstance(self.value, DateRange):
            return self.value.upper is not None
        raise TypeError(f"Unexpected window value: {self.value!r}")

    def implied_duration(self) -> Optional[Duration]:
        if isinstance(self.value, Specifier):
            return self.value.implied_duration()
        elif isinstance(self.value, DateRange):
            return None
        raise TypeError(f"Unexpected window value: {self.value!r}")

    def validate(self, current_year: Optional[int] = None) -> None:
        if isinstance(self.value, DateRange):
            self.value.validate(current_year)

    def describe(self) -> str:
        if isinstance(self.value, Specifier):
            return "in" + self.value.describe()
        elif isinstance(self.value, DateRange):
            return self.value.describe()
        raise TypeError(f"Unexpected window value: {self.value!r}")

    def __eq__(self, other) -> bool:
        if not isinstance(other, SpecifierOrRange):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return f"SpecifierOrRange({self.value!r})"
