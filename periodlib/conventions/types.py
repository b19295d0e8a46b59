"""
Basic types and enums used across the period engine.
"""

from dataclasses import dataclass
from enum import Enum


class Quantum(Enum):
    """Units a duration can be expressed in."""

    DAYS = "day"
    WEEKS = "week"
    MONTHS = "month"
    QUARTERS = "quarter"
    YEARS = "year"

    def unit(self) -> str:
        return self.value

    def months(self) -> int:
        """Calendar months per unit, zero for day-based quanta."""
        return _MONTHS_PER_UNIT[self]

    def days(self) -> int:
        """Fixed days per unit, zero for calendar-based quanta."""
        return _DAYS_PER_UNIT[self]

    @classmethod
    def from_name(cls, name: str) -> "Quantum":
        """Look up a quantum by unit name ("month", "weeks") or tenor letter ("M")."""
        key = name.strip().lower()
        if key in _TENOR_LETTERS:
            return _TENOR_LETTERS[key]
        if key.endswith("s"):
            key = key[:-1]
        for quantum in cls:
            if quantum.value == key:
                return quantum
        raise ValueError(f"Unknown duration unit: {name!r}")


_MONTHS_PER_UNIT = {
    Quantum.DAYS: 0,
    Quantum.WEEKS: 0,
    Quantum.MONTHS: 1,
    Quantum.QUARTERS: 3,
    Quantum.YEARS: 12,
}

_DAYS_PER_UNIT = {
    Quantum.DAYS: 1,
    Quantum.WEEKS: 7,
    Quantum.MONTHS: 0,
    Quantum.QUARTERS: 0,
    Quantum.YEARS: 0,
}

_TENOR_LETTERS = {
    "d": Quantum.DAYS,
    "w": Quantum.WEEKS,
    "m": Quantum.MONTHS,
    "q": Quantum.QUARTERS,
    "y": Quantum.YEARS,
}


class Weekday(Enum):
    """Days of the week, numbered like ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


@dataclass(frozen=True)
class DateTraits:
    """Which fields of a concrete date a specifier should keep."""

    has_year: bool = False
    has_month: bool = False
    has_day: bool = False
