"""Recurring report period engine.

This package resolves partially specified dates and calendar durations into
concrete, aligned report periods and steps through them in time order.

Key modules:
- periods: durations, date specifiers, ranges and the interval engine
- conventions: calendar units, weekdays and clock/start-of-week settings
- utils: date coercion and name lookups
"""

from periodlib.conventions.clock import DEFAULT_CONFIG, TimesConfig
from periodlib.conventions.types import DateTraits, Quantum, Weekday
from periodlib.periods import (
    DateRange,
    Duration,
    Interval,
    MalformedPeriodError,
    OutOfBoundsError,
    Period,
    PeriodGrammar,
    Specifier,
    SpecifierOrRange,
    nearest_boundary,
)

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Conventions
    "DEFAULT_CONFIG",
    "DateTraits",
    "Quantum",
    "TimesConfig",
    "Weekday",
    # Periods
    "DateRange",
    "Duration",
    "Interval",
    "Period",
    "PeriodGrammar",
    "Specifier",
    "SpecifierOrRange",
    "nearest_boundary",
    # Errors
    "MalformedPeriodError",
    "OutOfBoundsError",
]
