"""
Period model and stepping engine.
"""

from .core import Period
from .duration import Duration, nearest_boundary
from .errors import MalformedPeriodError, OutOfBoundsError
from .grammar import ParsedPeriod, PeriodGrammar
from .interval import Interval
from .range import DateRange, SpecifierOrRange
from .specifier import Specifier

__all__ = [
    "DateRange",
    "Duration",
    "Interval",
    "MalformedPeriodError",
    "OutOfBoundsError",
    "ParsedPeriod",
    "Period",
    "PeriodGrammar",
    "Specifier",
    "SpecifierOrRange",
    "nearest_boundary",
]
