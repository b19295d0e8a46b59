"""Interface of the period-phrase parser consumed by ``Interval.parse``."""

from __future__ import annotations

from typing import Optional, Protocol, Tuple, runtime_checkable

from .duration import Duration
from .range import SpecifierOrRange

ParsedPeriod = Tuple[Optional[SpecifierOrRange], Optional[Duration]]


@runtime_checkable
class PeriodGrammar(Protocol):
    """Turns phrases like "every 2 weeks from 2011" into a window and a duration."""

    def parse(self, text: str) -> ParsedPeriod: ...
