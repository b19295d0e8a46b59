"""
Core data structures for period iteration.
"""

from dataclasses import dataclass
from datetime import date, timedelta


@dataclass(frozen=True)
class Period:
    """A single report period; ``end`` is exclusive."""

    start: date
    end: date

    @property
    def inclusive_end(self) -> date:
        """Last calendar day inside the period."""
        return self.end - timedelta(days=1)

    @property
    def days(self) -> int:
        """Number of calendar days in the period."""
        return (self.end - self.start).days

    def contains(self, when: date) -> bool:
        return self.start <= when < self.end
