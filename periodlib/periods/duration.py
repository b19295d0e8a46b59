"""
Calendar durations and period boundary alignment.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from periodlib.conventions.clock import DEFAULT_CONFIG, TimesConfig
from periodlib.conventions.types import Quantum

from .errors import MalformedPeriodError


@dataclass(frozen=True)
class Duration:
    """A whole number of days, weeks, months, quarters or years."""

    quantum: Quantum = Quantum.DAYS
    length: int = 0

    def __post_init__(self):
        if not isinstance(self.quantum, Quantum):
            raise MalformedPeriodError(f"Unknown duration quantum: {self.quantum!r}")
        if self.length < 0:
            raise MalformedPeriodError(
                f"Duration length must be non-negative, got {self.length}"
            )

    @classmethod
    def from_tenor(cls, tenor: str) -> "Duration":
        """Build a duration from tenor notation such as '1D', '2W', '3M', '1Q' or '1Y'."""
        t = tenor.strip().upper()
        try:
            return cls(Quantum.from_name(t[-1]), int(t[:-1]))
        except (ValueError, IndexError) as exc:
            raise MalformedPeriodError(f"Unsupported tenor: {tenor}") from exc

    def _delta(self, count: int) -> relativedelta:
        steps = self.length * count
        if self.quantum is Quantum.DAYS:
            return relativedelta(days=steps)
        if self.quantum is Quantum.WEEKS:
            return relativedelta(weeks=steps)
        if self.quantum is Quantum.MONTHS:
            return relativedelta(months=steps)
        if self.quantum is Quantum.QUARTERS:
            return relativedelta(months=steps * 3)
        if self.quantum is Quantum.YEARS:
            return relativedelta(years=steps)
        raise MalformedPeriodError(f"Unknown duration quantum: {self.quantum!r}")

    def add(self, when: date) -> date:
        """Step forward by this duration using calendar arithmetic."""
        return when + self._delta(1)

    def subtract(self, when: date) -> date:
        """Step backward by this duration using calendar arithmetic."""
        return when - self._delta(1)

    def shift(self, when: date, count: int) -> date:
        """Apply ``count`` whole steps (negative moves backward) in one operation."""
        return when + self._delta(count)

    def steps_between(self, anchor: date, when: date) -> int:
        """
        Number of whole steps from ``anchor`` to the step containing ``when``.

        The result is floored, so it is negative when ``when`` precedes
        ``anchor``. ``shift(anchor, n) <= when < shift(anchor, n + 1)`` holds
        for the returned ``n``.
        """
        if self.length == 0:
            raise MalformedPeriodError("Cannot count steps of a zero-length duration")

        if self.quantum.days():
            count = (when - anchor).days // (self.length * self.quantum.days())
        else:
            months = (when.year - anchor.year) * 12 + (when.month - anchor.month)
            count = months // (self.length * self.quantum.months())

        # Month clamping can leave the estimate one step off either way
        while self.shift(anchor, count) > when:
            count -= 1
        while self.shift(anchor, count + 1) <= when:
            count += 1
        return count

    def describe(self) -> str:
        unit = self.quantum.unit()
        if self.length > 1:
            unit += "s"
        return f"{self.length} {unit}"

    def __str__(self) -> str:
        return self.describe()

    @staticmethod
    def find_nearest(
        when: date, quantum: Quantum, config: Optional[TimesConfig] = None
    ) -> date:
        return nearest_boundary(when, quantum, config)


def nearest_boundary(
    when: date, quantum: Quantum, config: Optional[TimesConfig] = None
) -> date:
    """
    Return the aligned period boundary at or before ``when``.

    Years align to January 1st, quarters to the first of January, April, July
    or October, months to the first of the month and weeks to the configured
    start of week. Days are their own boundary.
    """
    if quantum is Quantum.YEARS:
        return date(when.year, 1, 1)
    if quantum is Quantum.QUARTERS:
        return date(when.year, (when.month - 1) // 3 * 3 + 1, 1)
    if quantum is Quantum.MONTHS:
        return date(when.year, when.month, 1)
    if quantum is Quantum.WEEKS:
        if config is None:
            config = DEFAULT_CONFIG
        offset = (when.weekday() - config.start_of_week.value) % 7
        return when - timedelta(days=offset)
    if quantum is Quantum.DAYS:
        return when
    raise MalformedPeriodError(f"Unknown duration quantum: {quantum!r}")
