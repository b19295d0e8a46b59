"""
Stepping engine for recurring report periods.

An ``Interval`` combines a window (a specifier or a range) with a duration and
resolves them into a concrete current period ``[start, end_of_duration)``.
Report code walks a chronologically sorted stream of records and asks the
interval whether each date falls in the current period, moving it forward with
``find_period`` or ``advance`` as time passes.
"""

import copy
import logging
from datetime import date, datetime, timedelta
from typing import Iterator, List, Optional, Union

from periodlib.conventions.clock import DEFAULT_CONFIG, TimesConfig
from periodlib.utils.date import datetime_to_str, to_date

from .core import Period
from .duration import Duration, nearest_boundary
from .errors import MalformedPeriodError, OutOfBoundsError
from .grammar import PeriodGrammar
from .range import DateRange, SpecifierOrRange
from .specifier import Specifier

logger = logging.getLogger(__name__)

DateLike = Union[str, date, datetime]
WindowLike = Union[SpecifierOrRange, Specifier, DateRange]

MAX_SAMPLE_PERIODS = 20


def _as_window(window: Optional[WindowLike]) -> Optional[SpecifierOrRange]:
    if window is None or isinstance(window, SpecifierOrRange):
        return window
    return SpecifierOrRange(window)


class Interval:
    """
    A window stepped through in periods of a fixed duration.

    ``start`` and ``finish`` are the resolved boundaries after alignment;
    ``next`` and ``end_of_duration`` cache where the current period ends.
    The cache is always recomputable from ``start`` and ``duration``.
    """

    def __init__(
        self,
        window: Optional[WindowLike] = None,
        duration: Optional[Duration] = None,
        *,
        start: Optional[DateLike] = None,
        finish: Optional[DateLike] = None,
        config: Optional[TimesConfig] = None,
    ):
        self.window = _as_window(window)
        self.duration = duration
        self.start: Optional[date] = to_date(start) if start is not None else None
        self.finish: Optional[date] = to_date(finish) if finish is not None else None
        self.aligned = False
        self.next: Optional[date] = None
        self.end_of_duration: Optional[date] = None
        self.config = config if config is not None else DEFAULT_CONFIG
        # Aligned start of the first period when the window is bounded below
        self._floor: Optional[date] = None

    @classmethod
    def from_description(
        cls, text: str, grammar: PeriodGrammar, config: Optional[TimesConfig] = None
    ) -> "Interval":
        interval = cls(config=config)
        interval.parse(text, grammar)
        return interval

    def parse(self, text: str, grammar: PeriodGrammar) -> None:
        """Replace window and duration with what ``grammar`` reads from ``text``."""
        window, duration = grammar.parse(text)
        self.window = _as_window(window)
        self.duration = duration
        self.start = None
        self.finish = None
        self._invalidate()
        logger.debug("parse: %r -> window=%s duration=%s", text, self.window, duration)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_valid(self) -> bool:
        return self.start is not None

    def __bool__(self) -> bool:
        return self.is_valid()

    def begin(self, current_year: Optional[int] = None) -> Optional[date]:
        if self.start is not None:
            return self.start
        if self.window is not None:
            return self.window.begin(current_year)
        return None

    def end(self, current_year: Optional[int] = None) -> Optional[date]:
        if self.finish is not None:
            return self.finish
        if self.window is not None:
            return self.window.end(current_year)
        return None

    def inclusive_end(self) -> Optional[date]:
        """Last date inside the current period."""
        if self.end_of_duration is None:
            return None
        return self.end_of_duration - timedelta(days=1)

    def current_period(self) -> Optional[Period]:
        if self.start is None or self.end_of_duration is None:
            return None
        return Period(self.start, self.end_of_duration)

    def has_same_start(self, other: "Interval") -> bool:
        """True when both intervals sit on the same start date (or neither has one)."""
        return self.start == other.start

    def copy(self) -> "Interval":
        return copy.copy(self)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def stabilize(self, reference: Optional[DateLike] = None) -> None:
        """
        Resolve the window and duration into concrete boundaries.

        Args:
            reference: Date whose year disambiguates yearless specifiers, and
                which seeds ``start`` when the window has no lower bound

        Raises:
            MalformedPeriodError: If the window cannot be resolved, its range
                is contradictory, or nothing at all bounds the interval
        """
        if reference is not None:
            reference = to_date(reference)

        if not self.aligned:
            self._align(reference)

        if self.start is not None and self.duration is not None:
            self.resolve_end()

    def _align(self, reference: Optional[date]) -> None:
        current_year = reference.year if reference is not None else None

        if self.window is not None:
            if self.duration is None:
                self.duration = self.window.implied_duration()
                if self.duration is not None:
                    logger.debug(
                        "stabilize: using implied duration %s of %s",
                        self.duration,
                        self.window.describe(),
                    )
            self.window.validate(current_year)
            if self.start is None and self.window.has_lower_bound():
                self.start = self.window.begin(current_year)
            if self.finish is None and self.window.has_upper_bound():
                self.finish = self.window.end(current_year)

        if self.start is None and self.finish is None and self.duration is None:
            raise MalformedPeriodError(
                "Invalid date interval: neither start, nor finish, nor duration"
            )
        if self.duration is not None and self.duration.length == 0:
            raise MalformedPeriodError("Invalid date interval: zero-length duration")

        bounded_below = self.start is not None
        if not bounded_below:
            if reference is None or self.duration is None:
                logger.debug("stabilize: no start date can be resolved yet")
                return
            if self.finish is not None and reference >= self.finish:
                logger.debug(
                    "stabilize: reference %s is not before finish %s",
                    reference,
                    self.finish,
                )
                return
            self.start = reference

        if self.duration is not None:
            boundary = nearest_boundary(self.start, self.duration.quantum, self.config)
            if boundary != self.start:
                logger.debug(
                    "stabilize: aligning start %s back to %s boundary %s",
                    self.start,
                    self.duration.quantum.unit(),
                    boundary,
                )
            self.start = boundary

        self._floor = self.start if bounded_below else None
        self.aligned = True
        logger.debug(
            "stabilize: start=%s finish=%s duration=%s",
            self.start,
            self.finish,
            self.duration,
        )

    def resolve_end(self) -> None:
        """Recompute the cached end of the current period from ``start``."""
        if self.start is None or self.duration is None:
            self.end_of_duration = None
            self.next = None
            return
        self.end_of_duration = self.duration.add(self.start)
        self.next = self.end_of_duration

    def _invalidate(self) -> None:
        self.aligned = False
        self.next = None
        self.end_of_duration = None
        self._floor = None

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------
    def find_period(self, when: DateLike) -> bool:
        """
        Move to the period containing ``when``.

        Returns True if the interval now reflects the period containing
        ``when``, or False, leaving the interval untouched, if ``when`` lies
        outside the window.
        """
        when = to_date(when)
        if not self.aligned:
            self.stabilize(when)

        if self.finish is not None and when >= self.finish:
            logger.debug("find_period: %s is not before finish %s", when, self.finish)
            return False
        if self._floor is not None and when < self._floor:
            logger.debug("find_period: %s is before first period %s", when, self._floor)
            return False

        if self.start is None:
            raise MalformedPeriodError("Date interval is improperly initialized")
        if self.duration is None:
            return when >= self.start
        if self.end_of_duration is None:
            self.resolve_end()
        if self.start <= when < self.end_of_duration:
            return True

        count = self.duration.steps_between(self.start, when)
        scan = self.duration.shift(self.start, count)
        logger.debug(
            "find_period: moving %d period(s) from %s to %s for %s",
            count,
            self.start,
            scan,
            when,
        )
        self.start = scan
        self.resolve_end()
        return True

    def find_current_period(self) -> bool:
        """``find_period`` on the configured current date."""
        return self.find_period(self.config.current_date())

    def advance(self) -> "Interval":
        """
        Step to the next period in place.

        Raises:
            MalformedPeriodError: If the interval has no start or no duration
            OutOfBoundsError: If the next period would begin at or after
                ``finish``; the interval is left unchanged
        """
        if self.start is None:
            raise MalformedPeriodError("Cannot advance an unstarted date interval")
        if not self.aligned:
            self.stabilize(self.start)
        if self.duration is None:
            raise MalformedPeriodError(
                "Cannot advance a date interval without a duration"
            )
        if self.next is None:
            self.resolve_end()

        if self.finish is not None and self.next >= self.finish:
            logger.debug(
                "advance: next period %s is not before finish %s", self.next, self.finish
            )
            raise OutOfBoundsError(
                f"No period after {datetime_to_str(self.start)}: "
                f"interval finishes {datetime_to_str(self.finish)}"
            )

        self.start = self.next
        self.resolve_end()
        return self

    def iter_periods(self, max_periods: Optional[int] = None) -> Iterator[Period]:
        """
        Yield the current period and those after it, without moving this interval.

        Iteration ends at ``finish`` or after ``max_periods`` periods. An
        interval with no finish yields indefinitely unless limited.
        """
        interval = self.copy()
        if not interval.aligned:
            interval.stabilize(interval.start)
        if interval.start is None:
            raise MalformedPeriodError("Cannot iterate an unstarted date interval")
        if interval.finish is not None and interval.start >= interval.finish:
            logger.debug("iter_periods: window %s is empty", interval.window)
            return

        if interval.duration is None:
            if interval.finish is not None and (max_periods is None or max_periods > 0):
                yield Period(interval.start, interval.finish)
            return

        produced = 0
        while max_periods is None or produced < max_periods:
            yield Period(interval.start, interval.end_of_duration)
            produced += 1
            try:
                interval.advance()
            except OutOfBoundsError:
                return

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    def _describe_fields(self) -> List[str]:
        lines = []
        if self.window is not None:
            lines.append("   range: " + self.window.describe())
        if self.start is not None:
            lines.append("   start: " + datetime_to_str(self.start))
        if self.finish is not None:
            lines.append("  finish: " + datetime_to_str(self.finish))
        if self.duration is not None:
            lines.append("duration: " + self.duration.describe())
        return lines

    def to_debug_string(self, current_year: Optional[int] = None) -> str:
        """Render the interval before and after stabilization with sample periods."""
        interval = self.copy()

        lines = ["--- Before stabilization ---"]
        lines.extend(interval._describe_fields())

        interval.stabilize(interval.begin(current_year))

        lines.extend(["", "--- After stabilization ---"])
        lines.extend(interval._describe_fields())

        lines.extend(["", f"--- Sample dates in range (max. {MAX_SAMPLE_PERIODS}) ---"])
        if interval.is_valid():
            periods = interval.iter_periods(max_periods=MAX_SAMPLE_PERIODS)
            for index, period in enumerate(periods, start=1):
                line = f"{index:>2}: {datetime_to_str(period.start)}"
                if interval.duration is not None:
                    line += f" -- {datetime_to_str(period.inclusive_end)}"
                lines.append(line)

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"Interval(window={self.window!r}, duration={self.duration!r}, "
            f"start={self.start!r}, finish={self.finish!r})"
        )
