"""
Partial dates: any combination of year, month, day and weekday.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from periodlib.conventions.types import DateTraits, Quantum, Weekday

from .duration import Duration
from .errors import MalformedPeriodError


@dataclass(frozen=True)
class Specifier:
    """
    A partially specified date.

    Absent fields are unconstrained. A specifier without a year needs a
    disambiguation year (``current_year``) to resolve; the caller decides
    which year that is.
    """

    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    weekday: Optional[Union[Weekday, int]] = None

    def __post_init__(self):
        if self.year is not None and not 1 <= self.year <= 9999:
            raise MalformedPeriodError(f"Year out of range: {self.year}")
        if self.month is not None and not 1 <= self.month <= 12:
            raise MalformedPeriodError(f"Month out of range: {self.month}")
        if self.day is not None and not 1 <= self.day <= 31:
            raise MalformedPeriodError(f"Day out of range: {self.day}")
        if self.weekday is not None and not isinstance(self.weekday, Weekday):
            try:
                object.__setattr__(self, "weekday", Weekday(self.weekday))
            except ValueError as exc:
                raise MalformedPeriodError(f"Weekday out of range: {self.weekday}") from exc

    @classmethod
    def from_date(cls, when: date, traits: Optional[DateTraits] = None) -> "Specifier":
        """Copy the fields of ``when`` selected by ``traits`` (all of them if None)."""
        if traits is None:
            return cls(year=when.year, month=when.month, day=when.day)
        return cls(
            year=when.year if traits.has_year else None,
            month=when.month if traits.has_month else None,
            day=when.day if traits.has_day else None,
        )

    def is_empty(self) -> bool:
        return (
            self.year is None
            and self.month is None
            and self.day is None
            and self.weekday is None
        )

    def begin(self, current_year: Optional[int] = None) -> date:
        """Earliest date matching every present field."""
        if self.is_empty():
            raise MalformedPeriodError("Cannot resolve an empty date specifier")

        the_year = self.year if self.year is not None else current_year
        if the_year is None:
            raise MalformedPeriodError(
                f"Date specifier '{self.describe().strip()}' has no year "
                "and no disambiguation year was given"
            )
        the_month = self.month if self.month is not None else 1
        the_day = self.day if self.day is not None else 1

        try:
            result = date(the_year, the_month, the_day)
        except ValueError as exc:
            raise MalformedPeriodError(
                f"Date specifier '{self.describe().strip()}' does not name a real date"
            ) from exc

        if self.weekday is not None:
            if self.day is not None:
                if result.weekday() != self.weekday.value:
                    raise MalformedPeriodError(
                        f"{result.isoformat()} is not a {self.weekday.name.title()}"
                    )
            else:
                result += timedelta(days=(self.weekday.value - result.weekday()) % 7)
        return result

    def end(self, current_year: Optional[int] = None) -> date:
        """First date after the span this specifier matches."""
        start = self.begin(current_year)
        if self.day is not None or self.weekday is not None:
            return start + timedelta(days=1)
        if self.month is not None:
            return start + relativedelta(months=1)
        return start + relativedelta(years=1)

    def is_within(self, when: date, current_year: Optional[int] = None) -> bool:
        return self.begin(current_year) <= when < self.end(current_year)

    def implied_duration(self) -> Optional[Duration]:
        """The step size a bare specifier implies: a day, a month or a year."""
        if self.day is not None or self.weekday is not None:
            return Duration(Quantum.DAYS, 1)
        if self.month is not None:
            return Duration(Quantum.MONTHS, 1)
        if self.year is not None:
            return Duration(Quantum.YEARS, 1)
        return None

    def describe(self) -> str:
        out = ""
        if self.year is not None:
            out += f" year {self.year}"
        if self.month is not None:
            out += f" month {self.month}"
        if self.day is not None:
            out += f" day {self.day}"
        if self.weekday is not None:
            out += f" wday {self.weekday.name.lower()}"
        return out
