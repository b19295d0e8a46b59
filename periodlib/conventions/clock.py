"""
Calendar settings shared by period calculations.

A ``TimesConfig`` carries the start-of-week used for weekly alignment and an
optional fixed "current time" so that report runs can be made reproducible.
It is passed explicitly; helpers that accept ``config=None`` use
``DEFAULT_CONFIG``.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional, Union

from pandas import Timestamp

from periodlib.conventions.types import Weekday
from periodlib.utils.date import string_to_day_of_week


@dataclass(frozen=True)
class TimesConfig:
    """Start-of-week and clock override for period resolution."""

    start_of_week: Weekday = Weekday.SUNDAY
    epoch: Optional[datetime] = None

    def current_time(self) -> datetime:
        """Return the epoch override, or sample the UTC clock."""
        if self.epoch is not None:
            return self.epoch
        return datetime.now(timezone.utc)

    def current_date(self) -> date:
        return self.current_time().date()

    def current_year(self) -> int:
        return self.current_time().year

    def with_epoch(self, epoch: Union[str, date, datetime, None]) -> "TimesConfig":
        return replace(self, epoch=_coerce_epoch(epoch))

    def with_start_of_week(self, start_of_week: Union[str, int, Weekday]) -> "TimesConfig":
        return replace(self, start_of_week=_coerce_weekday(start_of_week))

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> "TimesConfig":
        """
        Build a config from plain settings.

        Args:
            settings: Mapping with optional ``start_of_week`` (weekday name,
                number or Weekday) and ``epoch`` (date string, date or datetime)

        Returns:
            Configured TimesConfig
        """
        unknown = set(settings) - {"start_of_week", "epoch"}
        if unknown:
            raise ValueError(f"Unknown time settings: {sorted(unknown)}")

        config = cls()
        if settings.get("start_of_week") is not None:
            config = config.with_start_of_week(settings["start_of_week"])
        if settings.get("epoch") is not None:
            config = config.with_epoch(settings["epoch"])
        return config


DEFAULT_CONFIG = TimesConfig()


def _coerce_weekday(value: Union[str, int, Weekday]) -> Weekday:
    if isinstance(value, Weekday):
        return value
    if isinstance(value, int):
        return Weekday(value)
    if isinstance(value, str):
        weekday = string_to_day_of_week(value)
        if weekday is None:
            raise ValueError(f"Unknown day of week: {value!r}")
        return weekday
    raise TypeError(f"Unsupported type for start of week: {type(value)}")


def _coerce_epoch(value: Union[str, date, datetime, None]) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        return Timestamp(value).to_pydatetime()
    raise TypeError(f"Unsupported type for epoch: {type(value)}")
