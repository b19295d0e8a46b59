from datetime import date, datetime
from typing import Optional, Union

from pandas import Timestamp

from periodlib.conventions.types import Weekday

DATE_FMT = "%Y-%m-%d"
SLASH_FMT = "%Y/%m/%d"
COMPACT_FMT = "%Y%m%d"

_WEEKDAY_NAMES = {
    "monday": Weekday.MONDAY,
    "tuesday": Weekday.TUESDAY,
    "wednesday": Weekday.WEDNESDAY,
    "thursday": Weekday.THURSDAY,
    "friday": Weekday.FRIDAY,
    "saturday": Weekday.SATURDAY,
    "sunday": Weekday.SUNDAY,
}

_MONTH_NAMES = [
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
]


def to_date(date_like: Union[str, date, datetime, Timestamp]) -> date:
    """
    Convert a string, datetime or pandas Timestamp to a plain date.
    Accepts 'YYYY-MM-DD', 'YYYY/MM/DD' and 'YYYYMMDD' string formats.
    """
    if isinstance(date_like, Timestamp):
        return date_like.date()
    # datetime is a subclass of date, so it must be checked first
    if isinstance(date_like, datetime):
        return date_like.date()
    if isinstance(date_like, date):
        return date_like
    if isinstance(date_like, str):
        for fmt in (DATE_FMT, SLASH_FMT, COMPACT_FMT):
            try:
                return datetime.strptime(date_like.strip(), fmt).date()
            except ValueError:
                continue
        raise ValueError(f"Unsupported date string format: {date_like!r}")
    raise TypeError(f"Unsupported type for date: {type(date_like)}")


def datetime_to_str(datetime_date: Union[str, date, datetime]) -> str:
    """
    Format a date-like into 'YYYY-MM-DD' string.
    """
    return to_date(datetime_date).strftime(DATE_FMT)


def string_to_day_of_week(name: str) -> Optional[Weekday]:
    """Map a full or three-letter weekday name to a Weekday, None if unknown."""
    key = name.strip().lower()
    if key in _WEEKDAY_NAMES:
        return _WEEKDAY_NAMES[key]
    for full, weekday in _WEEKDAY_NAMES.items():
        if len(key) == 3 and full.startswith(key):
            return weekday
    return None


def string_to_month_of_year(name: str) -> Optional[int]:
    """Map a full or three-letter month name to its number (1-12), None if unknown."""
    key = name.strip().lower()
    for index, full in enumerate(_MONTH_NAMES, start=1):
        if key == full or (len(key) == 3 and full.startswith(key)):
            return index
    return None
