from .date import (
    datetime_to_str,
    string_to_day_of_week,
    string_to_month_of_year,
    to_date,
)
