from datetime import datetime

import pytest

from periodlib.conventions.clock import TimesConfig
from periodlib.conventions.types import Weekday


@pytest.fixture
def monday_config() -> TimesConfig:
    """Weeks start on Monday."""
    return TimesConfig(start_of_week=Weekday.MONDAY)


@pytest.fixture
def fixed_clock_config() -> TimesConfig:
    """Monday weeks with the clock pinned to Wednesday 2021-03-10."""
    return TimesConfig(start_of_week=Weekday.MONDAY, epoch=datetime(2021, 3, 10, 9, 30))
