"""Interval stabilization, period lookup and stepping."""

from datetime import date, timedelta
from itertools import islice

import pytest

from periodlib.conventions.types import Quantum
from periodlib.periods import (
    DateRange,
    Duration,
    Interval,
    MalformedPeriodError,
    OutOfBoundsError,
    Period,
    PeriodGrammar,
    Specifier,
    SpecifierOrRange,
    nearest_boundary,
)

MONTHLY = Duration(Quantum.MONTHS, 1)


class StubGrammar:
    """Returns a fixed parse result regardless of the phrase."""

    def __init__(self, window, duration=None):
        self.window = window
        self.duration = duration
        self.phrases = []

    def parse(self, text):
        self.phrases.append(text)
        return self.window, self.duration


def _from(year, month=None, day=None) -> DateRange:
    return DateRange(lower=Specifier(year, month, day))


class TestStabilize:
    def test_specifier_implies_monthly_period(self):
        interval = Interval(Specifier(year=2021, month=3))
        interval.stabilize()

        assert interval.duration == MONTHLY
        assert interval.start == date(2021, 3, 1)
        assert interval.finish == date(2021, 4, 1)
        assert interval.end_of_duration == date(2021, 4, 1)
        assert interval.inclusive_end() == date(2021, 3, 31)
        assert interval.aligned

    def test_weekly_start_snaps_to_start_of_week(self, monday_config):
        interval = Interval(
            _from(2021, 3, 10), Duration(Quantum.WEEKS, 2), config=monday_config
        )
        interval.stabilize()

        assert interval.start == date(2021, 3, 8)
        assert interval.end_of_duration == date(2021, 3, 22)
        assert interval.finish is None

    def test_yearless_window_needs_reference(self):
        with pytest.raises(MalformedPeriodError):
            Interval(Specifier(month=3)).stabilize()

        interval = Interval(Specifier(month=3))
        interval.stabilize(date(2021, 3, 15))
        assert interval.start == date(2021, 3, 1)

    def test_range_without_duration(self):
        interval = Interval(DateRange(Specifier(2020), Specifier(2021)))
        interval.stabilize()

        assert interval.start == date(2020, 1, 1)
        assert interval.finish == date(2021, 1, 1)
        assert interval.duration is None
        assert interval.end_of_duration is None
        assert interval.inclusive_end() is None

    def test_contradictory_range(self):
        interval = Interval(DateRange(Specifier(2022), Specifier(2021)), MONTHLY)
        with pytest.raises(MalformedPeriodError):
            interval.stabilize()

    def test_nothing_to_resolve(self):
        with pytest.raises(MalformedPeriodError, match="neither start"):
            Interval().stabilize(date(2021, 1, 1))

    def test_zero_length_duration(self):
        with pytest.raises(MalformedPeriodError, match="zero-length"):
            Interval(_from(2021), Duration(Quantum.DAYS, 0)).stabilize()

    def test_open_lower_bound_stays_unresolved(self):
        interval = Interval(DateRange(upper=Specifier(2021)), MONTHLY)
        interval.stabilize()

        assert not interval.is_valid()
        assert not interval
        assert interval.finish == date(2021, 1, 1)

    def test_reference_seeds_open_lower_bound(self):
        interval = Interval(DateRange(upper=Specifier(2021)), MONTHLY)
        interval.stabilize(date(2020, 5, 10))

        assert interval.is_valid()
        assert interval.start == date(2020, 5, 1)

    @pytest.mark.parametrize(
        "quantum", [Quantum.WEEKS, Quantum.MONTHS, Quantum.QUARTERS, Quantum.YEARS]
    )
    @pytest.mark.parametrize(
        "when", [date(2021, 3, 10), date(2020, 2, 29), date(2019, 12, 31), date(2024, 7, 1)]
    )
    def test_start_is_always_a_boundary(self, quantum, when, monday_config):
        interval = Interval(
            DateRange(lower=Specifier.from_date(when)),
            Duration(quantum, 1),
            config=monday_config,
        )
        interval.stabilize()

        assert interval.start <= when
        assert nearest_boundary(interval.start, quantum, monday_config) == interval.start


class TestResolveEnd:
    def test_end_of_duration_tracks_start(self):
        interval = Interval(_from(2021), Duration(Quantum.QUARTERS, 1))
        interval.stabilize()
        assert interval.end_of_duration == interval.duration.add(interval.start)

        interval.start = date(2021, 7, 1)
        interval.resolve_end()
        assert interval.end_of_duration == date(2021, 10, 1)
        assert interval.next == date(2021, 10, 1)

    def test_idempotent(self):
        interval = Interval(_from(2021), MONTHLY)
        interval.stabilize()
        interval.resolve_end()
        first = interval.end_of_duration
        interval.resolve_end()
        assert interval.end_of_duration == first


class TestFindPeriod:
    def test_dates_in_current_period_leave_it_alone(self):
        interval = Interval(_from(2021, 2), MONTHLY)
        interval.stabilize()

        day = interval.start
        while day < interval.end_of_duration:
            assert interval.find_period(day)
            assert interval.start == date(2021, 2, 1)
            day += timedelta(days=1)

    def test_jumps_several_periods(self):
        interval = Interval(_from(2021), MONTHLY)
        interval.stabilize()

        assert interval.find_period(date(2021, 7, 15))
        assert interval.start == date(2021, 7, 1)
        assert interval.end_of_duration == date(2021, 8, 1)

    def test_date_before_window(self):
        interval = Interval(_from(2021), MONTHLY)
        interval.find_period(date(2021, 7, 15))

        assert not interval.find_period(date(2020, 12, 31))
        assert interval.start == date(2021, 7, 1)

    def test_date_at_or_after_finish(self):
        interval = Interval(DateRange(Specifier(2021), Specifier(2022)), MONTHLY)
        interval.stabilize()

        assert not interval.find_period(date(2022, 1, 1))
        assert interval.start == date(2021, 1, 1)
        assert interval.find_period(date(2021, 12, 31))
        assert interval.start == date(2021, 12, 1)

    def test_unaligned_lower_bound_keeps_first_period(self):
        interval = Interval(DateRange(Specifier(2021, 3, 10), Specifier(2021, 6)), MONTHLY)
        interval.stabilize()

        assert interval.find_period(date(2021, 3, 5))
        assert not interval.find_period(date(2021, 2, 28))

    def test_stabilizes_on_first_use(self, monday_config):
        interval = Interval(duration=Duration(Quantum.WEEKS, 1), config=monday_config)

        assert interval.find_period("2021-03-10")
        assert interval.start == date(2021, 3, 8)

        # No lower bound, so earlier periods are reachable
        assert interval.find_period(date(2021, 3, 1))
        assert interval.start == date(2021, 3, 1)

    def test_yearless_specifier_uses_date_year(self):
        interval = Interval(Specifier(month=3))
        assert interval.find_period(date(2022, 3, 20))
        assert interval.start == date(2022, 3, 1)

    def test_without_duration_is_containment(self):
        interval = Interval(DateRange(Specifier(2020), Specifier(2021)))
        assert interval.find_period(date(2020, 6, 1))
        assert not interval.find_period(date(2021, 1, 1))
        assert interval.start == date(2020, 1, 1)

    def test_open_lower_bound_resolved_by_date(self):
        interval = Interval(DateRange(upper=Specifier(2021)), MONTHLY)
        interval.stabilize()

        assert interval.find_period(date(2020, 5, 10))
        assert interval.start == date(2020, 5, 1)
        assert not interval.find_period(date(2021, 1, 1))

    def test_open_window_without_duration_cannot_resolve(self):
        interval = Interval(DateRange(upper=Specifier(2021)))
        with pytest.raises(MalformedPeriodError, match="improperly initialized"):
            interval.find_period(date(2020, 5, 1))
        assert not interval.is_valid()

    def test_finish_inside_last_period(self):
        interval = Interval(duration=MONTHLY, start="2021-05-01", finish="2021-06-15")
        interval.stabilize()
        interval.advance()

        assert interval.start == date(2021, 6, 1)
        assert interval.end_of_duration == date(2021, 7, 1)
        assert not interval.find_period(date(2021, 6, 20))
        assert interval.start == date(2021, 6, 1)

    def test_current_period_from_clock(self, fixed_clock_config):
        interval = Interval(_from(2021), MONTHLY, config=fixed_clock_config)
        assert interval.find_current_period()
        assert interval.start == date(2021, 3, 1)


class TestAdvance:
    def test_contiguous_steps(self):
        interval = Interval(_from(2020, 11), MONTHLY)
        interval.stabilize()

        previous_end = interval.end_of_duration
        for _ in range(6):
            interval.advance()
            assert interval.start == previous_end
            assert interval.end_of_duration > interval.start
            previous_end = interval.end_of_duration
        assert interval.start == date(2021, 5, 1)

    def test_stops_at_finish(self):
        interval = Interval(duration=MONTHLY, start="2021-05-01", finish="2021-06-01")
        interval.stabilize()

        with pytest.raises(OutOfBoundsError):
            interval.advance()
        assert interval.start == date(2021, 5, 1)
        assert interval.end_of_duration == date(2021, 6, 1)

    def test_last_period_may_overrun_finish(self):
        interval = Interval(duration=MONTHLY, start="2021-05-01", finish="2021-06-15")
        interval.stabilize()

        interval.advance()
        assert interval.start == date(2021, 6, 1)
        assert interval.end_of_duration == date(2021, 7, 1)
        assert interval.end_of_duration == interval.duration.add(interval.start)

        with pytest.raises(OutOfBoundsError):
            interval.advance()
        assert interval.start == date(2021, 6, 1)
        assert interval.end_of_duration == date(2021, 7, 1)

    def test_unstarted(self):
        with pytest.raises(MalformedPeriodError):
            Interval(duration=MONTHLY).advance()

    def test_without_duration(self):
        interval = Interval(DateRange(Specifier(2020), Specifier(2021)))
        interval.stabilize()
        with pytest.raises(MalformedPeriodError):
            interval.advance()


class TestIterPeriods:
    def test_quarterly_from_2020_to_2022(self):
        interval = Interval(DateRange(Specifier(2020), Specifier(2022)), Duration(Quantum.QUARTERS, 1))
        interval.stabilize()

        periods = list(interval.iter_periods())
        assert len(periods) == 8
        assert periods[0] == Period(date(2020, 1, 1), date(2020, 4, 1))
        assert periods[-1] == Period(date(2021, 10, 1), date(2022, 1, 1))
        for earlier, later in zip(periods, periods[1:]):
            assert earlier.end == later.start
        assert interval.start == date(2020, 1, 1)

    def test_open_ended_is_limited(self):
        interval = Interval(_from(2021), Duration(Quantum.WEEKS, 1))
        interval.stabilize()

        assert len(list(interval.iter_periods(max_periods=3))) == 3
        assert len(list(islice(interval.iter_periods(), 10))) == 10

    def test_without_duration_yields_window(self):
        interval = Interval(DateRange(Specifier(2020), Specifier(2021)))
        interval.stabilize()
        assert list(interval.iter_periods()) == [Period(date(2020, 1, 1), date(2021, 1, 1))]

    def test_unstarted(self):
        interval = Interval(DateRange(upper=Specifier(2021)), MONTHLY)
        with pytest.raises(MalformedPeriodError):
            list(interval.iter_periods())

    def test_empty_window_yields_nothing(self):
        empty = DateRange(Specifier(2021), Specifier(2021))
        interval = Interval(empty, MONTHLY)
        interval.stabilize()

        assert interval.start == interval.finish == date(2021, 1, 1)
        assert list(interval.iter_periods()) == []
        assert not interval.find_period(date(2021, 1, 1))

        without_duration = Interval(empty)
        without_duration.stabilize()
        assert list(without_duration.iter_periods()) == []

    def test_empty_window_dump_has_no_samples(self):
        text = Interval(DateRange(Specifier(2021), Specifier(2021)), MONTHLY).to_debug_string()
        assert text.endswith("--- Sample dates in range (max. 20) ---")


class TestCurrentPeriod:
    def test_snapshot(self):
        interval = Interval(Specifier(2024, 2))
        assert interval.current_period() is None

        interval.stabilize()
        period = interval.current_period()
        assert period == Period(date(2024, 2, 1), date(2024, 3, 1))
        assert period.days == 29
        assert period.inclusive_end == date(2024, 2, 29)
        assert period.contains(date(2024, 2, 29))
        assert not period.contains(date(2024, 3, 1))


class TestSameStart:
    def test_compares_start_only(self):
        a = Interval(_from(2021), MONTHLY)
        b = Interval(Specifier(2021), Duration(Quantum.YEARS, 1))
        a.stabilize()
        b.stabilize()

        assert a.has_same_start(b)
        assert a != b

    def test_different_or_unset_starts(self):
        a = Interval(_from(2021), MONTHLY)
        b = Interval(_from(2021), MONTHLY)
        assert a.has_same_start(b)

        a.stabilize()
        assert not a.has_same_start(b)


class TestParse:
    def test_from_description(self):
        grammar = StubGrammar(SpecifierOrRange(Specifier(2021, 3)))
        interval = Interval.from_description("in march 2021", grammar)
        interval.stabilize()

        assert isinstance(grammar, PeriodGrammar)
        assert grammar.phrases == ["in march 2021"]
        assert interval.start == date(2021, 3, 1)
        assert interval.inclusive_end() == date(2021, 3, 31)

    def test_parse_resets_state(self):
        interval = Interval(_from(2021), MONTHLY)
        interval.find_period(date(2021, 7, 4))

        interval.parse("yearly from 2019", StubGrammar(_from(2019), Duration(Quantum.YEARS, 1)))
        assert not interval.is_valid()
        assert interval.end_of_duration is None

        interval.stabilize()
        assert interval.start == date(2019, 1, 1)
        assert interval.end_of_duration == date(2020, 1, 1)


class TestDebugString:
    def test_dump(self, monday_config):
        interval = Interval(Specifier(2021, 3), Duration(Quantum.WEEKS, 1), config=monday_config)
        text = interval.to_debug_string()

        assert text.startswith("--- Before stabilization ---")
        assert "   range: in year 2021 month 3" in text
        assert "duration: 1 week" in text
        assert "   start: 2021-03-01" in text
        assert "  finish: 2021-04-01" in text
        assert " 1: 2021-03-01 -- 2021-03-07" in text
        assert " 5: 2021-03-29 -- 2021-04-04" in text
        assert " 6: " not in text
        assert not interval.is_valid()
