from datetime import date, time, timedelta

from timetxt.backend.forms import TimeEntry
from timetxt.backend.utils import elapsed, format_elapsed, total_elapsed


def _entry(start, end):
    return TimeEntry(date(2020, 1, 1), start, end, "x")


def test_elapsed_simple_difference():
    assert elapsed(_entry(time(4, 0), time(11, 0))) == timedelta(hours=7)
    assert elapsed(_entry(time(23, 0), time(1, 0))) == timedelta(hours=-22)


def test_total_elapsed():
    entries = [_entry(time(9), time(10, 30)), _entry(time(13), time(13, 45))]
    assert total_elapsed(entries) == timedelta(hours=2, minutes=15)
    assert total_elapsed([]) == timedelta()


def test_format_elapsed():
    assert format_elapsed(timedelta()) == "00:00"
    assert format_elapsed(timedelta(hours=7, minutes=5)) == "07:05"
    assert format_elapsed(timedelta(hours=30)) == "30:00"
    assert format_elapsed(timedelta(minutes=-90)) == "-01:30"
