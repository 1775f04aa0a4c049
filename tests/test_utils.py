import pytest

from prayerbot.utils import parse_hhmm, to_12_hour


@pytest.mark.parametrize("value, expected", [
    ("00:00", "12:00 AM"),
    ("00:45", "12:45 AM"),
    ("01:05", "01:05 AM"),
    ("05:10", "05:10 AM"),
    ("11:59", "11:59 AM"),
    ("12:00", "12:00 PM"),
    ("12:30", "12:30 PM"),
    ("13:00", "01:00 PM"),
    ("18:05", "06:05 PM"),
    ("23:59", "11:59 PM"),
])
def test_to_12_hour(value, expected):
    assert to_12_hour(value) == expected


@pytest.mark.parametrize("value", ["", None])
def test_to_12_hour_missing_value(value):
    assert to_12_hour(value) == "N/A"


def test_to_12_hour_every_valid_time():
    for hour in range(24):
        for minute in range(0, 60, 7):
            out = to_12_hour(f"{hour:02d}:{minute:02d}")
            clock, period = out.split(" ")
            h, m = clock.split(":")
            assert period == ("PM" if hour >= 12 else "AM")
            assert int(h) == (hour % 12 or 12)
            assert len(h) == 2 and m == f"{minute:02d}"


def test_parse_hhmm_strips_offset_suffix():
    assert parse_hhmm("05:10 (+06)") == "05:10"
    assert parse_hhmm("5:07") == "05:07"
    assert parse_hhmm("18:05") == "18:05"


@pytest.mark.parametrize("value", [None, "", "soon", "25:00", "12:61", 510])
def test_parse_hhmm_rejects_garbage(value):
    assert parse_hhmm(value) is None
