from biphasic_engine.formatting import (
    describe_block,
    format_12h,
    format_clock,
    format_hour_label,
    format_minute_of_day,
)
from biphasic_engine.schedule import CANONICAL_BLOCKS


def test_format_clock():
    assert format_clock(3661) == "01:01:01"
    assert format_clock(90000) == "25:00:00"
    assert format_clock(-5) == "00:00:00"
    assert format_clock(0) == "00:00:00"
    assert format_clock(86400) == "24:00:00"


def test_minute_formats():
    assert format_minute_of_day(1260) == "21:00"
    assert format_minute_of_day(65) == "01:05"
    assert format_12h(0) == "12:00 AM"
    assert format_12h(720) == "12:00 PM"
    assert format_hour_label(1260) == "9 PM"
    assert format_hour_label(1350) == "10:30 PM"


def test_describe_block():
    assert describe_block(CANONICAL_BLOCKS[0]) == "09:00 PM - 01:00 AM (4 hr)"
    assert describe_block(CANONICAL_BLOCKS[1]) == "01:00 AM - 02:00 AM (1 hr)"
    assert describe_block(CANONICAL_BLOCKS[3]) == "05:00 AM - 09:00 PM (16 hr)"
