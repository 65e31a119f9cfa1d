"""Display helpers for clock values and schedule blocks."""

from __future__ import annotations

from biphasic_engine.schema import ComputedState, EventKind, PeriodBlock


def format_clock(total_seconds: int) -> str:
    """Format a duration as HH:MM:SS; hours are not wrapped at 24."""

    total_seconds = max(0, int(total_seconds))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_minute_of_day(minute_of_day: int) -> str:
    """Format minutes past midnight as a 24h HH:MM string."""

    hours = (minute_of_day // 60) % 24
    return f"{hours:02d}:{minute_of_day % 60:02d}"


def format_12h(minute_of_day: int) -> str:
    """Format minutes past midnight as a zero-padded 12h string, e.g. 09:00 PM."""

    hours, minutes = divmod(minute_of_day % (24 * 60), 60)
    suffix = "AM" if hours < 12 else "PM"
    return f"{(hours % 12) or 12:02d}:{minutes:02d} {suffix}"


def format_hour_label(minute_of_day: int) -> str:
    """Short 12h label used in block names: 9 PM, 12 AM, 9:30 PM."""

    hours, minutes = divmod(minute_of_day % (24 * 60), 60)
    suffix = "AM" if hours < 12 else "PM"
    hour = (hours % 12) or 12
    if minutes:
        return f"{hour}:{minutes:02d} {suffix}"
    return f"{hour} {suffix}"


def _format_duration_hours(duration_minutes: int) -> str:
    hours, minutes = divmod(duration_minutes, 60)
    if not minutes:
        return f"{hours} hr"
    if not hours:
        return f"{minutes} min"
    return f"{hours} hr {minutes} min"


def describe_block(block: PeriodBlock) -> str:
    """Return the schedule-table range, e.g. '09:00 PM - 01:00 AM (4 hr)'."""

    span = f"{format_12h(block.start_minute)} - {format_12h(block.end_minute)}"
    return f"{span} ({_format_duration_hours(block.duration_minutes)})"


def headline(state: ComputedState) -> str:
    if state.next_event.kind is EventKind.SLEEP:
        return "Time to Sleep"
    return "Time to Wake Up"
