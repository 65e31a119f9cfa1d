"""CSV adapter for schedule definitions."""

from __future__ import annotations

import csv
import logging

from biphasic_engine.errors import NoEventsConfigured, ScheduleError
from biphasic_engine.formatting import format_minute_of_day
from biphasic_engine.schedule import Schedule
from biphasic_engine.schema import EventKind, ScheduleEvent

logger = logging.getLogger(__name__)

_VALID_KINDS = {kind.value for kind in EventKind}


def _parse_row(row: dict, row_number: int) -> ScheduleEvent:
    kind = (row.get("kind") or "").strip().upper()
    if kind not in _VALID_KINDS:
        raise ScheduleError(f"Row {row_number}: invalid kind '{row.get('kind')}'")

    minute_raw = (row.get("minute_of_day") or "").strip()
    time_raw = (row.get("time") or "").strip()
    if minute_raw:
        try:
            minute_of_day = int(minute_raw)
        except ValueError as exc:
            raise ScheduleError(f"Row {row_number}: invalid minute_of_day") from exc
    elif time_raw:
        try:
            hour_s, minute_s = time_raw.split(":")
            hour, minute = int(hour_s), int(minute_s)
        except ValueError as exc:
            raise ScheduleError(f"Row {row_number}: malformed time") from exc
        if not (0 <= hour <= 23 and 0 <= minute <= 59):
            raise ScheduleError(f"Row {row_number}: time out of range")
        minute_of_day = hour * 60 + minute
    else:
        raise ScheduleError(f"Row {row_number}: missing 'time' or 'minute_of_day'")

    if not 0 <= minute_of_day < 24 * 60:
        raise ScheduleError(f"Row {row_number}: minute_of_day out of range")

    label_raw = row.get("label")
    label = label_raw.strip() if label_raw and label_raw.strip() else f"{kind.title()} {format_minute_of_day(minute_of_day)}"

    return ScheduleEvent(minute_of_day=minute_of_day, kind=EventKind(kind), label=label)


def parse(file_path: str) -> Schedule:
    """Parse a CSV file into a schedule."""

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise NoEventsConfigured(f"{file_path}: empty schedule file")

        events = [_parse_row(row, row_number) for row_number, row in enumerate(reader, start=2)]

    schedule = Schedule.from_events(events)
    logger.info("loaded %d events from %s", len(schedule.events), file_path)
    return schedule
