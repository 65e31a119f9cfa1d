"""JSON adapter for schedule definitions."""

from __future__ import annotations

import json
import logging

from biphasic_engine.errors import ScheduleError
from biphasic_engine.formatting import format_minute_of_day
from biphasic_engine.schedule import Schedule
from biphasic_engine.schema import EventKind, ScheduleEvent

logger = logging.getLogger(__name__)

_VALID_KINDS = {kind.value for kind in EventKind}


def _parse_minute(item: dict, index: int) -> int:
    if item.get("minute_of_day") is not None:
        raw = item["minute_of_day"]
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise ScheduleError(f"Item {index}: minute_of_day must be an integer")
        return raw

    raw_time = item.get("time")
    if not raw_time:
        raise ScheduleError(f"Item {index}: missing 'time' or 'minute_of_day'")
    try:
        hour_s, minute_s = str(raw_time).strip().split(":")
        hour, minute = int(hour_s), int(minute_s)
    except ValueError as exc:
        raise ScheduleError(f"Item {index}: malformed time {raw_time!r}") from exc
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ScheduleError(f"Item {index}: time out of range {raw_time!r}")
    return hour * 60 + minute


def _parse_item(item: dict, index: int) -> ScheduleEvent:
    if not isinstance(item, dict):
        raise ScheduleError(f"Item {index}: expected an object")

    kind = str(item.get("kind", "")).strip().upper()
    if kind not in _VALID_KINDS:
        raise ScheduleError(f"Item {index}: invalid kind '{item.get('kind')}'")

    minute_of_day = _parse_minute(item, index)
    if not 0 <= minute_of_day < 24 * 60:
        raise ScheduleError(f"Item {index}: minute_of_day out of range {minute_of_day}")

    label_raw = item.get("label")
    label = str(label_raw).strip() if label_raw else f"{kind.title()} {format_minute_of_day(minute_of_day)}"

    return ScheduleEvent(minute_of_day=minute_of_day, kind=EventKind(kind), label=label)


def parse(file_path: str) -> Schedule:
    """Parse a JSON file into a schedule."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if isinstance(payload, dict):
        payload = payload.get("events")
    if not isinstance(payload, list):
        raise ScheduleError("JSON payload must be a list of events or an object with an 'events' list")

    events = [_parse_item(item, i) for i, item in enumerate(payload, start=1)]
    schedule = Schedule.from_events(events)
    logger.info("loaded %d events from %s", len(schedule.events), file_path)
    return schedule
