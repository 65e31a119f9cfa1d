"""Runtime settings read from the environment."""

from __future__ import annotations

import datetime as dt
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from biphasic_engine.alarm import DEFAULT_ALARM_THRESHOLD
from biphasic_engine.engine import ScheduleEngine
from biphasic_engine.schedule import CANONICAL_SCHEDULE, Schedule

logger = logging.getLogger(__name__)

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class EngineSettings:
    timezone: str = "local"
    alarm_threshold: int = DEFAULT_ALARM_THRESHOLD
    alarm_enabled: bool = True
    schedule_file: Optional[str] = None
    tick_interval: float = 1.0


def resolve_tz(name: Optional[str]) -> Optional[dt.tzinfo]:
    """Resolve 'UTC', a fixed offset (+02:00, -0500) or an IANA name.

    'local' resolves to None: the system zone is then looked up for every
    instant, so daylight-saving changes are followed by long-running loops.
    Raises ValueError for anything else.
    """

    tz_name = (name or "local").strip()
    low = tz_name.lower()
    if low in {"", "local", "system"}:
        return None
    if low in {"utc", "z", "gmt"}:
        return dt.timezone.utc

    m = _OFFSET_RE.match(tz_name)
    if m:
        sign_s, hh_s, mm_s = m.groups()
        hh, mm = int(hh_s), int(mm_s)
        if hh > 23 or mm > 59:
            raise ValueError(f"Invalid timezone offset: {tz_name!r}")
        sign = 1 if sign_s == "+" else -1
        return dt.timezone(dt.timedelta(minutes=sign * (hh * 60 + mm)))

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Invalid timezone identifier: {tz_name!r}") from exc


def _parse_bool(raw: str, var: str) -> bool:
    low = raw.strip().lower()
    if low in _TRUE:
        return True
    if low in _FALSE:
        return False
    raise ValueError(f"{var}: expected a boolean, got {raw!r}")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> EngineSettings:
    """Build settings from BIPHASIC_* environment variables."""

    env = os.environ if environ is None else environ
    defaults = EngineSettings()

    threshold = defaults.alarm_threshold
    raw = env.get("BIPHASIC_ALARM_THRESHOLD")
    if raw not in (None, ""):
        try:
            threshold = int(raw)
        except ValueError as exc:
            raise ValueError(f"BIPHASIC_ALARM_THRESHOLD: expected an integer, got {raw!r}") from exc
        if threshold < 1:
            raise ValueError("BIPHASIC_ALARM_THRESHOLD must be at least 1")

    interval = defaults.tick_interval
    raw = env.get("BIPHASIC_TICK_INTERVAL")
    if raw not in (None, ""):
        try:
            interval = float(raw)
        except ValueError as exc:
            raise ValueError(f"BIPHASIC_TICK_INTERVAL: expected a number, got {raw!r}") from exc
        if interval <= 0:
            raise ValueError("BIPHASIC_TICK_INTERVAL must be positive")

    raw = env.get("BIPHASIC_ALARM_ENABLED")
    enabled = defaults.alarm_enabled if raw in (None, "") else _parse_bool(raw, "BIPHASIC_ALARM_ENABLED")

    return EngineSettings(
        timezone=env.get("BIPHASIC_TZ") or defaults.timezone,
        alarm_threshold=threshold,
        alarm_enabled=enabled,
        schedule_file=env.get("BIPHASIC_SCHEDULE_FILE") or None,
        tick_interval=interval,
    )


def load_schedule(path: str) -> Schedule:
    from biphasic_engine.adapters import csv_adapter, json_adapter

    suffix = Path(path).suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(path)
    if suffix == ".json":
        return json_adapter.parse(path)
    raise ValueError("Unsupported schedule format, expected .csv or .json")


def build_engine(settings: EngineSettings) -> ScheduleEngine:
    schedule = load_schedule(settings.schedule_file) if settings.schedule_file else CANONICAL_SCHEDULE
    tz = resolve_tz(settings.timezone)
    logger.info("engine ready: %d events, tz=%s, threshold=%ss", len(schedule.events), tz or "local", settings.alarm_threshold)
    return ScheduleEngine(schedule=schedule, tz=tz, alarm_threshold=settings.alarm_threshold)
