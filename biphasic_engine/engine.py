"""Countdown computation for the sleep schedule.

Every call recomputes from the full wall-clock time; nothing is carried
between ticks, so the functions here can be called repeatedly without
side effects.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo

from biphasic_engine.alarm import DEFAULT_ALARM_THRESHOLD, ToneSpec, should_fire_alarm, tone_for
from biphasic_engine.errors import InvalidTimeInput, NoEventsConfigured, ScheduleError
from biphasic_engine.schedule import CANONICAL_BLOCKS, CANONICAL_SCHEDULE, Schedule
from biphasic_engine.schema import (
    MINUTES_PER_DAY,
    SECONDS_PER_DAY,
    ComputedState,
    NextEvent,
    Period,
    PeriodStatus,
    ScheduleEvent,
)

logger = logging.getLogger(__name__)


def _check_range(value, upper: int, unit: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTimeInput(f"{unit} of day must be an integer, got {value!r}")
    if not 0 <= value < upper:
        raise InvalidTimeInput(f"{unit} of day must be in [0, {upper - 1}], got {value}")
    return value


def classify_period(minute_of_day: int, blocks=CANONICAL_BLOCKS) -> PeriodStatus:
    """Return whether the given minute falls in a sleep block, and which one."""

    _check_range(minute_of_day, MINUTES_PER_DAY, "Minute")
    for block in blocks:
        if block.contains(minute_of_day):
            return PeriodStatus(is_asleep=block.asleep, block_label=block.label)
    # Unreachable for a validated Schedule.
    raise ScheduleError(f"Minute {minute_of_day} is not covered by any period block")


def next_event(second_of_day: int, events) -> NextEvent:
    """Find the nearest upcoming event, wrapping to the next day.

    An event scheduled exactly at ``second_of_day`` counts as tomorrow's
    (countdown 86400). Ties keep the earliest event in ``events``.
    """

    _check_range(second_of_day, SECONDS_PER_DAY, "Second")
    if not events:
        raise NoEventsConfigured("Cannot pick a next event from an empty schedule")

    best: ScheduleEvent | None = None
    best_distance = SECONDS_PER_DAY + 1
    for event in events:
        event_second = event.second_of_day
        if event_second > second_of_day:
            distance = event_second - second_of_day
        else:
            distance = SECONDS_PER_DAY - second_of_day + event_second
        if distance < best_distance:
            best, best_distance = event, distance

    return NextEvent(event=best, countdown_seconds=best_distance)


def second_of_day(moment: datetime, tz: tzinfo | None = None) -> int:
    """Seconds past local midnight of ``moment`` in ``tz``.

    Aware datetimes are converted into ``tz``, or into the system zone in
    effect at that instant when ``tz`` is None. Naive ones are read as wall
    time already in that zone.
    """

    if moment.tzinfo is not None:
        moment = moment.astimezone(tz)
    return moment.hour * 3600 + moment.minute * 60 + moment.second


class ScheduleEngine:
    """Maps wall-clock time to the current period and next transition."""

    def __init__(
        self,
        schedule: Schedule = CANONICAL_SCHEDULE,
        tz: tzinfo | None = timezone.utc,
        alarm_threshold: int = DEFAULT_ALARM_THRESHOLD,
    ) -> None:
        self.schedule = schedule
        self.tz = tz
        self.alarm_threshold = alarm_threshold

    def state_at(self, second: int) -> ComputedState:
        upcoming = next_event(second, self.schedule.events)
        status = classify_period(second // 60, self.schedule.blocks)
        return ComputedState(
            current_period=Period.SLEEPING if status.is_asleep else Period.AWAKE,
            period_label=status.block_label,
            next_event=upcoming.event,
            countdown_seconds=upcoming.countdown_seconds,
        )

    def compute(self, now: datetime) -> ComputedState:
        state = self.state_at(second_of_day(now, self.tz))
        logger.debug(
            "state at %s: %s, next %s in %ss",
            now.isoformat(),
            state.current_period.value,
            state.next_event.label,
            state.countdown_seconds,
        )
        return state

    def now(self) -> datetime:
        if self.tz is None:
            return datetime.now().astimezone()
        return datetime.now(tz=self.tz)

    def should_fire(self, state: ComputedState, alarm_enabled: bool) -> bool:
        return should_fire_alarm(state.countdown_seconds, alarm_enabled, self.alarm_threshold)

    def cue_for(self, state: ComputedState, alarm_enabled: bool) -> ToneSpec | None:
        """Tone to play for this tick, or None when the policy says to stay quiet."""

        if not self.should_fire(state, alarm_enabled):
            return None
        return tone_for(state.next_event.kind)
