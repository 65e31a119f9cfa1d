"""Core data schema for the sleep schedule."""

from dataclasses import dataclass
from enum import Enum

MINUTES_PER_DAY = 24 * 60
SECONDS_PER_DAY = MINUTES_PER_DAY * 60


class EventKind(str, Enum):
    SLEEP = "SLEEP"
    WAKE = "WAKE"


class Period(str, Enum):
    SLEEPING = "SLEEPING"
    AWAKE = "AWAKE"


@dataclass(frozen=True)
class ScheduleEvent:
    """A daily transition into sleep or wake at a fixed minute of the day."""

    minute_of_day: int
    kind: EventKind
    label: str

    @property
    def second_of_day(self) -> int:
        return self.minute_of_day * 60


@dataclass(frozen=True)
class PeriodBlock:
    """Half-open interval of the day; wraps past midnight when start > end."""

    start_minute: int
    end_minute: int
    asleep: bool
    label: str

    def contains(self, minute_of_day: int) -> bool:
        if self.start_minute < self.end_minute:
            return self.start_minute <= minute_of_day < self.end_minute
        return minute_of_day >= self.start_minute or minute_of_day < self.end_minute

    @property
    def duration_minutes(self) -> int:
        return (self.end_minute - self.start_minute) % MINUTES_PER_DAY or MINUTES_PER_DAY


@dataclass(frozen=True)
class PeriodStatus:
    is_asleep: bool
    block_label: str


@dataclass(frozen=True)
class NextEvent:
    event: ScheduleEvent
    countdown_seconds: int


@dataclass(frozen=True)
class ComputedState:
    """Per-tick view of the schedule. Derived, never stored."""

    current_period: Period
    period_label: str
    next_event: ScheduleEvent
    countdown_seconds: int

    @property
    def is_asleep(self) -> bool:
        return self.current_period is Period.SLEEPING
