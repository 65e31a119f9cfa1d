"""Schedule definition: transition events plus the interval table they imply."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from biphasic_engine.errors import NoEventsConfigured, ScheduleError
from biphasic_engine.formatting import format_hour_label
from biphasic_engine.schema import MINUTES_PER_DAY, EventKind, PeriodBlock, ScheduleEvent

CANONICAL_EVENTS = (
    ScheduleEvent(21 * 60, EventKind.SLEEP, "Core 1 Start"),
    ScheduleEvent(1 * 60, EventKind.WAKE, "Core 1 End"),
    ScheduleEvent(2 * 60, EventKind.SLEEP, "Core 2 Start"),
    ScheduleEvent(5 * 60, EventKind.WAKE, "Core 2 End"),
)

# Checked in order; the first block containing a minute wins.
CANONICAL_BLOCKS = (
    PeriodBlock(1260, 60, True, "Core Sleep 1 (9 PM – 1 AM)"),
    PeriodBlock(60, 120, False, "Awake Period 1 (1 AM – 2 AM)"),
    PeriodBlock(120, 300, True, "Core Sleep 2 (2 AM – 5 AM)"),
    PeriodBlock(300, 1260, False, "Awake Period 2 (5 AM – 9 PM)"),
)


def _check_minute(value, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < MINUTES_PER_DAY:
        raise ScheduleError(f"{what}: minute_of_day must be an integer in [0, {MINUTES_PER_DAY - 1}], got {value!r}")


def block_coverage(blocks) -> np.ndarray:
    """Count how many blocks cover each minute of the day."""

    coverage = np.zeros(MINUTES_PER_DAY, dtype=int)
    for block in blocks:
        if block.start_minute < block.end_minute:
            coverage[block.start_minute : block.end_minute] += 1
        else:
            coverage[block.start_minute :] += 1
            coverage[: block.end_minute] += 1
    return coverage


def validate_blocks(blocks) -> None:
    """Raise ScheduleError unless the blocks cover every minute exactly once."""

    if not blocks:
        raise ScheduleError("Schedule has no period blocks")
    for index, block in enumerate(blocks, start=1):
        _check_minute(block.start_minute, f"Block {index} start")
        _check_minute(block.end_minute, f"Block {index} end")

    coverage = block_coverage(blocks)
    gaps = np.flatnonzero(coverage == 0)
    if gaps.size:
        raise ScheduleError(f"Period blocks leave minute {int(gaps[0])} uncovered")
    overlaps = np.flatnonzero(coverage > 1)
    if overlaps.size:
        raise ScheduleError(f"Period blocks overlap at minute {int(overlaps[0])}")


def validate_events(events) -> None:
    if not events:
        raise NoEventsConfigured("Schedule has no events")

    seen: dict[int, str] = {}
    for index, event in enumerate(events, start=1):
        _check_minute(event.minute_of_day, f"Event {index}")
        if not isinstance(event.kind, EventKind):
            raise ScheduleError(f"Event {index}: invalid kind {event.kind!r}")
        if event.minute_of_day in seen:
            raise ScheduleError(
                f"Event {index}: minute {event.minute_of_day} already used by '{seen[event.minute_of_day]}'"
            )
        seen[event.minute_of_day] = event.label


def derive_blocks(events) -> tuple[PeriodBlock, ...]:
    """Build the interval table implied by a list of transition events.

    Each event opens a block that lasts until the next event in clock order,
    wrapping past midnight. Blocks come back in the input order of the events
    that open them and are numbered per kind in that same order, so the
    canonical events yield the canonical table.
    """

    validate_events(events)
    starts = sorted(event.minute_of_day for event in events)

    numbering = {EventKind.SLEEP: 0, EventKind.WAKE: 0}
    blocks = []
    for event in events:
        start = event.minute_of_day
        end = next((minute for minute in starts if minute > start), starts[0])
        numbering[event.kind] += 1
        span = f"{format_hour_label(start)} – {format_hour_label(end)}"
        if event.kind is EventKind.SLEEP:
            label = f"Core Sleep {numbering[event.kind]} ({span})"
        else:
            label = f"Awake Period {numbering[event.kind]} ({span})"
        blocks.append(PeriodBlock(start, end, event.kind is EventKind.SLEEP, label))
    return tuple(blocks)


@dataclass(frozen=True)
class Schedule:
    """Immutable schedule injected into the engine."""

    events: tuple[ScheduleEvent, ...]
    blocks: tuple[PeriodBlock, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "events", tuple(self.events))
        object.__setattr__(self, "blocks", tuple(self.blocks))
        validate_events(self.events)
        validate_blocks(self.blocks)

    @classmethod
    def from_events(cls, events) -> "Schedule":
        events = tuple(events)
        return cls(events=events, blocks=derive_blocks(events))


CANONICAL_SCHEDULE = Schedule(events=CANONICAL_EVENTS, blocks=CANONICAL_BLOCKS)
