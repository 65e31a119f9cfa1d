"""Demo script for biphasic-engine."""

import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from biphasic_engine.adapters import json_adapter
from biphasic_engine.engine import ScheduleEngine
from biphasic_engine.formatting import describe_block, format_clock, headline


def main() -> None:
    engine = ScheduleEngine()
    for hour, minute, second in [(0, 0, 0), (1, 30, 0), (4, 59, 57), (20, 59, 59), (21, 0, 0)]:
        state = engine.compute(datetime(2025, 1, 1, hour, minute, second))
        cue = engine.cue_for(state, alarm_enabled=True)
        print(
            f"{hour:02d}:{minute:02d}:{second:02d}",
            state.period_label,
            "|",
            headline(state),
            format_clock(state.countdown_seconds),
            f"(cue {cue.frequency_hz:.0f} Hz)" if cue else "",
        )

    alternate = json_adapter.parse(str(Path(__file__).with_name("schedule.json")))
    print("Alternate schedule:")
    for block in alternate.blocks:
        print(" ", block.label, "-", describe_block(block))


if __name__ == "__main__":
    main()
