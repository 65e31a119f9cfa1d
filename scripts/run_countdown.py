"""Print the biphasic schedule state once, or keep a live countdown running."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import threading
from dataclasses import replace
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from biphasic_engine.alarm import AudioCue
from biphasic_engine.config import build_engine, load_settings
from biphasic_engine.formatting import format_clock, format_minute_of_day, headline
from biphasic_engine.ticker import CountdownLoop


def _parse_at(value: str, engine) -> datetime:
    parts = value.strip().split(":")
    if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
        raise ValueError(f"--at expects HH:MM or HH:MM:SS, got {value!r}")
    hour, minute, second = (int(p) for p in parts + ["0"] * (3 - len(parts)))
    if hour > 23 or minute > 59 or second > 59:
        raise ValueError(f"--at time out of range: {value!r}")
    return engine.now().replace(hour=hour, minute=minute, second=second, microsecond=0)


def _state_payload(state) -> dict:
    return {
        "current_period": state.current_period.value,
        "period_label": state.period_label,
        "headline": headline(state),
        "next_event": {
            "label": state.next_event.label,
            "kind": state.next_event.kind.value,
            "time": format_minute_of_day(state.next_event.minute_of_day),
        },
        "countdown_seconds": state.countdown_seconds,
        "countdown": format_clock(state.countdown_seconds),
    }


def _terminal_bell(samples, sample_rate) -> None:
    sys.stdout.write("\a")
    sys.stdout.flush()


def _print_line(state) -> None:
    sys.stdout.write(
        f"\r{state.current_period.value:<8} | {state.next_event.label:<14} in {format_clock(state.countdown_seconds)}"
    )
    sys.stdout.flush()


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Biphasic sleep countdown")
    parser.add_argument("--schedule", help="Path to a CSV/JSON schedule file")
    parser.add_argument("--tz", help="Time zone: local, UTC, +HH:MM or an IANA name")
    parser.add_argument("--at", help="Compute the state at HH:MM[:SS] today and exit")
    parser.add_argument("--watch", action="store_true", help="Keep ticking once per second")
    parser.add_argument("--ticks", type=int, default=None, help="Stop watching after N ticks")
    parser.add_argument("--no-alarm", action="store_true", help="Start with the alarm disabled")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    settings = load_settings()
    if args.schedule:
        settings = replace(settings, schedule_file=args.schedule)
    if args.tz:
        settings = replace(settings, timezone=args.tz)
    if args.no_alarm:
        settings = replace(settings, alarm_enabled=False)
    try:
        engine = build_engine(settings)
        moment = _parse_at(args.at, engine) if args.at else engine.now()
    except ValueError as exc:
        parser.error(str(exc))

    if not args.watch:
        print(json.dumps(_state_payload(engine.compute(moment)), indent=2))
        return

    loop = CountdownLoop(
        engine,
        on_state=_print_line,
        cue=AudioCue(sink=_terminal_bell),
        alarm_enabled=settings.alarm_enabled,
    )
    stop = threading.Event()
    try:
        loop.run(stop, interval=settings.tick_interval, max_ticks=args.ticks)
    except KeyboardInterrupt:
        stop.set()
    print()


if __name__ == "__main__":
    main()
