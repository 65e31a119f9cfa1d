"""Streamlit countdown display for the biphasic sleep schedule."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from biphasic_engine.alarm import DEFAULT_SAMPLE_RATE, synthesize_tone
from biphasic_engine.config import build_engine, load_settings
from biphasic_engine.engine import ScheduleEngine
from biphasic_engine.formatting import describe_block, format_clock, format_minute_of_day, headline


def _schedule_rows(engine: ScheduleEngine) -> list[dict[str, str]]:
    return [
        {"Block": block.label.split(" (")[0], "Window": describe_block(block)}
        for block in engine.schedule.blocks
    ]


def build_view(engine: ScheduleEngine, now: datetime, alarm_enabled: bool) -> dict[str, Any]:
    """Compute everything one frame of the UI needs."""

    state = engine.compute(now)
    tone = engine.cue_for(state, alarm_enabled)
    return {
        "clock": now.astimezone(engine.tz).strftime("%H:%M:%S") if now.tzinfo else now.strftime("%H:%M:%S"),
        "status": "Sleeping" if state.is_asleep else "Awake",
        "period_label": state.period_label,
        "headline": headline(state),
        "next_label": state.next_event.label,
        "next_time": format_minute_of_day(state.next_event.minute_of_day),
        "countdown": format_clock(state.countdown_seconds),
        "tone": tone,
        "schedule": _schedule_rows(engine),
    }


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Biphasic Sleep Tracker", layout="centered")
    st.title("Biphasic Sleep Tracker")

    settings = load_settings()
    try:
        engine = build_engine(settings)
    except ValueError as exc:
        st.error(f"Configuration error: {exc}")
        return

    if "alarm_enabled" not in st.session_state:
        st.session_state.alarm_enabled = settings.alarm_enabled
    if "user_id" not in st.session_state:
        st.session_state.user_id = str(uuid.uuid4())

    st.toggle("Alarm", key="alarm_enabled")

    @st.fragment(run_every=settings.tick_interval)
    def countdown_panel() -> None:
        view = build_view(engine, engine.now(), st.session_state.alarm_enabled)

        st.metric("Now", view["clock"])
        st.subheader(f"{view['status']}")
        st.caption(f"Currently in: {view['period_label']}")

        st.subheader(view["headline"])
        st.write(f"Next event: **{view['next_label']}** at **{view['next_time']}**")
        st.metric("Remaining", view["countdown"])

        if view["tone"] is not None:
            st.audio(synthesize_tone(view["tone"]), sample_rate=DEFAULT_SAMPLE_RATE, autoplay=True)

    countdown_panel()

    st.subheader("Your Daily Cycle")
    st.table(_schedule_rows(engine))
    st.caption(f"User ID: {st.session_state.user_id}")


if __name__ == "__main__":
    main()
