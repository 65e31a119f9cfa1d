from datetime import datetime

from biphasic_engine.engine import ScheduleEngine
from ui_demo_streamlit.app import build_view


def test_build_view_before_wake():
    view = build_view(ScheduleEngine(), datetime(2025, 1, 1, 4, 59, 58), alarm_enabled=True)

    assert view["clock"] == "04:59:58"
    assert view["status"] == "Sleeping"
    assert view["headline"] == "Time to Wake Up"
    assert view["next_label"] == "Core 2 End"
    assert view["next_time"] == "05:00"
    assert view["countdown"] == "00:00:02"
    assert view["tone"].frequency_hz == 660.0
    assert view["schedule"][0] == {"Block": "Core Sleep 1", "Window": "09:00 PM - 01:00 AM (4 hr)"}


def test_build_view_quiet_when_disabled():
    view = build_view(ScheduleEngine(), datetime(2025, 1, 1, 12, 0, 0), alarm_enabled=False)
    assert view["status"] == "Awake"
    assert view["headline"] == "Time to Sleep"
    assert view["tone"] is None
