import json

import pytest

from biphasic_engine.adapters.csv_adapter import parse as parse_csv
from biphasic_engine.adapters.json_adapter import parse as parse_json
from biphasic_engine.errors import ScheduleError
from biphasic_engine.schema import EventKind


def test_csv_parse_success(tmp_path):
    path = tmp_path / "schedule.csv"
    path.write_text(
        "kind,time,label\n"
        "sleep,23:00,Night\n"
        "WAKE,07:00,\n",
        encoding="utf-8",
    )
    schedule = parse_csv(str(path))
    assert [event.minute_of_day for event in schedule.events] == [1380, 420]
    assert schedule.events[1].kind is EventKind.WAKE
    assert schedule.events[1].label == "Wake 07:00"
    assert schedule.blocks[0].label == "Core Sleep 1 (11 PM – 7 AM)"


def test_csv_parse_invalid_row(tmp_path):
    path = tmp_path / "schedule.csv"
    path.write_text("kind,time,label\nnap,25:00,x\n", encoding="utf-8")
    with pytest.raises(ScheduleError, match="Row 2"):
        parse_csv(str(path))


def test_json_parse_success(tmp_path):
    path = tmp_path / "schedule.json"
    payload = [
        {"kind": "SLEEP", "minute_of_day": 1260, "label": "Core 1 Start"},
        {"kind": "WAKE", "time": "05:00", "label": "Core 1 End"},
    ]
    path.write_text(json.dumps(payload), encoding="utf-8")
    schedule = parse_json(str(path))
    assert len(schedule.events) == 2
    assert schedule.blocks[1].label == "Awake Period 1 (5 AM – 9 PM)"


def test_json_parse_events_object(tmp_path):
    path = tmp_path / "schedule.json"
    path.write_text(json.dumps({"events": [{"kind": "wake", "time": "06:30"}]}), encoding="utf-8")
    schedule = parse_json(str(path))
    assert schedule.events[0].minute_of_day == 390


def test_json_parse_malformed(tmp_path):
    path = tmp_path / "schedule.json"
    path.write_text(json.dumps([{"kind": "SLEEP", "time": "bad"}]), encoding="utf-8")
    with pytest.raises(ScheduleError, match="Item 1"):
        parse_json(str(path))


def test_json_parse_duplicate_minutes(tmp_path):
    path = tmp_path / "schedule.json"
    payload = [{"kind": "SLEEP", "time": "22:00"}, {"kind": "WAKE", "time": "22:00"}]
    path.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ScheduleError):
        parse_json(str(path))
