import json
from datetime import datetime

import pytest

from biphasic_engine.engine import ScheduleEngine
from scripts.run_countdown import _parse_at, _state_payload, main


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for var in (
        "BIPHASIC_TZ",
        "BIPHASIC_ALARM_THRESHOLD",
        "BIPHASIC_ALARM_ENABLED",
        "BIPHASIC_SCHEDULE_FILE",
        "BIPHASIC_TICK_INTERVAL",
    ):
        monkeypatch.delenv(var, raising=False)


def test_parse_at_accepts_minutes_and_seconds():
    engine = ScheduleEngine()
    moment = _parse_at("04:59:58", engine)
    assert (moment.hour, moment.minute, moment.second, moment.microsecond) == (4, 59, 58, 0)
    assert _parse_at("21:00", engine).second == 0


@pytest.mark.parametrize("value", ["25:00", "ab:cd", "12", "12:60", "10:00:61", "1:2:3:4"])
def test_parse_at_rejects_bad_times(value):
    with pytest.raises(ValueError, match="--at"):
        _parse_at(value, ScheduleEngine())


def test_state_payload_shape():
    state = ScheduleEngine().compute(datetime(2025, 1, 1, 4, 59, 58))
    assert _state_payload(state) == {
        "current_period": "SLEEPING",
        "period_label": "Core Sleep 2 (2 AM – 5 AM)",
        "headline": "Time to Wake Up",
        "next_event": {"label": "Core 2 End", "kind": "WAKE", "time": "05:00"},
        "countdown_seconds": 2,
        "countdown": "00:00:02",
    }


def test_main_prints_state_for_given_time(capsys):
    main(["--at", "04:59:58", "--tz", "UTC"])
    payload = json.loads(capsys.readouterr().out)
    assert payload["countdown"] == "00:00:02"
    assert payload["next_event"]["kind"] == "WAKE"


@pytest.mark.parametrize("argv", [["--at", "25:00"], ["--at", "ab:cd"], ["--tz", "Not/AZone"]])
def test_main_reports_bad_input_as_usage_error(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv + ([] if "--tz" in argv else ["--tz", "UTC"]))
    assert excinfo.value.code == 2
    assert "error:" in capsys.readouterr().err
