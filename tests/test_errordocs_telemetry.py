from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest

from errordocs.settings import RuntimeSettings
from errordocs.utils import telemetry


@pytest.fixture()
def settings(tmp_path: Path) -> RuntimeSettings:
    return RuntimeSettings(home_dir=tmp_path, log_dir=tmp_path / "logs")


def test_record_and_read_back(settings: RuntimeSettings, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERRORDOCS_TELEMETRY", "1")
    telemetry.record_structured_event(settings, "errordocs.check", status="start", component="cli")
    telemetry.record_structured_event(
        settings,
        "errordocs.check",
        status="success",
        component="cli",
        duration_ms=12.5,
        payload={"documents": 3},
    )

    lines = settings.telemetry_file.read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[1])["durationMs"] == 12.5
    events = list(telemetry.iter_events(settings))
    assert [event["status"] for event in events] == ["start", "success"]
    assert events[1]["payload"] == {"documents": 3}
    assert not hasattr(telemetry, "summarize")


def test_disabled_telemetry_writes_nothing(settings: RuntimeSettings, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERRORDOCS_TELEMETRY", "off")

    telemetry.record_structured_event(settings, "errordocs.check")

    assert not settings.telemetry_file.exists()
    assert list(telemetry.iter_events(settings)) == []


def test_invalid_records_are_rejected(settings: RuntimeSettings, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERRORDOCS_TELEMETRY", "1")

    with pytest.raises(ValueError):
        telemetry.record_structured_event(settings, "errordocs.check", level="debug")
    with pytest.raises(ValueError):
        telemetry.record_structured_event(settings, " ")
    with pytest.raises(jsonschema.ValidationError):
        telemetry._telemetry_validator().validate({"ts": 1.0, "event": "e", "payload": {}, "level": "loud"})
