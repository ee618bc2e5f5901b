"""Tests for the public API surface."""

import pytest
from pydantic import ValidationError

import twwatch
from twwatch.api import WatchOutcome, load_execution, load_notifications, render_logs, watch
from twwatch.codes import WorkflowStatus
from twwatch.config import Settings
from twwatch.kernel.notifications import ResultNotification
from twwatch.kernel.raw_logs import ProtocolViolationError

from conftest import FIXTURES, RecordingConsole


BASIC = FIXTURES / "basic_run"


def test_root_exports():
    for name in ("watch", "render_logs", "load_execution", "load_notifications", "WatchOutcome"):
        assert hasattr(twwatch, name)
    assert callable(twwatch.watch)


def test_load_execution_accepts_str_paths():
    execution = load_execution(str(BASIC / "execution.json"))
    assert execution.id == "exec-123"
    assert [s.ref for s in execution.signature] == ["rclone", "rgroup"]
    assert execution.result.status == WorkflowStatus.PASSED


def test_watch_returns_outcome():
    console = RecordingConsole()
    outcome = watch(BASIC / "execution.json", BASIC / "notifications.jsonl", console=console)
    assert isinstance(outcome, WatchOutcome)
    assert outcome.execution_id == "exec-123"
    assert outcome.exit_code == 0
    assert outcome.result.is_passed
    assert "• (3/3) Lint" in console.output


def test_watch_accepts_loaded_inputs():
    execution = load_execution(BASIC / "execution.json")
    execution.result = None
    client = load_notifications(BASIC / "notifications.jsonl")
    outcome = watch(execution, client, console=RecordingConsole())
    assert execution.result is not None
    assert outcome.result == execution.result


def test_render_logs_with_custom_marker(tmp_path):
    raw = tmp_path / "raw.log"
    raw.write_text("## runit\nunit output\n", encoding="utf-8")
    console = RecordingConsole()
    render_logs(BASIC / "execution.json", raw, console=console, marker=r"^## (\w+)$")
    assert "\n• (2/3) Unit tests\nunit output\x07\n" in console.output


def test_render_logs_without_result(tmp_path):
    execution = load_execution(BASIC / "execution.json")
    execution.result = None
    console = RecordingConsole()
    render_logs(execution, BASIC / "raw.log", console=console)
    assert "passed in" not in console.output
    assert "• (3/3) Lint" in console.output


def test_render_logs_protocol_violation(tmp_path):
    raw = tmp_path / "raw.log"
    raw.write_text("[start:unknown]\n", encoding="utf-8")
    with pytest.raises(ProtocolViolationError):
        render_logs(BASIC / "execution.json", raw, console=RecordingConsole())


def test_render_logs_rejects_marker_without_group():
    with pytest.raises(ValueError, match="capture group"):
        render_logs(BASIC / "execution.json", BASIC / "raw.log", console=RecordingConsole(), marker="x")


class _StaticClient:
    """Any object with get_execution_notifications() can drive a watch."""

    def __init__(self, notifications):
        self.notifications = notifications

    def get_execution_notifications(self, execution_id):
        return iter(self.notifications)


def test_watch_accepts_any_notification_client():
    execution = load_execution(BASIC / "execution.json")
    finished = execution.result
    execution.result = None
    outcome = watch(execution, _StaticClient([ResultNotification(result=finished)]), console=RecordingConsole())
    assert outcome.exit_code == 0
    assert outcome.result == finished


def test_watch_accepts_str_recording_path():
    outcome = watch(str(BASIC / "execution.json"), str(BASIC / "notifications.jsonl"), console=RecordingConsole())
    assert outcome.exit_code == 0


def test_render_logs_and_settings_share_marker_rules():
    with pytest.raises(ValueError) as from_api:
        render_logs(BASIC / "execution.json", BASIC / "raw.log", console=RecordingConsole(), marker=r"(a)(b)")
    with pytest.raises(ValidationError) as from_settings:
        Settings(marker_pattern=r"(a)(b)")
    assert "exactly one capture group, got 2" in str(from_api.value)
    assert "exactly one capture group, got 2" in str(from_settings.value)
