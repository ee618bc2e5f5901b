"""Pytest configuration and shared builders for tests.

No sys.path hacks - tests should import from installed twwatch package.
"""

import io
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from twwatch.config.settings import reset_settings
from twwatch.kernel.workflow import StepResult, StepSignature, WorkflowResult
from twwatch.ui import Console


FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def at(seconds: float) -> datetime:
    """Timestamp ``seconds`` after T0."""
    return T0 + timedelta(seconds=seconds)


def leaf(ref: str, name: str = "", category: str = "", optional: bool = False) -> StepSignature:
    return StepSignature(ref=ref, name=name, category=category, optional=optional)


def group(ref: str, *children: StepSignature, name: str = "") -> StepSignature:
    return StepSignature(ref=ref, name=name, children=list(children))


def step_result(status=None, queued: float = 0.0, finished=None) -> StepResult:
    return StepResult(
        status=status,
        queued_at=at(queued),
        finished_at=at(finished) if finished is not None else None,
    )


def snapshot(initialization=None, status=None, **steps: StepResult) -> WorkflowResult:
    return WorkflowResult(
        status=status,
        initialization=initialization or StepResult(),
        steps=steps,
    )


class RecordingConsole(Console):
    """Console writing uncoloured text to an in-memory buffer."""

    def __init__(self, color: bool = False):
        self.buffer = io.StringIO()
        super().__init__(stream=self.buffer, color=color)

    @property
    def output(self) -> str:
        return self.buffer.getvalue()


@pytest.fixture
def console() -> RecordingConsole:
    return RecordingConsole()


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Every test starts from default settings, unaffected by the caller's env."""
    for name in ("LOG_LEVEL", "LOG_FILE", "COLOR", "MARKER_PATTERN", "DETAILS_COMMAND"):
        monkeypatch.delenv(f"TWWATCH_{name}", raising=False)
    reset_settings()
    yield
    reset_settings()
