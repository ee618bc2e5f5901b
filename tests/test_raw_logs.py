"""Tests for re-segmenting a complete log blob into steps."""

import re

import pytest

from twwatch.codes import StepStatus
from twwatch.kernel.raw_logs import BELL, ProtocolViolationError, print_raw_log_lines
from twwatch.kernel.signatures import flatten_signatures

from conftest import RecordingConsole, group, leaf, step_result


STEPS = flatten_signatures([leaf("A", name="A"), leaf("B", name="B")])


def render(logs, steps=STEPS, results=None, marker=None):
    console = RecordingConsole()
    print_raw_log_lines(console, logs, steps, results or {}, marker=marker)
    return console.output


def test_re_segmentation_example():
    """Lines are grouped under their step; B stays open while still running."""
    logs = (
        "2024-01-01T00:00:00.000000000Z [start:A]\n"
        "hello\n"
        "2024-01-01T00:00:00.100000000Z [start:B]\n"
        "world\n"
    )
    results = {
        "A": step_result(StepStatus.PASSED, 0, 0.1),
        "B": step_result(StepStatus.RUNNING, 0.1),
    }
    assert render(logs, results=results) == (
        "\n• Initializing\n"
        "\n• (1/2) A\n"
        f"hello{BELL}\n"
        "\n• passed in 100ms\n"
        "\n• (2/2) B\n"
        f"world{BELL}\n"
    )


def test_remaining_steps_are_closed_at_the_end():
    logs = "2024-01-01T00:00:00.000000000Z [start:A]\n"
    results = {
        "A": step_result(StepStatus.PASSED, 0, 1),
        "B": step_result(StepStatus.SKIPPED),
    }
    assert render(logs, results=results) == (
        "\n• Initializing\n"
        "\n• (1/2) A\n"
        "\n• passed in 1s\n"
        "\n• (2/2) B\n"
        "• skipped\n"
    )


def test_marker_can_skip_ahead():
    """Steps without log lines are still opened and closed in order."""
    steps = flatten_signatures([leaf("A", name="A"), leaf("B", name="B"), leaf("C", name="C")])
    logs = "[start:A]\n[start:C]\nend\n"
    results = {
        "A": step_result(StepStatus.PASSED, 0, 1),
        "B": step_result(StepStatus.FAILED, 1, 2),
        "C": step_result(StepStatus.PASSED, 2, 3),
    }
    assert render(logs, steps=steps, results=results) == (
        "\n• Initializing\n"
        "\n• (1/3) A\n"
        "\n• passed in 1s\n"
        "\n• (2/3) B\n"
        "\n• failed in 1s\n"
        "\n• (3/3) C\n"
        f"end{BELL}\n"
        "\n• passed in 1s\n"
    )


def test_repeated_marker_for_active_step_is_ignored():
    logs = "[start:A]\none\n[start:A]\ntwo\n"
    assert render(logs) == (
        "\n• Initializing\n"
        "\n• (1/2) A\n"
        f"one{BELL}\n"
        f"two{BELL}\n"
        "\n• (2/2) B\n"
    )


def test_without_markers_every_step_is_opened_after_the_log():
    assert render("noise\n") == (
        "\n• Initializing\n"
        f"noise{BELL}\n"
        "\n• (1/2) A\n"
        "\n• (2/2) B\n"
    )


def test_unknown_marker_fails_fast():
    with pytest.raises(ProtocolViolationError, match="'Z'"):
        render("[start:Z]\n")


def test_backward_marker_fails_fast():
    console = RecordingConsole()
    with pytest.raises(ProtocolViolationError) as excinfo:
        print_raw_log_lines(console, "[start:B]\n[start:A]\n", STEPS, {})
    assert "active step: B" in str(excinfo.value)
    assert isinstance(excinfo.value, ValueError)


def test_empty_log_with_no_steps():
    assert render("", steps=()) == "\n• Initializing\n"


def test_group_labels_come_from_leaves():
    steps = flatten_signatures([group("g", leaf("x", category="Shell"), name="Group")])
    assert "(1/1) Shell" in render("[start:x]\n", steps=steps)


def test_custom_marker():
    marker = re.compile(r"^::step (\S+)::$")
    output = render("::step B::\nbody\n", marker=marker)
    assert "\n• (2/2) B\n" in output
    assert f"body{BELL}\n" in output


def test_default_marker_follows_settings(monkeypatch):
    from twwatch.config.settings import reset_settings

    monkeypatch.setenv("TWWATCH_MARKER_PATTERN", r"^@@(\w+)$")
    reset_settings()
    output = render("@@B\n")
    assert "\n• (2/2) B\n" in output
    assert BELL not in output


def test_wide_characters_are_not_mistaken_for_a_timestamp():
    wide = "żółć" * 6
    output = render(f"{wide}\n2024-01-01T00:00:00.000000000Z {wide}\n")
    assert f"\n• Initializing\n{wide}{BELL}\n{wide}{BELL}\n" in output
