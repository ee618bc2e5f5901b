"""Status and style constants for twwatch.

These constants prevent stringly-typed statuses and ensure
renderers branch on the same closed set of values the API reports.
"""

from enum import Enum


class StepStatus(str, Enum):
    """Status of a single workflow step."""

    # Not finished
    QUEUED = "queued"
    RUNNING = "running"

    # Finished
    SKIPPED = "skipped"
    PASSED = "passed"
    ABORTED = "aborted"

    # Failure family (rendered through the default arm)
    FAILED = "failed"
    ERRORED = "errored"
    TIMEOUT = "timeout"

    @property
    def is_terminal(self) -> bool:
        return self not in (StepStatus.QUEUED, StepStatus.RUNNING)


class WorkflowStatus(str, Enum):
    """Status of a whole workflow execution."""

    QUEUED = "queued"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"
    ABORTED = "aborted"


class Style(str, Enum):
    """Style class of a rendered line; the palette lives in twwatch.ui."""

    PLAIN = "plain"
    SUCCESS = "success"
    FAILURE = "failure"
    WARNING = "warning"
    INFO = "info"
    DIMMED = "dimmed"
