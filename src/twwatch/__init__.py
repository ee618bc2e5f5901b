"""twwatch: live renderer for test workflow execution logs."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("twwatch")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from twwatch.api import WatchOutcome, load_execution, load_notifications, render_logs, watch
from twwatch.codes import StepStatus, Style, WorkflowStatus

__all__ = [
    "__version__",
    "watch",
    "render_logs",
    "load_execution",
    "load_notifications",
    "WatchOutcome",
    "StepStatus",
    "WorkflowStatus",
    "Style",
]
