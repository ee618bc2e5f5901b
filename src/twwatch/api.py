"""Public API for twwatch.

High-level functions that load recorded inputs from disk and render them.
The CLI is a thin layer over these functions.
"""

import json
import os
import re
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel

from twwatch.adapters.recorded import RecordedNotificationClient
from twwatch.client import NotificationClient
from twwatch.config.logging import get_logger
from twwatch.config.settings import compile_marker
from twwatch.kernel.raw_logs import print_raw_log_lines
from twwatch.kernel.signatures import flatten_signatures
from twwatch.kernel.workflow import Execution, WorkflowResult
from twwatch.ui import Console
from twwatch.watch import watch_execution

logger = get_logger(__name__)

PathInput = Union[str, os.PathLike, Path]


def _normalize_path(path: PathInput) -> Path:
    """Normalize path input to Path object."""
    return Path(path) if not isinstance(path, Path) else path


class WatchOutcome(BaseModel):
    """Stable result model for a watched execution."""
    execution_id: str
    exit_code: int
    result: Optional[WorkflowResult] = None


def load_execution(path: PathInput) -> Execution:
    """Load an execution document (id, name, signature, optional result) from JSON."""
    path = _normalize_path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    logger.debug("Loaded execution document %s", path)
    return Execution.model_validate(data)


def load_notifications(path: PathInput) -> RecordedNotificationClient:
    """Return a client replaying the JSON Lines recording at ``path``."""
    return RecordedNotificationClient(_normalize_path(path))


def watch(
    execution: Union[Execution, PathInput],
    notifications: Union[NotificationClient, PathInput],
    console: Optional[Console] = None,
) -> WatchOutcome:
    """Watch ``execution`` through ``notifications`` and report the verdict.

    ``notifications`` is either a client or the path of a JSON Lines recording.
    """
    if not isinstance(execution, Execution):
        execution = load_execution(execution)
    client = notifications
    if isinstance(client, (str, os.PathLike)):
        client = load_notifications(client)

    exit_code = watch_execution(execution, client, console)
    return WatchOutcome(execution_id=execution.id, exit_code=exit_code, result=execution.result)


def render_logs(
    execution: Union[Execution, PathInput],
    logs: PathInput,
    console: Optional[Console] = None,
    marker: Optional[Union[str, "re.Pattern[str]"]] = None,
) -> None:
    """Render the complete log file of ``execution`` against its final result.

    Raises ProtocolViolationError if the step markers in the log do not
    follow the flattened step order.
    """
    if not isinstance(execution, Execution):
        execution = load_execution(execution)
    text = _normalize_path(logs).read_text(encoding="utf-8")
    if isinstance(marker, str):
        marker = compile_marker(marker)

    results = execution.result.steps if execution.result is not None else {}
    print_raw_log_lines(
        console or Console.from_settings(),
        text,
        flatten_signatures(execution.signature),
        results,
        marker=marker,
    )
