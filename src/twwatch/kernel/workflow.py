"""Pydantic models for test workflow signatures and results."""

from datetime import datetime, timedelta
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from twwatch.codes import StepStatus, WorkflowStatus


_MICROSECONDS_PER_MILLISECOND = 1000


def round_to_millisecond(value: timedelta) -> timedelta:
    """Round a duration to the nearest millisecond, halfway values away from zero."""
    micros = value // timedelta(microseconds=1)
    sign = -1 if micros < 0 else 1
    millis = (abs(micros) + _MICROSECONDS_PER_MILLISECOND // 2) // _MICROSECONDS_PER_MILLISECOND
    return timedelta(milliseconds=sign * millis)


def format_duration(value: timedelta) -> str:
    """Render a duration the way the workflow API prints them.

    Examples: ``0s``, ``250ms``, ``1.5s``, ``2m3.25s``, ``1h0m0s``.
    Sub-millisecond precision is dropped.
    """
    millis = round_to_millisecond(value) // timedelta(milliseconds=1)
    sign = "-" if millis < 0 else ""
    millis = abs(millis)
    if millis == 0:
        return "0s"
    if millis < 1000:
        return f"{sign}{millis}ms"

    hours, rest = divmod(millis, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    seconds, fraction = divmod(rest, 1000)
    text = str(seconds)
    if fraction:
        text += "." + f"{fraction:03d}".rstrip("0")
    if hours:
        return f"{sign}{hours}h{minutes}m{text}s"
    if minutes:
        return f"{sign}{minutes}m{text}s"
    return f"{sign}{text}s"


def _elapsed(start: Optional[datetime], end: Optional[datetime]) -> timedelta:
    if start is None or end is None:
        return timedelta(0)
    return round_to_millisecond(end - start)


class StepSignature(BaseModel):
    """A node of the declared workflow structure.

    Leaves are the atomic unit of status reporting; groups only organize
    their children and never receive a status line of their own.
    """
    ref: str  # Stable identifier within one execution
    name: str = ""
    category: str = ""
    optional: bool = False
    negative: bool = False
    children: List["StepSignature"] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def label(self) -> str:
        return self.name or self.category

    @property
    def is_leaf(self) -> bool:
        return not self.children


class StepResult(BaseModel):
    """Snapshot of one step; replaced wholesale by every result notification."""
    status: Optional[StepStatus] = None  # None: not started yet
    error_message: str = Field("", alias="errorMessage")
    exit_code: Optional[int] = Field(None, alias="exitCode")
    queued_at: Optional[datetime] = Field(None, alias="queuedAt")
    started_at: Optional[datetime] = Field(None, alias="startedAt")
    finished_at: Optional[datetime] = Field(None, alias="finishedAt")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def resolved_status(self) -> StepStatus:
        return self.status if self.status is not None else StepStatus.QUEUED

    def duration(self) -> timedelta:
        return _elapsed(self.queued_at, self.finished_at)


class WorkflowResult(BaseModel):
    """Complete status of an execution at one point in time."""
    status: Optional[WorkflowStatus] = None
    queued_at: Optional[datetime] = Field(None, alias="queuedAt")
    started_at: Optional[datetime] = Field(None, alias="startedAt")
    finished_at: Optional[datetime] = Field(None, alias="finishedAt")
    initialization: StepResult = Field(default_factory=StepResult)
    steps: Dict[str, StepResult] = Field(default_factory=dict)  # step ref -> result

    model_config = ConfigDict(populate_by_name=True)

    @property
    def is_finished(self) -> bool:
        return self.status in (WorkflowStatus.PASSED, WorkflowStatus.FAILED, WorkflowStatus.ABORTED)

    @property
    def is_passed(self) -> bool:
        return self.status == WorkflowStatus.PASSED

    @property
    def is_failed(self) -> bool:
        return self.status == WorkflowStatus.FAILED

    @property
    def is_aborted(self) -> bool:
        return self.status == WorkflowStatus.ABORTED

    def duration(self) -> timedelta:
        return _elapsed(self.queued_at, self.finished_at)


class Execution(BaseModel):
    """A test workflow execution as returned when it is scheduled."""
    id: str
    name: str = ""
    workflow_name: str = Field("", alias="workflowName")
    signature: List[StepSignature] = Field(default_factory=list)
    result: Optional[WorkflowResult] = None
    status_at: Optional[datetime] = Field(None, alias="statusAt")

    model_config = ConfigDict(populate_by_name=True)
