"""Notifications emitted while a test workflow execution is running.

Each notification is exactly one of: an instruction output, a result
snapshot, or a chunk of log text. They are modeled as a discriminated
union on ``type`` so consumers branch on the variant, never on which
fields happen to be populated.
"""

from datetime import datetime
from typing import Annotated, Any, Dict, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from twwatch.kernel.workflow import WorkflowResult


class OutputNotification(BaseModel):
    """Structured output of an instruction; not rendered."""
    type: Literal["output"] = "output"
    ref: Optional[str] = None
    output: Dict[str, Any] = Field(default_factory=dict)
    ts: Optional[datetime] = None


class ResultNotification(BaseModel):
    """Authoritative snapshot of the whole execution result."""
    type: Literal["result"] = "result"
    result: WorkflowResult
    ts: Optional[datetime] = None


class LogNotification(BaseModel):
    """Chunk of log text belonging to the currently active step."""
    type: Literal["log"] = "log"
    log: str = ""
    ref: Optional[str] = None  # Step tagged out of band by the stream
    ts: Optional[datetime] = None


Notification = Annotated[
    Union[OutputNotification, ResultNotification, LogNotification],
    Field(discriminator="type"),
]

_NOTIFICATION_ADAPTER: TypeAdapter = TypeAdapter(Notification)


def _infer_type(data: Mapping[str, Any]) -> str:
    # Untagged records follow the API shape: only one of the fields is set.
    if data.get("output") is not None:
        return "output"
    if data.get("result") is not None:
        return "result"
    return "log"


def parse_notification(data: Mapping[str, Any]) -> Union[OutputNotification, ResultNotification, LogNotification]:
    """Validate a single notification record.

    Records without a ``type`` tag are classified by the populated field.
    Raises pydantic.ValidationError for invalid records.
    """
    if "type" not in data:
        data = {**data, "type": _infer_type(data)}
    return _NOTIFICATION_ADAPTER.validate_python(data)
