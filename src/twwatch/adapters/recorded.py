"""Replay a recorded notification stream from a JSON Lines file.

Each non-blank line holds one notification record, either tagged with
``type`` or in the untagged API shape (``{"log": ...}``, ``{"result": ...}``,
``{"output": ...}``).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterator, TextIO, Union

from pydantic import ValidationError

from twwatch.client import NotificationStreamError
from twwatch.config.logging import get_logger
from twwatch.kernel.notifications import (
    LogNotification,
    OutputNotification,
    ResultNotification,
    parse_notification,
)

logger = get_logger(__name__)

AnyNotification = Union[OutputNotification, ResultNotification, LogNotification]


class RecordedNotificationClient:
    """Notification client backed by a ``.jsonl`` recording."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def get_execution_notifications(self, execution_id: str) -> Iterator[AnyNotification]:
        """Open the recording and return a lazy iterator over its notifications.

        Raises FileNotFoundError immediately if the recording is missing.
        """
        if not self.path.is_file():
            raise FileNotFoundError(f"Notification recording not found: {self.path}")
        handle = open(self.path, "r", encoding="utf-8")
        logger.debug("Replaying notifications of %s from %s", execution_id, self.path)
        return self._read(handle)

    def _read(self, handle: TextIO) -> Iterator[AnyNotification]:
        with handle:
            for lineno, line in enumerate(handle, start=1):
                if not line.strip():
                    continue
                try:
                    data = json.loads(line)
                except json.JSONDecodeError as e:
                    raise NotificationStreamError(f"{self.path}:{lineno}: invalid JSON: {e}") from e
                if not isinstance(data, dict):
                    raise NotificationStreamError(f"{self.path}:{lineno}: notification must be a JSON object")
                try:
                    yield parse_notification(data)
                except ValidationError as e:
                    raise NotificationStreamError(f"{self.path}:{lineno}: invalid notification: {e}") from e
