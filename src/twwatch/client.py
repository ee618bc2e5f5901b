"""Boundary to the API client that streams execution notifications."""

from typing import Iterable, Protocol, Union

from twwatch.kernel.notifications import LogNotification, OutputNotification, ResultNotification


class NotificationStreamError(RuntimeError):
    """Raised by a notification stream when its transport fails mid-stream."""
    pass


class NotificationClient(Protocol):
    """Anything able to open the ordered notification stream of an execution.

    The returned iterable must yield notifications in arrival order and
    raise NotificationStreamError if the underlying transport fails.
    """

    def get_execution_notifications(
        self, execution_id: str
    ) -> Iterable[Union[OutputNotification, ResultNotification, LogNotification]]:
        ...
