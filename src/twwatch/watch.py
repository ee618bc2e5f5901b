"""Watch a running test workflow execution and render its progress."""

from typing import Optional, Sequence

from twwatch.client import NotificationClient, NotificationStreamError
from twwatch.codes import Style
from twwatch.config.logging import get_logger
from twwatch.config.settings import get_settings
from twwatch.kernel.notifications import LogNotification, OutputNotification, ResultNotification
from twwatch.kernel.result_diff import diff_results, print_transition
from twwatch.kernel.signatures import flatten_signatures
from twwatch.kernel.structured_logs import LogSession
from twwatch.kernel.workflow import Execution, StepSignature, WorkflowResult, format_duration
from twwatch.ui import Console

logger = get_logger(__name__)


class WatchInterruptedError(RuntimeError):
    """The notification stream failed before the execution finished.

    ``result`` holds the last snapshot received before the failure.
    """

    def __init__(self, message: str, result: Optional[WorkflowResult] = None):
        super().__init__(message)
        self.result = result


def watch_execution_logs(
    execution_id: str,
    signature: Sequence[StepSignature],
    client: NotificationClient,
    console: Optional[Console] = None,
) -> Optional[WorkflowResult]:
    """
    Render the notification stream of one execution until it closes.

    Result snapshots are diffed against the previous one and printed as status
    transitions; log chunks are printed with their timestamps removed.
    Returns the last snapshot received (None if there was none).
    """
    console = console or Console.from_settings()
    console.info("Getting logs from test workflow job", execution_id)
    logger.info("Watching execution %s", execution_id)

    notifications = client.get_execution_notifications(execution_id)
    steps = flatten_signatures(signature)

    result: Optional[WorkflowResult] = None
    session = LogSession()
    try:
        for notification in notifications:
            if isinstance(notification, OutputNotification):
                logger.debug("Skipping output notification for %s", notification.ref)
                continue
            if isinstance(notification, ResultNotification):
                logger.debug("Result notification: %s", notification.result.status)
                transitions = diff_results(result, notification.result, steps)
                if transitions:
                    # A partial timestamp stays buffered across unchanged snapshots.
                    session.flush(console)
                    for transition in transitions:
                        print_transition(console, transition)
                    session.start_section()
                result = notification.result
            elif isinstance(notification, LogNotification):
                session.feed(console, notification.log)
            else:
                raise TypeError(f"Unsupported notification: {type(notification).__name__}")
    except NotificationStreamError as e:
        logger.warning("Notification stream of %s interrupted: %s", execution_id, e)
        raise WatchInterruptedError(f"reading test workflow execution logs: {e}", result=result) from e
    finally:
        session.flush(console)
        console.nl()

    logger.info("Notification stream of %s closed", execution_id)
    return result


def report_watch_result(console: Console, result: Optional[WorkflowResult]) -> int:
    """Print the final verdict of a watched execution and return its exit code."""
    if result is None:
        console.warn("no result received for test workflow execution")
        return 1
    if result.initialization.error_message:
        console.warn("test workflow execution failed:\n")
        console.error(result.initialization.error_message)
        return 1
    if result.is_failed:
        console.warn("test workflow execution failed")
        return 1
    if result.is_aborted:
        console.warn("test workflow execution aborted")
        return 1
    if result.is_passed:
        console.success(
            "test workflow execution completed with success in " + format_duration(result.duration())
        )
    return 0


def print_execution_header(console: Console, execution: Execution) -> None:
    console.print("Test Workflow Execution:", Style.INFO)
    if execution.workflow_name:
        console.print(f"Name:            {execution.workflow_name}")
    console.print(f"Execution ID:    {execution.id}")
    if execution.name:
        console.print(f"Execution name:  {execution.name}")
    console.nl()


def watch_execution(
    execution: Execution,
    client: NotificationClient,
    console: Optional[Console] = None,
) -> int:
    """Watch ``execution`` to completion, report the verdict and return the exit code.

    The final snapshot is stored on ``execution``.
    """
    console = console or Console.from_settings()
    print_execution_header(console, execution)

    result = watch_execution_logs(execution.id, execution.signature, client, console)
    execution.result = result
    if result is not None and result.is_finished:
        execution.status_at = result.finished_at

    exit_code = report_watch_result(console, result)
    console.nl()
    console.shell_command(
        "Use following command to get test workflow execution details",
        get_settings().details_command.format(id=execution.id),
    )
    return exit_code
