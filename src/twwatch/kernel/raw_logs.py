"""Re-segment a complete log blob into step-bounded blocks.

Used when the whole log of an execution is available at once and carries no
out-of-band step attribution. Lines starting with a step marker announce that
everything up to the next marker belongs to the named step.
"""

import re
from typing import List, Mapping, Optional, Sequence

from twwatch.config.logging import get_logger
from twwatch.ui import Console
from .result_diff import INITIALIZATION_INDEX, INITIALIZATION_LABEL, print_status, print_status_header
from .timestamps import strip_timestamp
from .workflow import StepResult, StepSignature

logger = get_logger(__name__)

BELL = "\x07"  # Appended to lines without step attribution


class ProtocolViolationError(ValueError):
    """Raised when a step marker names a step out of order or an unknown step."""
    pass


def _split_lines(logs: str) -> List[str]:
    lines = logs.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _find_step(steps: Sequence[StepSignature], ref: str, start: int) -> Optional[int]:
    for index in range(start, len(steps)):
        if steps[index].ref == ref:
            return index
    return None


def _close_step(
    console: Console,
    steps: Sequence[StepSignature],
    results: Mapping[str, StepResult],
    index: int,
) -> None:
    """Print the terminal status of ``steps[index]``, if it has one."""
    step = steps[index]
    result = results.get(step.ref)
    if result is None or result.status is None or not result.status.is_terminal:
        return
    print_status(console, step, result.status, result.duration(), index, len(steps), step.label)


def print_raw_log_lines(
    console: Console,
    logs: str,
    steps: Sequence[StepSignature],
    results: Mapping[str, StepResult],
    marker: Optional["re.Pattern[str]"] = None,
) -> None:
    """
    Print a full execution log, re-attributing lines to flattened steps.

    Markers must follow the order of ``steps``; a marker that names an
    earlier step, or a step that is not in ``steps``, raises
    ProtocolViolationError before anything is printed for it.
    """
    if marker is None:
        from twwatch.config.settings import get_settings

        marker = get_settings().marker()

    total = len(steps)
    index = INITIALIZATION_INDEX
    print_status_header(console, INITIALIZATION_INDEX, total, INITIALIZATION_LABEL)

    for line in _split_lines(logs):
        line = strip_timestamp(line)
        match = marker.search(line)
        if match is None:
            logger.debug("Unattributed log line: %r", line)
            console.print(line + BELL)
            continue

        ref = match.group(1)
        if index != INITIALIZATION_INDEX and steps[index].ref == ref:
            continue

        target = _find_step(steps, ref, index + 1)
        if target is None:
            active = steps[index].ref if index != INITIALIZATION_INDEX else INITIALIZATION_LABEL
            logger.error("Step marker '%s' out of order (active step: %s)", ref, active)
            raise ProtocolViolationError(
                f"step marker '{ref}' does not name a later step (active step: {active})"
            )

        while index < target:
            if index != INITIALIZATION_INDEX:
                _close_step(console, steps, results, index)
            index += 1
            print_status_header(console, index, total, steps[index].label)

    while index < total:
        if index != INITIALIZATION_INDEX:
            _close_step(console, steps, results, index)
        index += 1
        if index < total:
            print_status_header(console, index, total, steps[index].label)
