"""Status transitions between consecutive result snapshots."""

from dataclasses import dataclass
from datetime import timedelta
from typing import List, Optional, Sequence

from twwatch.codes import StepStatus, Style
from twwatch.ui import Console
from .workflow import StepResult, StepSignature, WorkflowResult, format_duration


INITIALIZATION_LABEL = "Initializing"
INITIALIZATION_INDEX = -1  # Pseudo-step, rendered without a progress counter
BULLET = "•"


@dataclass(frozen=True)
class StepTransition:
    """One step whose resolved status differs between two snapshots."""
    signature: StepSignature
    index: int
    total: int
    label: str
    status: StepStatus
    took: timedelta


def _single_difference(
    previous: StepResult,
    current: StepResult,
    signature: StepSignature,
    index: int,
    total: int,
) -> Optional[StepTransition]:
    status = current.resolved_status
    if previous.resolved_status == status:
        return None
    return StepTransition(
        signature=signature,
        index=index,
        total=total,
        label=signature.label,
        status=status,
        took=current.duration(),
    )


def diff_results(
    previous: Optional[WorkflowResult],
    current: Optional[WorkflowResult],
    steps: Sequence[StepSignature],
) -> List[StepTransition]:
    """
    Compute status transitions from ``previous`` to ``current``.

    Initialization is compared first, then every flattened step in order.
    A missing snapshot on either side means no change; a step missing from a
    snapshot counts as not started.
    """
    if previous is None or current is None:
        return []

    total = len(steps)
    transitions: List[StepTransition] = []
    initialization = _single_difference(
        previous.initialization,
        current.initialization,
        StepSignature(ref="", name=INITIALIZATION_LABEL),
        INITIALIZATION_INDEX,
        total,
    )
    if initialization is not None:
        transitions.append(initialization)

    for index, step in enumerate(steps):
        transition = _single_difference(
            previous.steps.get(step.ref, StepResult()),
            current.steps.get(step.ref, StepResult()),
            step,
            index,
            total,
        )
        if transition is not None:
            transitions.append(transition)
    return transitions


def print_status_header(console: Console, index: int, total: int, label: str) -> None:
    if index == INITIALIZATION_INDEX:
        header = f"{BULLET} {label}"
    else:
        header = f"{BULLET} ({index + 1}/{total}) {label}"
    console.nl()
    console.print(header, Style.INFO)


def print_status(
    console: Console,
    signature: StepSignature,
    status: StepStatus,
    took: timedelta,
    index: int,
    total: int,
    label: str,
) -> None:
    """Print the line announcing that a step reached ``status``."""
    if status == StepStatus.RUNNING:
        print_status_header(console, index, total, label)
    elif status == StepStatus.SKIPPED:
        console.print(f"{BULLET} skipped", Style.DIMMED)
    elif status == StepStatus.PASSED:
        console.nl()
        console.print(f"{BULLET} passed in {format_duration(took)}", Style.SUCCESS)
    elif status == StepStatus.ABORTED:
        console.nl()
        console.print(f"{BULLET} aborted", Style.FAILURE)
    else:
        # Anything else is a failure; optional steps only warn.
        console.nl()
        if signature.optional:
            console.print(f"{BULLET} {status.value} in {format_duration(took)} (ignored)", Style.WARNING)
        else:
            console.print(f"{BULLET} {status.value} in {format_duration(took)}", Style.FAILURE)


def print_transition(console: Console, transition: StepTransition) -> None:
    print_status(
        console,
        transition.signature,
        transition.status,
        transition.took,
        transition.index,
        transition.total,
        transition.label,
    )


def print_result_difference(
    console: Console,
    previous: Optional[WorkflowResult],
    current: Optional[WorkflowResult],
    steps: Sequence[StepSignature],
) -> bool:
    """Print every status transition; return whether anything changed."""
    transitions = diff_results(previous, current, steps)
    for transition in transitions:
        print_transition(console, transition)
    return bool(transitions)
