"""Flatten the step signature tree into the sequence of reported steps."""

from typing import Iterable, List, Tuple

from .workflow import StepSignature


def flatten_signatures(signature: Iterable[StepSignature]) -> Tuple[StepSignature, ...]:
    """
    Return the leaf steps of a signature forest in execution order.

    Traversal is depth-first, left to right. Groups contribute only their
    descendants; a node is emitted iff it has no children.
    """
    leaves: List[StepSignature] = []
    stack = list(reversed(list(signature)))
    while stack:
        node = stack.pop()
        if node.is_leaf:
            leaves.append(node)
        else:
            stack.extend(reversed(node.children))
    return tuple(leaves)
