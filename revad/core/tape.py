# revad/core/tape.py
from __future__ import annotations
import logging
import weakref
from typing import Iterator, List, Optional, Sequence
from contextlib import contextmanager
from .node import Node, NodeKind

logger = logging.getLogger(__name__)


class Tape:
    """
    Recording of operation nodes, in construction order.

    The tape only holds weak references: a node is owned by the Vars and
    parent nodes that reference it, and drops off the tape once the last of
    them is released. Leaves and constants have no operands and are not
    recorded. The backward sweep does not use the tape; it follows operand
    references from the output.
    """
    def __init__(self):
        # index -> node; entries vanish when their node is collected
        self._nodes: "weakref.WeakValueDictionary[int, Node]" = weakref.WeakValueDictionary()
        self._count = 0

    @property
    def nodes(self) -> List[Node]:
        """Recorded nodes that are still alive, oldest first."""
        return list(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def reset(self):
        """Forget every recorded node. Vars built earlier keep their own nodes."""
        logger.debug("resetting tape with %d live nodes", len(self._nodes))
        self._nodes.clear()
        self._count = 0

    def record(self, *, op_tag: str, value, operands: Sequence[Node]) -> Node:
        """
        Build an operation Node over `operands`, record it and return it.
        `value` must already be computed from the operands' values.
        """
        kind = NodeKind.UNARY if len(operands) == 1 else NodeKind.BINARY
        node = Node(kind=kind, op_tag=op_tag, value=value,
                    operands=tuple(operands), index=self._count)
        self._nodes[self._count] = node
        self._count += 1
        return node

# Global default tape
global_tape = Tape()

@contextmanager
def use_tape(tape: Optional[Tape] = None):
    """
    Context manager to temporarily record on a fresh (or given) tape:
        with use_tape() as t:
            ... build computation ...
            print_graph_summary(t)
    """
    from . import tape as _tape_mod  # module access so readers see the swap
    prev = _tape_mod.global_tape
    try:
        _tape_mod.global_tape = tape if tape is not None else Tape()
        logger.debug("switched to tape %#x", id(_tape_mod.global_tape))
        yield _tape_mod.global_tape
    finally:
        _tape_mod.global_tape = prev
