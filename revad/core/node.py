# revad/core/node.py
from __future__ import annotations
import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

# Shared by every node ever built: strictly increasing, so a node always has
# a larger uid than its operands. Also the display id of unnamed leaves.
_uids = itertools.count()


class NodeKind(Enum):
    CONSTANT = "constant"
    LEAF = "leaf"
    UNARY = "unary"
    BINARY = "binary"


@dataclass(frozen=True, eq=False)
class Node:
    """
    One vertex of the expression graph.

    Attributes
    ----------
    kind     : NodeKind
        Which variant this node is (constant, leaf, unary or binary op).
    op_tag   : str
        Primitive name for operation nodes (e.g. "mul", "log"); "const" or
        "leaf" otherwise.
    value    : float
        Forward value, computed once when the node is built.
    operands : Tuple[Node, ...]
        Direct inputs of an operation node, all built strictly earlier.
        Empty for constants and leaves.
    name     : Optional[str]
        Optional debug name (leaves only).
    index    : Optional[int]
        Position on the tape that recorded this node; None for constants
        and leaves, which are never recorded.
    uid      : int
        Global construction stamp; sorting by uid is a topological order.

    Equality is identity (eq=False): two leaves holding the same number are
    different variables.
    """
    kind: NodeKind
    op_tag: str
    value: float
    operands: Tuple["Node", ...] = ()
    name: Optional[str] = None
    index: Optional[int] = None
    uid: int = field(default_factory=lambda: next(_uids))

    @property
    def is_leaf(self) -> bool:
        return self.kind is NodeKind.LEAF

    @property
    def is_constant(self) -> bool:
        return self.kind is NodeKind.CONSTANT

    @property
    def is_op(self) -> bool:
        return self.kind is NodeKind.UNARY or self.kind is NodeKind.BINARY

    def label(self) -> str:
        """Short reference used by the graph printers."""
        if self.kind is NodeKind.LEAF:
            return f"Leaf<{self.name if self.name is not None else self.uid}>"
        if self.kind is NodeKind.CONSTANT:
            return f"Const<{self.value:g}>"
        return f"Node{self.index}"


def make_constant(value: float) -> Node:
    return Node(kind=NodeKind.CONSTANT, op_tag="const", value=value)


def make_leaf(value: float, name: Optional[str] = None) -> Node:
    return Node(kind=NodeKind.LEAF, op_tag="leaf", value=value, name=name)
