# revad/core/engine.py
from __future__ import annotations
import logging
from typing import Dict, Iterable, List

import numpy as np

from .node import Node
from .primitives import lookup
from .var import Var, as_var
from ..config import fp_errstate, get_config
from ..errors import NonLeafTargetError

logger = logging.getLogger(__name__)


class Adjoints:
    """
    Result of one reverse sweep: the adjoint of every node reached from the
    root, keyed by node identity. Unreached nodes have adjoint 0.

        adj = reverse(y)
        adj[x]            # dy/dx
        adj.wrt(x, z)     # [dy/dx, dy/dz]
    """
    __slots__ = ("_adj",)

    def __init__(self, adj: Dict[Node, np.float64]):
        self._adj = adj

    def __getitem__(self, x: Var) -> float:
        if not isinstance(x, Var):
            raise TypeError(f"adjoints are keyed by Var, got {type(x)}")
        return float(self._adj.get(x._node, 0.0))

    def __contains__(self, x: Var) -> bool:
        return isinstance(x, Var) and x._node in self._adj

    def __len__(self) -> int:
        return len(self._adj)

    def wrt(self, *xs: Var) -> List[float]:
        return [self[x] for x in xs]


def _reachable_ops(root: Node) -> List[Node]:
    """
    Operation nodes reachable from `root`, latest first.

    uids grow with construction and an operand is always built before the
    node using it, so descending uid is a reverse topological order.
    """
    seen = {root}
    stack = [root]
    ops: List[Node] = []
    while stack:
        node = stack.pop()
        if node.is_op:
            ops.append(node)
        for p in node.operands:
            if p not in seen:
                seen.add(p)
                stack.append(p)
    ops.sort(key=lambda n: n.uid, reverse=True)
    return ops


def reverse(y, seed=1.0) -> Adjoints:
    """
    Run a single reverse pass from the output `y`.

    Args:
        y: the output Var (a plain number is treated as a constant).
        seed: adjoint assigned to `y` before propagation (dy/dy = 1).

    Notes:
        - Only nodes reachable from `y` are visited, in reverse construction
          order, which is a reverse topological order of the graph.
        - For each operation node: adj[p] += adj[node] * (∂node/∂p), so the
          contributions of several parents to a shared node are summed.
        - Constants never receive an adjoint; leaves and constants end the
          propagation along their path.
        - Nothing outside the returned Adjoints is modified.
    """
    root = as_var(y)._node
    adj: Dict[Node, np.float64] = {root: np.float64(seed)}
    if not root.is_op:
        return Adjoints(adj)

    cfg = get_config()
    order = _reachable_ops(root)
    visited = 0
    with fp_errstate():
        # Backward sweep
        for node in order:
            a = adj.get(node)
            if a is None or (cfg.skip_zero_adjoints and a == 0):
                continue  # nothing to propagate
            visited += 1
            partials = lookup(node.op_tag).local_partials(
                *(p.value for p in node.operands)
            )
            for p, d in zip(node.operands, partials):
                if p.is_constant:
                    continue
                # Accumulate: adj[p] += adj[node] * (∂node/∂p)
                adj[p] = adj.get(p, 0.0) + a * d

    logger.debug("reverse sweep from %s: %d of %d reachable operations propagated",
                 root.label(), visited, len(order))
    return Adjoints(adj)


def _check_target(x) -> Var:
    if not isinstance(x, Var) or not x.is_leaf:
        raise NonLeafTargetError(
            f"derivatives are only defined with respect to leaf Vars, got {x!r}"
        )
    return x


def grad(y, x) -> float:
    """dy/dx for a leaf Var `x`; 0.0 if `y` does not depend on `x`."""
    x = _check_target(x)
    return reverse(y)[x]


def grads(y, xs: Iterable[Var]) -> List[float]:
    """[dy/dx for x in xs], computed from a single reverse sweep."""
    xs = [_check_target(x) for x in xs]
    return reverse(y).wrt(*xs)
