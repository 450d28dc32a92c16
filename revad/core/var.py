# revad/core/var.py
from __future__ import annotations
import numbers
from typing import Any, Optional

import numpy as np

from .node import Node, make_constant, make_leaf


def _as_float(val: Any) -> np.float64:
    # bool is an int subclass but never a meaningful input variable
    if isinstance(val, bool) or not isinstance(val, numbers.Real):
        raise TypeError(
            f"Var only accepts real numeric scalars (int, float, numpy real), "
            f"but got {type(val)}"
        )
    return np.float64(val)


class Var:
    """
    Handle for reverse-mode Automatic Differentiation (AD).

    A Var pairs a graph Node with that node's forward value. Constructing a
    Var from a number creates a fresh leaf (an independent input); every
    arithmetic operator or function from `revad.ops` returns a new Var over
    a new operation node. Vars are never mutated.

    Attributes
    ----------
    val : numpy.float64
        Forward (primal) value, read-only.
    name : Optional[str]
        Debug name of a leaf.
    """

    __slots__ = ("_node", "_val")

    # numpy scalars on the left defer to our reflected operators
    __array_ufunc__ = None

    def __init__(self, val: Any, *, name: Optional[str] = None):
        self._node = make_leaf(_as_float(val), name=name)
        self._val = self._node.value

    @classmethod
    def _wrap(cls, node: Node) -> "Var":
        out = cls.__new__(cls)
        out._node = node
        out._val = node.value
        return out

    @property
    def val(self) -> np.float64:
        return self._val

    @property
    def name(self) -> Optional[str]:
        return self._node.name

    @property
    def is_leaf(self) -> bool:
        return self._node.is_leaf

    @property
    def is_constant(self) -> bool:
        return self._node.is_constant

    def value(self) -> float:
        return float(self._val)

    def __float__(self) -> float:
        return float(self._val)

    def __repr__(self):
        kind = self._node.kind.value if not self._node.is_op else self._node.op_tag
        return f"Var({float(self._val)!r}, {kind}, name={self.name!r})"

    # Branching on values is allowed; only the taken branch is recorded.
    def __lt__(self, other):
        return self._val < value_of(other)

    def __le__(self, other):
        return self._val <= value_of(other)

    def __gt__(self, other):
        return self._val > value_of(other)

    def __ge__(self, other):
        return self._val >= value_of(other)

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other) if _is_operand(other) else NotImplemented

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self) if _is_operand(other) else NotImplemented

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other) if _is_operand(other) else NotImplemented

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self) if _is_operand(other) else NotImplemented

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other) if _is_operand(other) else NotImplemented

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self) if _is_operand(other) else NotImplemented

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other) if _is_operand(other) else NotImplemented

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self) if _is_operand(other) else NotImplemented

    def __pow__(self, other):
        from ..ops.arithmetic import pow
        return pow(self, other) if _is_operand(other) else NotImplemented

    def __rpow__(self, other):
        from ..ops.arithmetic import pow
        return pow(other, self) if _is_operand(other) else NotImplemented

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pos__(self):
        return self


def _is_operand(x: Any) -> bool:
    return isinstance(x, Var) or (isinstance(x, numbers.Real) and not isinstance(x, bool))


def constant(val: Any) -> Var:
    """A Var backed by a Constant node: it never receives a derivative."""
    return Var._wrap(make_constant(_as_float(val)))


def as_var(x: Any) -> Var:
    """Ensure x is a Var; plain numbers are promoted to constants."""
    return x if isinstance(x, Var) else constant(x)


def value_of(x: Any) -> Any:
    """Numeric value of a Var; plain numbers pass through unchanged."""
    return x._val if isinstance(x, Var) else x
