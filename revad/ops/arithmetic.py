# revad/ops/arithmetic.py
from ..core.var import Var, as_var
from ..core import tape as tape_mod  # module access for use_tape() compatibility
from ..core.primitives import lookup


def _unary(x, tag):
    """
    Generic unary primitive:
      - computes the new value from x's cached value
      - records one node on the active tape referencing x's node
    """
    x = as_var(x)
    prim = lookup(tag)
    node = tape_mod.global_tape.record(
        op_tag=tag, value=prim.value(x.val), operands=(x._node,)
    )
    return Var._wrap(node)


def _binary(x, y, tag):
    """Binary counterpart of `_unary`; plain numbers become constants."""
    x = as_var(x)
    y = as_var(y)
    prim = lookup(tag)
    node = tape_mod.global_tape.record(
        op_tag=tag, value=prim.value(x.val, y.val), operands=(x._node, y._node)
    )
    return Var._wrap(node)


def add(x, y): return _binary(x, y, "add")
def sub(x, y): return _binary(x, y, "sub")
def mul(x, y): return _binary(x, y, "mul")
def div(x, y): return _binary(x, y, "div")
def neg(x): return _unary(x, "neg")


def pow(x, y):
    """
    Power x**y with x, y Vars or numbers.

    Local partials:
      ∂out/∂x = y * x^(y-1)
      ∂out/∂y = x^y * log(x)        (taken as 0 where x <= 0)
    """
    return _binary(x, y, "pow")
