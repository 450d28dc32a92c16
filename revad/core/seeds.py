# revad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the graph. Each helper records on a fresh, isolated tape.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List, Tuple

from .var import Var, value_of
from .tape import use_tape
from .engine import reverse


def value(x: Any) -> Any:
    """Return the numeric value of a Var as a float; pass through plain numbers unchanged."""
    return float(value_of(x)) if isinstance(x, Var) else x


# ----------------------------- single-input ----------------------------- #
def derivative(f: Callable[[Var], Any], x0: float) -> float:
    """
    Derivative of a scalar function y=f(x) at x0.
    Runs one reverse pass within a fresh, isolated tape.
    """
    with use_tape():
        x = Var(x0, name="x")
        return reverse(f(x))[x]


# ----------------------------- multi-input ------------------------------ #
def value_and_grad(f: Callable[[Dict[str, Var]], Any],
                   inputs: Dict[str, float]) -> Tuple[float, Dict[str, float]]:
    """
    Value and gradient of y=f(vars) w.r.t. ALL inputs (dict form), from ONE
    reverse pass.

    Parameters
    ----------
    f       : function taking a dict {name: Var} and returning a Var
              (a plain number is treated as a constant output)
    inputs  : dict {name: numeric}

    Returns
    -------
    (y, {name: dy/dname})  # gradients in the same key order as `inputs`
    """
    with use_tape():
        xs: Dict[str, Var] = {k: Var(v, name=k) for k, v in inputs.items()}
        y = f(xs)
        adj = reverse(y)
        return float(value_of(y)), {k: adj[xs[k]] for k in inputs.keys()}


def gradient(f: Callable[[Dict[str, Var]], Any],
             inputs: Dict[str, float]) -> Dict[str, float]:
    """Same as value_and_grad() without the value."""
    return value_and_grad(f, inputs)[1]


def gradient_list(f: Callable[[List[Var]], Any],
                  x0_list: Iterable[float]) -> List[float]:
    """
    Same as gradient(), but the inputs are provided as a list and the result
    is a list of partials in the same order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    gradient_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    with use_tape():
        xs: List[Var] = [Var(v, name=f"x{i}") for i, v in enumerate(x0_list)]
        return reverse(f(xs)).wrt(*xs)
