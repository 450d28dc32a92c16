# revad/core/primitives.py
"""
Dispatch table of the differentiable primitives.

Every row gives the forward rule and the local partial derivatives of one
operation, both as pure functions of the operand values. The overload layer
(`revad.ops`) uses `forward` when building a node; the engine calls
`partials` during the backward sweep. Adding an operation means adding a
row here and an overload in `revad.ops`.

Values are numpy float64 so that domain and range errors follow IEEE-754
(NaN / ±inf) instead of raising like the `math` module does.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

import numpy as np
from scipy.special import erf as _erf

from ..config import fp_errstate

SQRT_TWO_PI = np.sqrt(2.0 * np.pi)
TWO_OVER_SQRT_PI = 2.0 / np.sqrt(np.pi)


@dataclass(frozen=True)
class Primitive:
    """
    op_tag   : name recorded on the node
    arity    : 1 (unary) or 2 (binary)
    forward  : operand values -> output value
    partials : operand values -> tuple of ∂out/∂operand, one per operand
    """
    op_tag: str
    arity: int
    forward: Callable[..., float]
    partials: Callable[..., Tuple[float, ...]]

    def value(self, *args) -> np.float64:
        args = [np.float64(a) for a in args]
        with fp_errstate():
            return np.float64(self.forward(*args))

    def local_partials(self, *args) -> Tuple[np.float64, ...]:
        args = [np.float64(a) for a in args]
        with fp_errstate():
            return tuple(np.float64(d) for d in self.partials(*args))


def _pow_dexp(a, b):
    # ∂(a^b)/∂b = a^b·ln(a) is only defined for a > 0
    if a > 0:
        return (a ** b) * np.log(a)
    return 0.0


def _norm_pdf(a):
    return np.exp(-0.5 * a * a) / SQRT_TWO_PI


_ROWS = [
    # ---------------------------- binary ---------------------------- #
    Primitive("add", 2, lambda a, b: a + b, lambda a, b: (1.0, 1.0)),
    Primitive("sub", 2, lambda a, b: a - b, lambda a, b: (1.0, -1.0)),
    Primitive("mul", 2, lambda a, b: a * b, lambda a, b: (b, a)),
    Primitive("div", 2, lambda a, b: a / b,
              lambda a, b: (1.0 / b, -a / np.square(b))),
    Primitive("pow", 2, lambda a, b: a ** b,
              lambda a, b: (b * a ** (b - 1.0), _pow_dexp(a, b))),
    # ---------------------------- unary ----------------------------- #
    Primitive("neg", 1, lambda a: -a, lambda a: (-1.0,)),
    Primitive("sin", 1, np.sin, lambda a: (np.cos(a),)),
    Primitive("cos", 1, np.cos, lambda a: (-np.sin(a),)),
    Primitive("tan", 1, np.tan, lambda a: (1.0 + np.square(np.tan(a)),)),
    Primitive("exp", 1, np.exp, lambda a: (np.exp(a),)),
    Primitive("log", 1, np.log, lambda a: (1.0 / a,)),
    Primitive("sqrt", 1, np.sqrt, lambda a: (0.5 / np.sqrt(a),)),
    Primitive("tanh", 1, np.tanh, lambda a: (1.0 - np.square(np.tanh(a)),)),
    Primitive("erf", 1, _erf,
              lambda a: (TWO_OVER_SQRT_PI * np.exp(-a * a),)),
    Primitive("norm_cdf", 1, lambda a: 0.5 * (1.0 + _erf(a / np.sqrt(2.0))),
              lambda a: (_norm_pdf(a),)),
]

PRIMITIVES: Dict[str, Primitive] = {p.op_tag: p for p in _ROWS}


def lookup(op_tag: str) -> Primitive:
    try:
        return PRIMITIVES[op_tag]
    except KeyError:
        raise KeyError(f"unknown primitive {op_tag!r}") from None
