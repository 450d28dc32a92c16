# revad/core/__init__.py

"""
Core public API for revad.

Exports:
    Var           : Differentiable scalar handle (leaf when built from a number).
    constant      : Build a Var that never receives a derivative.
    Tape          : Append-only recording of operation nodes.
    global_tape   : The default tape operations are recorded on.
    use_tape      : Context manager to temporarily switch the active tape.
    reverse       : Run a single reverse pass; returns all adjoints.
    grad, grads   : Derivative(s) of an output w.r.t. leaf Vars.
    value         : Extract the primal value from a Var.
"""

from .var import Var, constant
from .tape import Tape, global_tape, use_tape
from .engine import Adjoints, reverse, grad, grads
from .seeds import value, derivative, gradient, gradient_list, value_and_grad

__all__ = [
    "Var", "constant",
    "Tape", "global_tape", "use_tape",
    "Adjoints", "reverse", "grad", "grads",
    "value", "derivative", "gradient", "gradient_list", "value_and_grad",
]
