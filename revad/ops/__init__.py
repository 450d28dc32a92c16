# revad/ops/__init__.py

# Convenience re-exports so users can do: from revad.ops import mul, exp, ...
from .arithmetic import add, sub, mul, div, neg, pow
from .transcendental import sin, cos, tan, exp, log, sqrt, tanh
from .special import erf, norm_cdf

__all__ = [
    "add", "sub", "mul", "div", "neg", "pow",
    "sin", "cos", "tan", "exp", "log", "sqrt", "tanh",
    "erf", "norm_cdf",
]
