# revad/ops/transcendental.py
from .arithmetic import _unary


def sin(x): return _unary(x, "sin")
def cos(x): return _unary(x, "cos")
def tan(x): return _unary(x, "tan")
def exp(x): return _unary(x, "exp")
def tanh(x): return _unary(x, "tanh")


def log(x):
    """Natural logarithm; NaN for x < 0 and -inf at 0, no exception."""
    return _unary(x, "log")


def sqrt(x):
    """Square root; the derivative is +inf at 0."""
    return _unary(x, "sqrt")
