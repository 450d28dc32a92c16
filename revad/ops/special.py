# revad/ops/special.py
from .arithmetic import _unary


def erf(x):
    """
    Error function: erf(x) = (2/√π) ∫₀ˣ e^(-t²) dt

    Derivative: d/dx erf(x) = (2/√π) * e^(-x²)
    """
    return _unary(x, "erf")


def norm_cdf(x):
    """
    Standard normal CDF N(x) = 0.5 * (1 + erf(x/√2)).
    Local partial: the normal density phi(x).
    """
    return _unary(x, "norm_cdf")
