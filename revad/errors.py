# revad/errors.py
"""Exceptions raised by revad.

Numeric domain and range problems (division by zero, log of a negative
number, overflow) are not errors here: they produce NaN/inf exactly like
IEEE-754 arithmetic. Only contract violations by the caller raise.
"""


class RevadError(Exception):
    """Base class for all revad errors."""


class NonLeafTargetError(RevadError, ValueError):
    """A derivative was requested with respect to a Var that is not a leaf."""
