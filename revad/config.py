# revad/config.py
"""
revad configuration.

Floating-point error policy and backward-pass tuning live here; the rest of
the package reads them through `get_config()`.
"""
from __future__ import annotations
import logging
from contextlib import contextmanager
from dataclasses import dataclass, replace

import numpy as np

logger = logging.getLogger(__name__)

ERRSTATE_MODES = ("ignore", "warn", "raise", "print")


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for graph construction and the reverse sweep."""

    # Passed to numpy.errstate(all=...) around every value and partial.
    # "ignore" lets NaN/inf propagate silently; "raise" turns them into
    # FloatingPointError, which is handy when hunting the origin of a NaN.
    errstate: str = "ignore"

    # Only propagate from nodes whose accumulated adjoint is nonzero.
    skip_zero_adjoints: bool = True

    def __post_init__(self):
        if self.errstate not in ERRSTATE_MODES:
            raise ValueError(
                f"errstate must be one of {ERRSTATE_MODES}, got {self.errstate!r}"
            )


_config = EngineConfig()


def get_config() -> EngineConfig:
    return _config


def set_config(config: EngineConfig) -> EngineConfig:
    """Install `config` globally and return the previous configuration."""
    global _config
    if not isinstance(config, EngineConfig):
        raise TypeError(f"expected EngineConfig, got {type(config)}")
    prev, _config = _config, config
    logger.debug("engine config set to %s", config)
    return prev


@contextmanager
def floating_point_errors(mode: str):
    """
    Temporarily change how numpy treats invalid/divide/overflow/underflow:

        with floating_point_errors("raise"):
            y = log(x)      # FloatingPointError for x <= 0
    """
    prev = set_config(replace(_config, errstate=mode))
    try:
        yield _config
    finally:
        set_config(prev)


def fp_errstate():
    """numpy.errstate context for the active floating-point policy."""
    return np.errstate(all=_config.errstate)
