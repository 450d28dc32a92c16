# revad/__init__.py
# Reverse-mode automatic differentiation over a dynamic expression graph.
#
# Building and differentiating one graph from several threads at once is not
# supported: the active tape is module state. Use one `use_tape()` block per
# thread, or synchronise graph construction externally.

import logging

from .core.var import Var, constant
from .core.tape import Tape, global_tape, use_tape
from .core.engine import Adjoints, reverse, grad, grads
from .core.seeds import value, derivative, gradient, gradient_list, value_and_grad
from .ops import (
    add, sub, mul, div, neg, pow,
    sin, cos, tan, exp, log, sqrt, tanh,
    erf, norm_cdf,
)
from .config import EngineConfig, get_config, set_config, floating_point_errors
from .errors import RevadError, NonLeafTargetError

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Core
    'Var',
    'constant',
    'Tape',
    'global_tape',
    'use_tape',
    # Engine
    'Adjoints',
    'reverse',
    'grad',
    'grads',
    # Functional helpers
    'value',
    'derivative',
    'gradient',
    'gradient_list',
    'value_and_grad',
    # Operations
    'add', 'sub', 'mul', 'div', 'neg', 'pow',
    'sin', 'cos', 'tan', 'exp', 'log', 'sqrt', 'tanh',
    'erf', 'norm_cdf',
    # Configuration
    'EngineConfig',
    'get_config',
    'set_config',
    'floating_point_errors',
    # Errors
    'RevadError',
    'NonLeafTargetError',
]
