# dense_ad/__init__.py
# Dense forward-mode automatic differentiation with lazy derivative towers

from .core.config import ADConfig, use_config
from .core.dense import (
    Mode, Zero, Lift, Dense, primal, auto, zero, vars, apply,
    ds, ds_value, extract_derivative, extract_value_and_derivative,
)
from .core.jacobian import (
    plus, power, scale_left, scale_right, scale_div,
    unary, lift1, lift1_, binary, lift2, lift2_,
)
from .core.stream import Stream
from .core.tensors import Tensors, head_t, tail_t, tensors, build_tower
from .core.seeds import (
    value,
    grad, grad_value,
    jacobian, jacobian_value,
    derivative, derivative_value,
    grads_stream, tower, hessian, taylor_coefficients,
)

# Elementary functions
from . import ops
from .ops import (
    exp, expm1, log, log1p, sqrt,
    sin, cos, tan, arcsin, arccos, arctan, atan2,
    sinh, cosh, tanh, arcsinh, arccosh, arctanh,
    erf, norm_pdf, norm_cdf,
)

__all__ = [
    # Core
    'ADConfig', 'use_config',
    'Mode', 'Zero', 'Lift', 'Dense',
    'primal', 'auto', 'zero',
    'vars', 'apply', 'ds', 'ds_value',
    'extract_derivative', 'extract_value_and_derivative',
    # Combinators
    'plus', 'power', 'scale_left', 'scale_right', 'scale_div',
    'unary', 'lift1', 'lift1_', 'binary', 'lift2', 'lift2_',
    # Towers
    'Stream', 'Tensors', 'head_t', 'tail_t', 'tensors', 'build_tower',
    # Drivers
    'value', 'grad', 'grad_value', 'jacobian', 'jacobian_value',
    'derivative', 'derivative_value',
    'grads_stream', 'tower', 'hessian', 'taylor_coefficients',
    # Ops
    'ops',
    'exp', 'expm1', 'log', 'log1p', 'sqrt',
    'sin', 'cos', 'tan', 'arcsin', 'arccos', 'arctan', 'atan2',
    'sinh', 'cosh', 'tanh', 'arcsinh', 'arccosh', 'arctanh',
    'erf', 'norm_pdf', 'norm_cdf',
]
