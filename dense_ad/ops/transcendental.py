# dense_ad/ops/transcendental.py
#
# Every function accepts plain numbers (evaluated with numpy / scipy), Mode
# values (lifted with the local derivative below) and object arrays of either.
# The local derivatives are written with these same functions so that nested
# levels differentiate them again.
from functools import wraps

import numpy as np
from scipy.special import erf as scipy_erf

from ..core.container import fmap_deep
from ..core.dense import Mode, align
from ..core.jacobian import lift1, lift1_, lift2

TWO_OVER_SQRT_PI = 2.0 / np.sqrt(np.pi)


def _elementwise(fn):
    @wraps(fn)
    def wrapper(x):
        if isinstance(x, np.ndarray) and x.dtype == object:
            return fmap_deep(wrapper, x, x.ndim)
        return fn(x)
    return wrapper


@_elementwise
def exp(x):
    if not isinstance(x, Mode):
        return np.exp(x)
    return lift1_(exp, lambda a, b: a, x)


@_elementwise
def expm1(x):
    if not isinstance(x, Mode):
        return np.expm1(x)
    return lift1_(expm1, lambda a, b: a + 1.0, x)


@_elementwise
def log(x):
    if not isinstance(x, Mode):
        return np.log(x)
    return lift1(log, lambda b: 1.0 / b, x)


@_elementwise
def log1p(x):
    if not isinstance(x, Mode):
        return np.log1p(x)
    return lift1(log1p, lambda b: 1.0 / (1.0 + b), x)


@_elementwise
def sqrt(x):
    if not isinstance(x, Mode):
        return np.sqrt(x)
    return lift1_(sqrt, lambda a, b: 0.5 / a, x)


@_elementwise
def sin(x):
    if not isinstance(x, Mode):
        return np.sin(x)
    return lift1(sin, cos, x)


@_elementwise
def cos(x):
    if not isinstance(x, Mode):
        return np.cos(x)
    return lift1(cos, lambda b: -sin(b), x)


@_elementwise
def tan(x):
    if not isinstance(x, Mode):
        return np.tan(x)
    return lift1(tan, lambda b: 1.0 / cos(b) ** 2, x)


@_elementwise
def arcsin(x):
    if not isinstance(x, Mode):
        return np.arcsin(x)
    return lift1(arcsin, lambda b: 1.0 / sqrt(1.0 - b * b), x)


@_elementwise
def arccos(x):
    if not isinstance(x, Mode):
        return np.arccos(x)
    return lift1(arccos, lambda b: -1.0 / sqrt(1.0 - b * b), x)


@_elementwise
def arctan(x):
    if not isinstance(x, Mode):
        return np.arctan(x)
    return lift1(arctan, lambda b: 1.0 / (1.0 + b * b), x)


@_elementwise
def sinh(x):
    if not isinstance(x, Mode):
        return np.sinh(x)
    return lift1(sinh, cosh, x)


@_elementwise
def cosh(x):
    if not isinstance(x, Mode):
        return np.cosh(x)
    return lift1(cosh, sinh, x)


@_elementwise
def tanh(x):
    if not isinstance(x, Mode):
        return np.tanh(x)
    return lift1_(tanh, lambda a, b: 1.0 - a * a, x)


@_elementwise
def arcsinh(x):
    if not isinstance(x, Mode):
        return np.arcsinh(x)
    return lift1(arcsinh, lambda b: 1.0 / sqrt(1.0 + b * b), x)


@_elementwise
def arccosh(x):
    if not isinstance(x, Mode):
        return np.arccosh(x)
    return lift1(arccosh, lambda b: 1.0 / sqrt(b * b - 1.0), x)


@_elementwise
def arctanh(x):
    if not isinstance(x, Mode):
        return np.arctanh(x)
    return lift1(arctanh, lambda b: 1.0 / (1.0 - b * b), x)


@_elementwise
def erf(x):
    """
    Error function: erf(x) = (2/√π) ∫₀ˣ e^(-t²) dt

    Derivative: d/dx erf(x) = (2/√π) * e^(-x²)
    """
    if not isinstance(x, Mode):
        return scipy_erf(x)
    return lift1(erf, lambda b: TWO_OVER_SQRT_PI * exp(-(b * b)), x)


def atan2(y, x):
    """
    Angle of the point (x, y):
      ∂/∂y = x / (x² + y²)
      ∂/∂x = -y / (x² + y²)
    """
    if not isinstance(y, Mode) and not isinstance(x, Mode):
        return np.arctan2(y, x)

    def partials(vy, vx):
        r = 1.0 / (vx * vx + vy * vy)
        return vx * r, -vy * r

    return lift2(atan2, partials, *align(y, x))
