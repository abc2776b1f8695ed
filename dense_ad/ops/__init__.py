# dense_ad/ops/__init__.py

from .arithmetic import add, sub, mul, div, neg, pow, sign, absolute
from .transcendental import (
    exp, expm1, log, log1p, sqrt,
    sin, cos, tan, arcsin, arccos, arctan, atan2,
    sinh, cosh, tanh, arcsinh, arccosh, arctanh,
    erf,
)
from .special import norm_pdf, norm_cdf

__all__ = [
    "add", "sub", "mul", "div", "neg", "pow", "sign", "absolute",
    "exp", "expm1", "log", "log1p", "sqrt",
    "sin", "cos", "tan", "arcsin", "arccos", "arctan", "atan2",
    "sinh", "cosh", "tanh", "arcsinh", "arccosh", "arctanh",
    "erf",
    "norm_pdf", "norm_cdf",
]
