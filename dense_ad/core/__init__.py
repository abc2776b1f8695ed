# dense_ad/core/__init__.py

"""
Core public API of the forward-mode package.

Exports:
    Zero, Lift, Dense : The three cases of a differentiated value.
    vars, apply       : Bind inputs to basis tangents / evaluate over them.
    ds, ds_value      : Read the tangent (and value) back off a result.
    Tensors, tensors  : Lazy tower of higher derivative tensors.
    grad, hessian     : Convenience drivers built on the above.
    use_config        : Context manager to temporarily change engine switches.
"""

from .config import ADConfig, use_config
from .dense import Mode, Zero, Lift, Dense, primal, auto, zero, vars, apply, ds, ds_value
from .stream import Stream
from .tensors import Tensors, head_t, tail_t, tensors, build_tower
from .seeds import grad, hessian, value

__all__ = [
    "ADConfig", "use_config",
    "Mode", "Zero", "Lift", "Dense",
    "primal", "auto", "zero",
    "vars", "apply", "ds", "ds_value",
    "Stream", "Tensors", "head_t", "tail_t", "tensors", "build_tower",
    "grad", "hessian", "value",
]
