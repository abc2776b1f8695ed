# dense_ad/core/seeds.py

#-----------------------------------------------------------------------------
# Drivers: seed every input with its basis tangent, run the function once,
# and read the partials off the output. Results come back in the layout of
# the inputs (list, tuple, dict or ndarray).
#-----------------------------------------------------------------------------
from __future__ import annotations
import math
from typing import Any, Callable, List, Tuple

import numpy as np

from .container import Layout, build, zeros
from .dense import Dense, Mode, _coerce, bind, ds_value, primal
from .stream import Stream
from .tensors import Tensors, tensors


def value(x: Any) -> Any:
    """Return the numeric value of a Mode (through every level); pass through plain numbers."""
    while isinstance(x, Mode):
        x = primal(x)
    return x


def _ds_value_at(tag: int, zero_default: Any, y: Any) -> Tuple[Any, Any]:
    """
    (value, tangent) of y with respect to the vars() call that issued `tag`.
    A value of any other level is a constant here.
    """
    if isinstance(y, Mode) and y.tag == tag:
        return ds_value(zero_default, y)
    return y, zero_default


def _ds_at(tag: int, zero_default: Any, y: Any) -> Any:
    if isinstance(y, Dense) and y.tag == tag:
        return y.tangent
    return zero_default


# ------------------------------- first order -------------------------------- #
def grad_value(f: Callable[[Any], Any], xs: Any) -> Tuple[Any, Any]:
    """
    Value and gradient of a scalar-output function y = f(xs).

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grad_value(f, [2.0, 4.0]) -> (16.0, [4.0, 3.0])
    """
    layout, tag, seeded = bind(xs)
    y = f(layout.unflatten(seeded))
    if isinstance(y, (list, tuple, dict, np.ndarray)):
        raise ValueError("grad(f, xs) expects scalar output; use jacobian() instead.")
    v, dy = _ds_value_at(tag, zeros(len(layout)), y)
    return v, layout.unflatten(dy)


def grad(f: Callable[[Any], Any], xs: Any) -> Any:
    """Gradient of a scalar-output function, in the layout of `xs`."""
    return grad_value(f, xs)[1]


def jacobian_value(f: Callable[[Any], Any], xs: Any) -> Tuple[Any, Any]:
    """
    Values and Jacobian of a function with several outputs.

    `f` returns a list, tuple, dict or ndarray of outputs; the result holds,
    in that same output layout, the output values and one gradient (in the
    input layout) per output.
    """
    layout, tag, seeded = bind(xs)
    ys = f(layout.unflatten(seeded))
    out_layout = Layout.of(ys)
    n = len(layout)
    pairs = [_ds_value_at(tag, zeros(n), y) for y in out_layout.flatten(ys)]
    values = out_layout.unflatten(v for v, _ in pairs)
    rows = out_layout.unflatten(layout.unflatten(dy) for _, dy in pairs)
    return values, rows


def jacobian(f: Callable[[Any], Any], xs: Any) -> Any:
    return jacobian_value(f, xs)[1]


def derivative_value(f: Callable[[Any], Any], x: Any) -> Tuple[Any, Any]:
    """Value and derivative of a scalar function of one scalar."""
    v, d = grad_value(lambda xs: f(xs[0]), [x])
    return v, d[0]


def derivative(f: Callable[[Any], Any], x: Any) -> Any:
    return derivative_value(f, x)[1]


# ------------------------------- all orders --------------------------------- #
def grads_stream(f: Callable[[Any], Any], xs: Any) -> Stream:
    """
    Stream of all partial derivatives of a scalar-output function.

    The head at depth k, reached through tail[i1]...tail[ik], is
    ∂^k f / ∂x_i1 ... ∂x_ik. Each level differentiates the previous one with
    a fresh vars() call over the same point; nothing is evaluated before the
    corresponding tail is read.
    """
    layout = Layout.of(xs)
    point = [_coerce(x) for x in layout.flatten(xs)]
    n = len(point)

    def node(g: Callable[[List[Any]], Any], head: Any) -> Stream:
        def tail() -> np.ndarray:
            def jac(ys):
                _, tag, seeded = bind(ys)
                return _ds_at(tag, zeros(n), g(seeded))
            heads = jac(point)
            return build(n, lambda i: node(lambda ys: jac(ys)[i], heads[i]))
        return Stream(head, tail)

    def g0(ys):
        return f(layout.unflatten(ys))

    return node(g0, g0(point))


def tower(f: Callable[[Any], Any], xs: Any) -> Tensors:
    """Tensor tower of f at xs: value, gradient, Hessian, third derivatives, ..."""
    return tensors(grads_stream(f, xs))


def hessian(f: Callable[[Any], Any], xs: Any) -> np.ndarray:
    """Hessian of a scalar-output function as an (n, n) array in input order."""
    return tower(f, xs).tail.tail.head


def taylor_coefficients(f: Callable[[Any], Any], x: Any, k: int) -> List[Any]:
    """
    First k Taylor coefficients f^(j)(x) / j! of a scalar function of one
    scalar, read off the tensor tower.
    """
    ranks = tower(lambda xs: f(xs[0]), [x]).take(k)
    return [np.asarray(r).reshape(-1)[0] / math.factorial(j) for j, r in enumerate(ranks)]
