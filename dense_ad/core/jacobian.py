# dense_ad/core/jacobian.py
"""
Mode operations and lifting combinators of the Dense representation.

Each function is an explicit case table over {Zero, Lift, Dense} for every
operand, and all operands are expected to share one tag (see `align`). A
case that produces no tangent never allocates one; an unknown operand kind
is a TypeError instead of a silent default.

Combinators
-----------
unary(f, dadb, b)         f'(b) is the constant dadb
lift1(f, df, b)           f'(b) = df(b)
lift1_(f, df, b)          f'(b) = df(f(b), b)        (reuse the result)
binary(f, dadb, dadc, b, c)
lift2(f, df, b, c)        (df/db, df/dc) = df(b, c)
lift2_(f, df, b, c)       (df/db, df/dc) = df(f(b, c), b, c)

With two tangents the product rule is applied entrywise:
    d f(b, c) = dadb * db + dc * dadc
"""
from __future__ import annotations
from typing import Any, Callable, Tuple

from .container import fmap, zip_with
from .dense import ZERO_PRIMAL, Dense, Lift, Mode, Zero, primal


def _unknown(*xs) -> TypeError:
    kinds = ", ".join(type(x).__name__ for x in xs)
    return TypeError(f"Expected Zero, Lift or Dense operands, but got ({kinds})")


# ------------------------------ Mode operations ------------------------------ #
def plus(x: Mode, y: Mode) -> Mode:
    """Addition; Zero is returned-through untouched on either side."""
    if isinstance(x, Zero):
        return y
    if isinstance(y, Zero):
        return x
    if isinstance(x, Lift):
        if isinstance(y, Lift):
            return Lift(x.value + y.value, x.tag)
        if isinstance(y, Dense):
            return Dense(x.value + y.value, y.tangent, x.tag)
    if isinstance(x, Dense):
        if isinstance(y, Lift):
            return Dense(x.value + y.value, x.tangent, x.tag)
        if isinstance(y, Dense):
            return Dense(x.value + y.value,
                         zip_with(lambda a, b: a + b, x.tangent, y.tangent), x.tag)
    raise _unknown(x, y)


def scale_left(a: Any, x: Mode) -> Mode:
    """a *^ x : scale by a constant on the left."""
    if isinstance(x, Zero):
        return x
    if isinstance(x, Lift):
        return Lift(a * x.value, x.tag)
    if isinstance(x, Dense):
        return Dense(a * x.value, fmap(lambda d: a * d, x.tangent), x.tag)
    raise _unknown(x)


def scale_right(x: Mode, b: Any) -> Mode:
    """x ^* b : scale by a constant on the right."""
    if isinstance(x, Zero):
        return x
    if isinstance(x, Lift):
        return Lift(x.value * b, x.tag)
    if isinstance(x, Dense):
        return Dense(x.value * b, fmap(lambda d: d * b, x.tangent), x.tag)
    raise _unknown(x)


def scale_div(x: Mode, b: Any) -> Mode:
    """x ^/ b : divide by a constant."""
    if isinstance(x, Zero):
        return x
    if isinstance(x, Lift):
        return Lift(x.value / b, x.tag)
    if isinstance(x, Dense):
        return Dense(x.value / b, fmap(lambda d: d / b, x.tangent), x.tag)
    raise _unknown(x)


def power(x: Mode, y: Mode) -> Mode:
    """
    x ** y.

    Zero ** y   -> constant 0 ** primal(y)
    x ** Zero   -> constant 1
    x ** Lift y -> d/dx x^y = y * x^(y-1)
    Lift x ** y -> d/dy x^y = x^y * log(x)
    x ** y      -> d(x^y) = y * x^(y-1) dx + x^y * log(x) dy, written in
                   terms of the already computed z = x^y
    """
    from ..ops.transcendental import log

    if isinstance(x, Zero):
        return Lift(ZERO_PRIMAL ** primal(y), x.tag)
    if isinstance(y, Zero):
        return Lift(1, y.tag)
    if isinstance(y, Lift):
        p = y.value
        return lift1(lambda b: b ** p, lambda b: p * b ** (p - 1), x)
    if isinstance(x, Lift):
        a = x.value
        return lift1_(lambda c: a ** c, lambda z, c: z * log(a), y)
    return lift2_(lambda b, c: b ** c,
                  lambda z, b, c: (c * z / b, z * log(b)), x, y)


# -------------------------------- one operand -------------------------------- #
def unary(f: Callable[[Any], Any], dadb: Any, b: Mode) -> Mode:
    if isinstance(b, Zero):
        return Lift(f(ZERO_PRIMAL), b.tag)
    if isinstance(b, Lift):
        return Lift(f(b.value), b.tag)
    if isinstance(b, Dense):
        return Dense(f(b.value), fmap(lambda d: dadb * d, b.tangent), b.tag)
    raise _unknown(b)


def lift1(f: Callable[[Any], Any], df: Callable[[Any], Any], b: Mode) -> Mode:
    if isinstance(b, Zero):
        return Lift(f(ZERO_PRIMAL), b.tag)
    if isinstance(b, Lift):
        return Lift(f(b.value), b.tag)
    if isinstance(b, Dense):
        dadb = df(b.value)
        return Dense(f(b.value), fmap(lambda d: dadb * d, b.tangent), b.tag)
    raise _unknown(b)


def lift1_(f: Callable[[Any], Any], df: Callable[[Any, Any], Any], b: Mode) -> Mode:
    if isinstance(b, Zero):
        return Lift(f(ZERO_PRIMAL), b.tag)
    if isinstance(b, Lift):
        return Lift(f(b.value), b.tag)
    if isinstance(b, Dense):
        a = f(b.value)
        dadb = df(a, b.value)
        return Dense(a, fmap(lambda d: dadb * d, b.tangent), b.tag)
    raise _unknown(b)


# -------------------------------- two operands ------------------------------- #
def _product_rule(dadb: Any, dadc: Any, db, dc):
    return zip_with(lambda dbi, dci: dadb * dbi + dci * dadc, db, dc)


def binary(f: Callable[[Any, Any], Any], dadb: Any, dadc: Any, b: Mode, c: Mode) -> Mode:
    tag = b.tag
    if isinstance(b, Zero):
        if isinstance(c, Zero):
            return Lift(f(ZERO_PRIMAL, ZERO_PRIMAL), tag)
        if isinstance(c, Lift):
            return Lift(f(ZERO_PRIMAL, c.value), tag)
        if isinstance(c, Dense):
            return Dense(f(ZERO_PRIMAL, c.value), fmap(lambda d: d * dadc, c.tangent), tag)
    if isinstance(b, Lift):
        if isinstance(c, Zero):
            return Lift(f(b.value, ZERO_PRIMAL), tag)
        if isinstance(c, Lift):
            return Lift(f(b.value, c.value), tag)
        if isinstance(c, Dense):
            return Dense(f(b.value, c.value), fmap(lambda d: d * dadc, c.tangent), tag)
    if isinstance(b, Dense):
        if isinstance(c, Zero):
            return Dense(f(b.value, ZERO_PRIMAL), fmap(lambda d: dadb * d, b.tangent), tag)
        if isinstance(c, Lift):
            return Dense(f(b.value, c.value), fmap(lambda d: dadb * d, b.tangent), tag)
        if isinstance(c, Dense):
            return Dense(f(b.value, c.value),
                         _product_rule(dadb, dadc, b.tangent, c.tangent), tag)
    raise _unknown(b, c)


def lift2(f: Callable[[Any, Any], Any],
          df: Callable[[Any, Any], Tuple[Any, Any]],
          b: Mode, c: Mode) -> Mode:
    tag = b.tag
    if isinstance(b, Zero):
        if isinstance(c, Zero):
            return Lift(f(ZERO_PRIMAL, ZERO_PRIMAL), tag)
        if isinstance(c, Lift):
            return Lift(f(ZERO_PRIMAL, c.value), tag)
        if isinstance(c, Dense):
            dadc = df(ZERO_PRIMAL, c.value)[1]
            return Dense(f(ZERO_PRIMAL, c.value), fmap(lambda d: d * dadc, c.tangent), tag)
    if isinstance(b, Lift):
        if isinstance(c, Zero):
            return Lift(f(b.value, ZERO_PRIMAL), tag)
        if isinstance(c, Lift):
            return Lift(f(b.value, c.value), tag)
        if isinstance(c, Dense):
            dadc = df(b.value, c.value)[1]
            return Dense(f(b.value, c.value), fmap(lambda d: d * dadc, c.tangent), tag)
    if isinstance(b, Dense):
        if isinstance(c, Zero):
            dadb = df(b.value, ZERO_PRIMAL)[0]
            return Dense(f(b.value, ZERO_PRIMAL), fmap(lambda d: dadb * d, b.tangent), tag)
        if isinstance(c, Lift):
            dadb = df(b.value, c.value)[0]
            return Dense(f(b.value, c.value), fmap(lambda d: dadb * d, b.tangent), tag)
        if isinstance(c, Dense):
            dadb, dadc = df(b.value, c.value)
            return Dense(f(b.value, c.value),
                         _product_rule(dadb, dadc, b.tangent, c.tangent), tag)
    raise _unknown(b, c)


def lift2_(f: Callable[[Any, Any], Any],
           df: Callable[[Any, Any, Any], Tuple[Any, Any]],
           b: Mode, c: Mode) -> Mode:
    tag = b.tag
    if isinstance(b, Zero):
        if isinstance(c, Zero):
            return Lift(f(ZERO_PRIMAL, ZERO_PRIMAL), tag)
        if isinstance(c, Lift):
            return Lift(f(ZERO_PRIMAL, c.value), tag)
        if isinstance(c, Dense):
            a = f(ZERO_PRIMAL, c.value)
            dadc = df(a, ZERO_PRIMAL, c.value)[1]
            return Dense(a, fmap(lambda d: d * dadc, c.tangent), tag)
    if isinstance(b, Lift):
        if isinstance(c, Zero):
            return Lift(f(b.value, ZERO_PRIMAL), tag)
        if isinstance(c, Lift):
            return Lift(f(b.value, c.value), tag)
        if isinstance(c, Dense):
            a = f(b.value, c.value)
            dadc = df(a, b.value, c.value)[1]
            return Dense(a, fmap(lambda d: d * dadc, c.tangent), tag)
    if isinstance(b, Dense):
        if isinstance(c, Zero):
            a = f(b.value, ZERO_PRIMAL)
            dadb = df(a, b.value, ZERO_PRIMAL)[0]
            return Dense(a, fmap(lambda d: dadb * d, b.tangent), tag)
        if isinstance(c, Lift):
            a = f(b.value, c.value)
            dadb = df(a, b.value, c.value)[0]
            return Dense(a, fmap(lambda d: dadb * d, b.tangent), tag)
        if isinstance(c, Dense):
            a = f(b.value, c.value)
            dadb, dadc = df(a, b.value, c.value)
            return Dense(a, _product_rule(dadb, dadc, b.tangent, c.tangent), tag)
    raise _unknown(b, c)
