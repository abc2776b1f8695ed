# dense_ad/core/dense.py
"""
Dense forward-mode representation.

Every intermediate value of a differentiated computation is one of

    Zero            value and all partials are exactly zero
    Lift(a)         constant a; its tangent is implicitly zero and never built
    Dense(a, da)    value a with tangent da, one partial per input

`da` is a numpy array of length n (the number of inputs bound by the `vars`
call that seeded the computation); da[i] is the partial with respect to input i.

Each `vars` call issues a fresh integer `tag`. When values of different tags
meet, the lower-tag value (or a plain number) is a constant at the higher
level and is wrapped in Lift. This is what makes nested differentiation,
and therefore the tensor tower, work without perturbation confusion.

Dense is useful when the result depends on most of the inputs. For k inputs
and order-m derivatives it computes k**m entries, most of them repeated.
"""
from __future__ import annotations
import itertools
import numbers
from typing import Any, Callable, List, Tuple

import numpy as np

from . import config as config_mod  # module access for use_config() compatibility
from .container import Layout, basis

# primal value of Zero when it has to enter ordinary arithmetic
ZERO_PRIMAL = np.float64(0.0)

_tags = itertools.count(1)


class Mode:
    """
    Base class of the three representation cases.

    Python operators route to dense_ad.ops; comparisons look only at primal
    values. `__array_ufunc__ = None` makes numpy scalars and arrays hand
    mixed arithmetic back to our reflected operators.
    """
    __slots__ = ("tag",)
    __array_ufunc__ = None

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __pow__(self, other):
        from ..ops.arithmetic import pow
        return pow(self, other)

    def __rpow__(self, other):
        from ..ops.arithmetic import pow
        return pow(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pos__(self):
        return self

    def __abs__(self):
        from ..ops.arithmetic import absolute
        return absolute(self)

    # Comparisons are on primal values only
    def __eq__(self, other):
        return primal(self) == primal(other)

    def __ne__(self, other):
        return primal(self) != primal(other)

    def __lt__(self, other):
        return primal(self) < primal(other)

    def __le__(self, other):
        return primal(self) <= primal(other)

    def __gt__(self, other):
        return primal(self) > primal(other)

    def __ge__(self, other):
        return primal(self) >= primal(other)

    def __hash__(self):
        return hash(primal(self))

    def __bool__(self):
        return bool(primal(self))

    def __float__(self):
        return float(primal(self))


class Zero(Mode):
    """Value and every derivative are exactly zero; no tangent is allocated."""
    __slots__ = ()

    def __init__(self, tag: int):
        self.tag = tag

    def __repr__(self):
        return "Zero"


class Lift(Mode):
    """Constant with no dependency on the inputs of its level."""
    __slots__ = ("value",)

    def __init__(self, value: Any, tag: int):
        self.value = value
        self.tag = tag

    def __repr__(self):
        return f"Lift({self.value!r})"


class Dense(Mode):
    """
    Value paired with a full tangent.

    Attributes
    ----------
    value   : primal value (a number, or a lower-tag Mode when nested)
    tangent : np.ndarray of length n; tangent[i] = d value / d input_i
    tag     : level issued by the seeding vars() call
    """
    __slots__ = ("value", "tangent")

    def __init__(self, value: Any, tangent: np.ndarray, tag: int):
        self.value = value
        self.tangent = tangent
        self.tag = tag

    def __repr__(self):
        return f"Dense({self.value!r}, {self.tangent!r})"


def primal(x: Any) -> Any:
    """Primal value at the outermost level; plain numbers pass through."""
    if isinstance(x, Dense) or isinstance(x, Lift):
        return x.value
    if isinstance(x, Zero):
        return ZERO_PRIMAL
    return x


def auto(a: Any, tag: int) -> Lift:
    """Lift a constant into the level `tag`."""
    return Lift(a, tag)


def zero(tag: int) -> Zero:
    return Zero(tag)


def tag_of(x: Any) -> int:
    """Level of x; plain numbers live below every vars() call."""
    return x.tag if isinstance(x, Mode) else 0


def lift_to(x: Any, tag: int) -> Mode:
    """Return x as a value of level `tag` (lower levels become constants)."""
    if isinstance(x, Mode) and x.tag == tag:
        return x
    return Lift(x, tag)


def align(x: Any, y: Any) -> Tuple[Mode, Mode]:
    """Bring two operands to their common (highest) level."""
    tag = max(tag_of(x), tag_of(y))
    return lift_to(x, tag), lift_to(y, tag)


def _coerce(x: Any) -> Any:
    if isinstance(x, Mode):
        return x
    if not isinstance(x, numbers.Number):
        raise TypeError(
            f"vars() only accepts numeric inputs or differentiable values, "
            f"but got {type(x)}"
        )
    return np.float64(x) if config_mod.global_config.coerce_inputs else x


def bind(xs: Any) -> Tuple[Layout, int, List[Dense]]:
    """
    Seed every input of `xs` with its basis tangent.

    Returns the input layout, the fresh tag, and the seeded values in
    positional order.
    """
    layout = Layout.of(xs)
    flat = [_coerce(x) for x in layout.flatten(xs)]
    n = len(flat)
    tag = next(_tags)
    dtype = float if config_mod.global_config.coerce_inputs else object
    seeded = [Dense(x, basis(n, i, dtype), tag) for i, x in enumerate(flat)]
    return layout, tag, seeded


def vars(xs: Any) -> Any:
    """
    Bind variables: input i becomes Dense(x_i, e_i) where e_i is the i-th
    standard basis vector of length n. The result has the layout of `xs`.
    """
    layout, _, seeded = bind(xs)
    return layout.unflatten(seeded)


def apply(f: Callable[[Any], Any], xs: Any) -> Any:
    """Evaluate f over freshly bound variables."""
    return f(vars(xs))


def ds(zero_default: Any, x: Any) -> Any:
    """Tangent of x, or `zero_default` when x carries none."""
    if isinstance(x, Dense):
        return x.tangent
    return zero_default


def ds_value(zero_default: Any, x: Any) -> Tuple[Any, Any]:
    """(value, tangent) of x; `zero_default` stands in for a missing tangent."""
    if isinstance(x, Dense):
        return x.value, x.tangent
    if isinstance(x, Lift):
        return x.value, zero_default
    if isinstance(x, Zero):
        return ZERO_PRIMAL, zero_default
    return x, zero_default


extract_derivative = ds
extract_value_and_derivative = ds_value
