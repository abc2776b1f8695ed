# dense_ad/core/container.py
"""
Container capability used by the forward-mode engine.

Tangents are stored as one-dimensional numpy arrays whose i-th entry is the
partial derivative with respect to the i-th input. A rank-k derivative tensor
is a k-dimensional array (a container of containers). User-facing containers
(list, tuple, dict, ndarray) are described by a `Layout`, which flattens them
into that positional order and rebuilds them at the API boundary.

Only four operations are needed by the arithmetic: elementwise map, pairwise
zip, fold, and indexed construction.
"""
from __future__ import annotations
import numbers
from functools import reduce
from typing import Any, Callable, Iterable, List

import numpy as np

from . import config as config_mod  # module access for use_config() compatibility


class Layout:
    """
    Shape descriptor of a user container.

    kind : "list" | "tuple" | "dict" | "array"
    keys : dict keys (in insertion order) or the ndarray shape
    """
    __slots__ = ("kind", "keys", "size")

    def __init__(self, kind: str, keys: Any, size: int):
        self.kind = kind
        self.keys = keys
        self.size = size

    @classmethod
    def of(cls, xs: Any) -> "Layout":
        if isinstance(xs, dict):
            return cls("dict", tuple(xs.keys()), len(xs))
        if isinstance(xs, np.ndarray):
            return cls("array", xs.shape, int(xs.size))
        if isinstance(xs, list):
            return cls("list", None, len(xs))
        if isinstance(xs, tuple):
            return cls("tuple", None, len(xs))
        raise TypeError(
            f"Inputs must be a list, tuple, dict or numpy.ndarray, but got {type(xs)}"
        )

    def __len__(self) -> int:
        return self.size

    def __repr__(self):
        return f"Layout({self.kind}, n={self.size})"

    def flatten(self, xs: Any) -> List[Any]:
        """Positional list of the elements of `xs` (same layout as self)."""
        if self.kind == "dict":
            return [xs[k] for k in self.keys]
        if self.kind == "array":
            return list(np.asarray(xs).reshape(-1))
        return list(xs)

    def unflatten(self, items: Iterable[Any]) -> Any:
        """Rebuild a container of this layout from positional items."""
        items = list(items)
        if self.kind == "dict":
            return dict(zip(self.keys, items))
        if self.kind == "tuple":
            return tuple(items)
        if self.kind == "array":
            arr = pack(items)
            return arr.reshape(self.keys + arr.shape[1:])
        return items


def pack(items: Iterable[Any]) -> np.ndarray:
    """
    Turn a sequence of results into a container.

    - equal-shaped arrays stack along a new leading axis (container of containers)
    - numbers give a numeric array (object dtype for exact types like Fraction)
    - anything else is stored as-is in an object array
    """
    items = list(items)
    if items and all(isinstance(item, np.ndarray) for item in items):
        return np.stack(items)
    if all(isinstance(item, numbers.Number) for item in items):
        return np.array(items)
    out = np.empty(len(items), dtype=object)
    for i, item in enumerate(items):
        out[i] = item
    return out


def fmap(fn: Callable[[Any], Any], xs: np.ndarray) -> np.ndarray:
    """Elementwise map over the leading axis."""
    return pack(fn(x) for x in xs)


def fmap_deep(fn: Callable[[Any], Any], xs: Any, depth: int) -> Any:
    """Map `fn` over the elements of a `depth`-times nested container."""
    if depth == 0:
        return fn(xs)
    return pack(fmap_deep(fn, x, depth - 1) for x in xs)


def zip_with(fn: Callable[[Any, Any], Any], xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """
    Structure-preserving pairwise combinator over two same-length containers.
    Length mismatch raises ValueError only when `check_shapes` is enabled.
    """
    if config_mod.global_config.check_shapes and len(xs) != len(ys):
        raise ValueError(
            f"Tangent containers have different lengths ({len(xs)} vs {len(ys)}); "
            f"they were not seeded by the same vars() call"
        )
    return pack(fn(x, y) for x, y in zip(xs, ys))


def fold(fn: Callable[[Any, Any], Any], init: Any, xs: np.ndarray) -> Any:
    """Left fold over the leading axis."""
    return reduce(fn, xs, init)


def build(n: int, fn: Callable[[int], Any]) -> np.ndarray:
    """Container of length n whose i-th element is fn(i)."""
    return pack(fn(i) for i in range(n))


def basis(n: int, i: int, dtype: Any = float) -> np.ndarray:
    """
    i-th standard basis vector of length n (1 at i, 0 elsewhere).
    dtype=object keeps exact Python ints for exact primal types.
    """
    return build(n, lambda j: 1 if i == j else 0).astype(dtype)


def zeros(n: int) -> np.ndarray:
    return np.zeros(n)
