# dense_ad/core/tensors.py
"""
Tensor tower: the value and all its higher partial derivatives.

    rank 0 : value
    rank 1 : container of first partials           shape (n,)
    rank 2 : container of containers (Hessian)     shape (n, n)
    rank k : shape (n,) * k

A tower node holds its rank-k head and a cached thunk for the rank k+1
tower. Nothing past what `head`/`tail` consumers ask for is evaluated, so the
tower is infinite but only as deep as it is read.
"""
from __future__ import annotations
from itertools import islice
from typing import Any, Callable, Iterator, List

import numpy as np

from .container import fmap, fmap_deep
from .stream import Stream


class Tensors:
    """
    One rank of a tensor tower.

    Do not add __len__/__getitem__ here: towers are stored in numpy object
    arrays and must not look like sequences.
    """
    __slots__ = ("head", "_tail_fn", "_tail")

    def __init__(self, head: Any, tail: Callable[[], "Tensors"]):
        self.head = head
        self._tail_fn = tail
        self._tail = None

    @property
    def tail(self) -> "Tensors":
        if self._tail_fn is not None:
            self._tail = self._tail_fn()
            self._tail_fn = None
        return self._tail

    def __repr__(self):
        return f"Tensors({self.head!r}, ...)"

    def map(self, fn: Callable[[Any], Any]) -> "Tensors":
        """Apply fn to every entry of every rank (lazily)."""
        return self._map(fn, 0)

    def _map(self, fn, depth: int) -> "Tensors":
        return Tensors(fmap_deep(fn, self.head, depth), lambda: self.tail._map(fn, depth + 1))

    def ranks(self) -> Iterator[Any]:
        """Yield rank 0, 1, 2, ... heads; each tail is forced only on the next step."""
        t = self
        while True:
            yield t.head
            t = t.tail

    def take(self, k: int) -> List[Any]:
        """Heads of the first k ranks."""
        if k < 0:
            raise ValueError(f"take() expects a non-negative rank count, but got {k}")
        return list(islice(self.ranks(), k))


def head_t(t: Tensors) -> Any:
    return t.head


def tail_t(t: Tensors) -> Tensors:
    return t.tail


def distribute(x: np.ndarray) -> Tensors:
    """Turn a container of towers into a tower of containers, one rank at a time."""
    return Tensors(fmap(head_t, x), lambda: distribute(fmap(tail_t, x)))


def tensors(stream: Stream) -> Tensors:
    """
    Re-associate a derivative stream into a tensor tower.

    The rank-k head at index (i1, ..., ik) is the head of the stream reached
    by following tail[i1], ..., tail[ik]; no value is recomputed.
    """
    return Tensors(stream.head, lambda: distribute(fmap(tensors, stream.tail)))


build_tower = tensors
