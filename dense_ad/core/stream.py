# dense_ad/core/stream.py
from __future__ import annotations
from typing import Any, Callable, Tuple

import numpy as np

from .container import fmap


class Stream:
    """
    Lazy, f-branching stream:  a :< f (Stream f a).

    Attributes
    ----------
    head : Any
        Value at this node.
    tail : np.ndarray
        Container of child streams, one per input position. Computed on
        first access by the zero-argument callable given at construction,
        then cached.
    """
    __slots__ = ("head", "_tail_fn", "_tail")

    def __init__(self, head: Any, tail: Callable[[], np.ndarray]):
        self.head = head
        self._tail_fn = tail
        self._tail = None

    @property
    def tail(self) -> np.ndarray:
        if self._tail_fn is not None:
            self._tail = self._tail_fn()
            self._tail_fn = None  # drop the closure once forced
        return self._tail

    @property
    def forced(self) -> bool:
        return self._tail_fn is None

    def __repr__(self):
        state = "forced" if self.forced else "lazy"
        return f"Stream({self.head!r}, <{state}>)"

    @classmethod
    def unfold(cls, step: Callable[[Any], Tuple[Any, np.ndarray]], seed: Any) -> "Stream":
        """
        Build a stream from a seed. `step(seed)` returns (head, seeds), where
        `seeds` is the container of seeds for the children. Children are only
        unfolded when the tail is first read.
        """
        head, seeds = step(seed)
        return cls(head, lambda: fmap(lambda s: cls.unfold(step, s), seeds))
