import math

import numpy as np
import pytest

from dense_ad import (
    Stream, Tensors, build_tower, grads_stream, head_t, hessian, sin, tail_t,
    taylor_coefficients, tensors, tower,
)

SIN_DERIVATIVES = [
    np.sin,
    np.cos,
    lambda v: -np.sin(v),
    lambda v: -np.cos(v),
]


def _scalar(rank_head):
    return np.asarray(rank_head).reshape(-1)[0]


# === Tower over an explicit stream ===

def test_sin_tower_matches_derivatives_and_stays_lazy():
    k = 6
    x0 = 0.7
    steps = []

    def step(j):
        if j >= k:
            raise AssertionError(f"rank {j} was forced")
        steps.append(j)
        return SIN_DERIVATIVES[j % 4](x0), [j + 1]

    t = build_tower(Stream.unfold(step, 0))
    node = t
    for j in range(k):
        head = head_t(node)
        assert np.shape(head) == (1,) * j
        assert _scalar(head) == SIN_DERIVATIVES[j % 4](x0)
        if j < k - 1:
            node = tail_t(node)
    assert steps == list(range(k))


def test_take_does_not_force_the_next_rank():
    def step(j):
        if j >= 3:
            raise AssertionError(f"rank {j} was forced")
        return float(j), [j + 1, j + 1]

    heads = tensors(Stream.unfold(step, 0)).take(3)
    assert heads[0] == 0.0
    np.testing.assert_array_equal(heads[1], [1.0, 1.0])
    np.testing.assert_array_equal(heads[2], np.full((2, 2), 2.0))


def test_tower_reassociates_stream_paths():
    # head at rank 2, index (i, j) is the head of stream.tail[i].tail[j]
    def step(path):
        return path, [path + (i,) for i in range(3)]

    t = tensors(Stream.unfold(step, ()))
    rank2 = t.tail.tail.head
    assert rank2.shape == (3, 3)
    for i in range(3):
        for j in range(3):
            assert rank2[i, j] == (i, j)


def test_take_rejects_negative_counts():
    t = tensors(Stream.unfold(lambda j: (j, [j + 1]), 0))
    with pytest.raises(ValueError):
        t.take(-1)


def test_map_applies_at_every_rank():
    t = tensors(Stream.unfold(lambda j: (float(j), [j + 1, j + 1]), 1))
    doubled = t.map(lambda v: 2.0 * v).take(3)
    assert doubled[0] == 2.0
    np.testing.assert_array_equal(doubled[1], [4.0, 4.0])
    np.testing.assert_array_equal(doubled[2], np.full((2, 2), 6.0))


def test_stream_tail_is_computed_once():
    calls = []

    def tail():
        calls.append(1)
        return np.array([Stream(1.0, tail)], dtype=object)

    s = Stream(0.0, tail)
    assert not s.forced
    first = s.tail
    assert s.tail is first
    assert len(calls) == 1
    assert s.forced


# === Towers built by repeated differentiation ===

def test_differentiated_sin_tower_matches_derivative_cycle():
    x0 = 0.7
    heads = tower(lambda v: sin(v[0]), [x0]).take(6)
    for j, head in enumerate(heads):
        np.testing.assert_allclose(_scalar(head), SIN_DERIVATIVES[j % 4](x0), rtol=1e-12)


def test_tower_only_evaluates_what_is_read():
    calls = []

    def f(v):
        calls.append(1)
        return v[0] * v[1]

    t = tower(f, [1.0, 2.0])
    assert len(calls) == 1
    np.testing.assert_array_equal(t.tail.head, [2.0, 1.0])
    assert len(calls) == 2
    np.testing.assert_array_equal(t.tail.tail.head, [[0.0, 1.0], [1.0, 0.0]])
    assert len(calls) == 4


def test_hessian_matches_analytic_values():
    x, y = 1.2, 0.8
    H = hessian(lambda v: v[0] ** 2 * v[1] + sin(v[0]) * v[1] ** 3, [x, y])
    expected = np.array([
        [2.0 * y - math.sin(x) * y ** 3, 2.0 * x + 3.0 * math.cos(x) * y ** 2],
        [2.0 * x + 3.0 * math.cos(x) * y ** 2, 6.0 * math.sin(x) * y],
    ])
    np.testing.assert_allclose(np.asarray(H, dtype=float), expected, rtol=1e-12)
    np.testing.assert_allclose(H, np.transpose(H))


def test_third_rank_tensor():
    heads = tower(lambda v: v[0] ** 2 * v[1], [1.0, 2.0]).take(4)
    third = np.asarray(heads[3], dtype=float)
    assert third.shape == (2, 2, 2)
    expected = np.zeros((2, 2, 2))
    expected[0, 0, 1] = expected[0, 1, 0] = expected[1, 0, 0] = 2.0
    np.testing.assert_allclose(third, expected)


def test_grads_stream_paths_are_mixed_partials():
    s = grads_stream(lambda v: v["x"] * v["y"] ** 2, {"x": 3.0, "y": 2.0})
    assert s.head == 12.0
    assert s.tail[0].head == 4.0      # d/dx
    assert s.tail[1].head == 12.0     # d/dy
    assert s.tail[1].tail[1].head == 6.0    # d2/dy2
    assert s.tail[0].tail[1].head == 4.0    # d2/dxdy


def test_taylor_coefficients_of_exp():
    from dense_ad import exp
    coeffs = taylor_coefficients(exp, 0.0, 5)
    np.testing.assert_allclose(coeffs, [1.0 / math.factorial(j) for j in range(5)])


def test_tensors_is_not_a_sequence():
    t = tower(lambda v: v[0], [1.0])
    assert isinstance(t, Tensors)
    assert not hasattr(t, "__len__")
    assert not hasattr(t, "__getitem__")
