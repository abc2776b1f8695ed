import numpy as np
import pytest

from dense_ad import (
    derivative, derivative_value, exp, grad, grad_value, jacobian,
    jacobian_value, sin, value, vars,
)


# === grad / grad_value ===

def test_grad_keeps_dict_layout():
    g = grad(lambda v: v["a"] * v["b"] + v["a"], {"a": 2.0, "b": 5.0})
    assert g == {"a": 6.0, "b": 2.0}


def test_grad_keeps_tuple_layout():
    g = grad(lambda v: v[0] * v[1], (2.0, 5.0))
    assert isinstance(g, tuple)
    assert g == (5.0, 2.0)


def test_grad_of_determinant_over_matrix_input():
    m = np.array([[1.0, 2.0], [3.0, 4.0]])
    g = grad(lambda a: a[0, 0] * a[1, 1] - a[0, 1] * a[1, 0], m)
    assert g.shape == (2, 2)
    np.testing.assert_array_equal(g, [[4.0, -3.0], [-2.0, 1.0]])


def test_grad_value_returns_primal_and_gradient():
    v, g = grad_value(lambda xs: xs[0] * xs[0] + 3 * xs[1], [2.0, 4.0])
    assert v == 16.0
    np.testing.assert_array_equal(g, [4.0, 3.0])


def test_constant_function_has_zero_gradient():
    v, g = grad_value(lambda xs: 5.0, [1.0, 2.0])
    assert v == 5.0
    np.testing.assert_array_equal(g, [0.0, 0.0])


def test_grad_rejects_container_outputs():
    with pytest.raises(ValueError):
        grad(lambda v: [v[0], v[1]], [1.0, 2.0])


# === jacobian ===

def test_jacobian_rows_follow_output_layout():
    values, rows = jacobian_value(lambda v: [v[0] * v[1], v[0] + v[1]], [2.0, 3.0])
    np.testing.assert_array_equal(values, [6.0, 5.0])
    np.testing.assert_array_equal(rows[0], [3.0, 2.0])
    np.testing.assert_array_equal(rows[1], [1.0, 1.0])


def test_jacobian_with_dict_output_and_input():
    rows = jacobian(
        lambda v: {"sum": v["x"] + v["y"], "prod": v["x"] * v["y"]},
        {"x": 2.0, "y": 3.0},
    )
    assert rows["sum"] == {"x": 1.0, "y": 1.0}
    assert rows["prod"] == {"x": 3.0, "y": 2.0}


def test_jacobian_of_constant_output_is_zero():
    rows = jacobian(lambda v: [v[0], 7.0], [1.0, 2.0])
    np.testing.assert_array_equal(rows[1], [0.0, 0.0])


# === derivative ===

def test_derivative_of_cube():
    assert derivative(lambda x: x ** 3, 2.0) == 12.0
    v, d = derivative_value(lambda x: x ** 3, 2.0)
    assert v == 8.0 and d == 12.0


def test_nested_derivative_gives_second_derivative():
    d2 = derivative(lambda x: derivative(lambda y: y ** 3, x), 2.0)
    assert d2 == 12.0


def test_nested_derivative_has_no_perturbation_confusion():
    # d/dx [x * d/dy (x + y)] = d/dx [x * 1] = 1
    out = derivative(lambda x: x * derivative(lambda y: x + y, 1.0), 1.0)
    assert value(out) == 1.0


def test_nested_derivative_of_transcendental():
    # d/dx exp(x) * sin'(x) = exp(x) * (cos(x) - sin(x))
    x0 = 0.4
    out = derivative(lambda x: exp(x) * derivative(sin, x), x0)
    np.testing.assert_allclose(out, np.exp(x0) * (np.cos(x0) - np.sin(x0)), rtol=1e-12)


def test_value_strips_every_level():
    outer = vars([2.0])[0]
    inner = vars([outer])[0]
    assert value(inner) == 2.0
    assert value(3.5) == 3.5
