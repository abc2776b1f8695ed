import numpy as np
import pytest


def central_difference(g, xs, h=1e-6):
    """Numerical gradient of g at the list of floats xs (central differences)."""
    grads = []
    for i in range(len(xs)):
        up = list(xs); up[i] += h
        dn = list(xs); dn[i] -= h
        grads.append((float(g(up)) - float(g(dn))) / (2.0 * h))
    return np.array(grads)


@pytest.fixture
def fd():
    return central_difference
