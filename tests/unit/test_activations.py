import math

import numpy as np
import pytest

from synapsenet.core.activations import differential, resolve, sigmoid, single_jump
from synapsenet.core.constants import ESP


def test_sigmoid_is_bounded_and_centered():
    assert sigmoid(0.0) == 0.5
    assert 0.0 <= sigmoid(-1000.0) < 1e-12
    assert 1.0 - 1e-12 < sigmoid(1000.0) <= 1.0
    assert sigmoid(2.0) == pytest.approx(1.0 / (1.0 + math.exp(-2.0)))


@pytest.mark.parametrize("x", np.linspace(-10.0, 10.0, 41))
def test_differential_tracks_analytic_sigmoid_slope(x):
    s = sigmoid(x)
    assert abs(differential(sigmoid, x) - s * (1.0 - s)) <= ESP


def test_differential_is_a_forward_difference():
    assert differential(lambda v: v * v, 3.0) == pytest.approx(6.0 + ESP)


def test_single_jump_threshold():
    assert single_jump(10.0) == 1.0
    assert single_jump(9.99) == 0.0


def test_resolve_unknown_activation():
    assert resolve("sigmoid") is sigmoid
    with pytest.raises(KeyError, match="Available activations"):
        resolve("relu")
