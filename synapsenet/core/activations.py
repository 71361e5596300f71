"""Activation utilities for SynapseNet."""

from __future__ import annotations

import math
from typing import Callable, Dict

from .constants import DEGREE_FUNCTION, ESP, THRESHOLD_SINGLE_JUMP

ActivationFn = Callable[[float], float]


def sigmoid(x: float) -> float:
    """Return the logistic activation of ``x``."""

    z = DEGREE_FUNCTION * x
    if z >= 0:
        return 1.0 / (1.0 + math.exp(-z))
    e = math.exp(z)
    return e / (1.0 + e)


def single_jump(x: float) -> float:
    """Heaviside step with the threshold at ``THRESHOLD_SINGLE_JUMP``."""

    return 1.0 if x >= THRESHOLD_SINGLE_JUMP else 0.0


def differential(func: ActivationFn, x: float, step: float = ESP) -> float:
    """Forward finite difference of ``func`` at ``x``.

    Weight updates use this estimate instead of the closed-form derivative;
    the truncation error is of order ``step``.
    """

    return (func(x + step) - func(x)) / step


ACTIVATIONS: Dict[str, ActivationFn] = {
    "sigmoid": sigmoid,
    "single_jump": single_jump,
}


def resolve(name: str) -> ActivationFn:
    try:
        return ACTIVATIONS[name]
    except KeyError as exc:
        available = ", ".join(sorted(ACTIVATIONS))
        raise KeyError(f"Unknown activation {name!r}. Available activations: {available}") from exc


__all__ = ["ACTIVATIONS", "ActivationFn", "differential", "resolve", "sigmoid", "single_jump"]
