"""Numeric defaults shared by the engine."""

from __future__ import annotations

WEIGHT_SYNAPSES_DEFAULT = 0.50
OUTPUT_NEURON_DEFAULT = 0.50
LEARNING_RATE_DEFAULT = 0.10
ERROR_DEFAULT = 0.50

# Step used by the forward finite difference in ``activations.differential``.
ESP = 0.01
THRESHOLD_SINGLE_JUMP = 10.0
DEGREE_FUNCTION = 1.00

# Initial synapse weights are drawn uniformly from this interval.
WEIGHT_INIT_RANGE = (-WEIGHT_SYNAPSES_DEFAULT, WEIGHT_SYNAPSES_DEFAULT)

__all__ = [
    "DEGREE_FUNCTION",
    "ERROR_DEFAULT",
    "ESP",
    "LEARNING_RATE_DEFAULT",
    "OUTPUT_NEURON_DEFAULT",
    "THRESHOLD_SINGLE_JUMP",
    "WEIGHT_INIT_RANGE",
    "WEIGHT_SYNAPSES_DEFAULT",
]
