"""A group of neurons and the bulk operations that fan out to them."""

from __future__ import annotations

from typing import Iterator, List, Sequence

import numpy as np

from .activations import ActivationFn, sigmoid
from .constants import LEARNING_RATE_DEFAULT, WEIGHT_INIT_RANGE
from .neuron import Neuron
from .types import Array


class Primitive:
    """Ordered storage for the neurons of one depth of the network."""

    def __init__(
        self,
        size: int = 0,
        *,
        activation: ActivationFn = sigmoid,
        learning_rate: float = LEARNING_RATE_DEFAULT,
    ) -> None:
        if size < 0:
            raise ValueError(f"Primitive size must be non-negative, got {size}")
        self._neurons: List[Neuron] = [
            Neuron(activation=activation, learning_rate=learning_rate) for _ in range(size)
        ]

    def __len__(self) -> int:
        return len(self._neurons)

    def __iter__(self) -> Iterator[Neuron]:
        return iter(self._neurons)

    def __getitem__(self, position: int) -> Neuron:
        return self._neurons[position]

    def _check_position(self, position: int) -> None:
        if not 0 <= position < len(self._neurons):
            raise IndexError(f"position {position} out of range for {len(self._neurons)} neurons")

    # ------------------------------------------------------------------
    # Wiring

    def connect(self, other: "Primitive", rng: np.random.Generator) -> None:
        """Link every neuron here to every neuron of ``other``."""

        low, high = WEIGHT_INIT_RANGE
        for neuron in self._neurons:
            weights = rng.uniform(low, high, size=len(other))
            for target, weight in zip(other, weights):
                neuron.create_synapse(target, float(weight))

    # ------------------------------------------------------------------
    # Passes

    def calculate(self) -> None:
        for neuron in self._neurons:
            neuron.compute_output_value()

    def update(self, signal: "str | Primitive") -> None:
        """Compute errors from a category label or from the next layer.

        With a label every neuron compares it to its own categories (output
        layer). With a primitive each neuron receives the weighted sum of the
        errors of the neurons that read from it.
        """

        if isinstance(signal, str):
            for neuron in self._neurons:
                neuron.compute_error(signal)
            return
        for neuron in self._neurons:
            acc = 0.0
            for successor in signal:
                weight = successor.get_weight(neuron)
                if weight is not None:
                    acc += weight * successor.error
            neuron.compute_error(acc)

    def update_weight(self) -> None:
        for neuron in self._neurons:
            neuron.compute_weights()

    # ------------------------------------------------------------------
    # Accessors

    def set(self, position: int, value: float) -> None:
        self._check_position(position)
        self._neurons[position].output = float(value)

    def set_category(self, position: int, category: str) -> None:
        self._check_position(position)
        self._neurons[position].add_category(category)

    def clear_categories(self) -> None:
        for neuron in self._neurons:
            neuron.clear_categories()

    def outputs(self) -> Array:
        return np.array([neuron.output for neuron in self._neurons], dtype=np.float64)

    def errors(self) -> Array:
        return np.array([neuron.error for neuron in self._neurons], dtype=np.float64)

    def weight_matrix(self, other: "Primitive") -> Array:
        """Weights from ``other`` into this primitive, one row per neuron here."""

        matrix = np.zeros((len(self), len(other)), dtype=np.float64)
        for row, neuron in enumerate(self._neurons):
            for col, source in enumerate(other):
                weight = neuron.get_weight(source)
                if weight is not None:
                    matrix[row, col] = weight
        return matrix

    def load_weight_matrix(self, other: "Primitive", matrix: Sequence[Sequence[float]]) -> None:
        matrix = np.asarray(matrix, dtype=np.float64)
        if matrix.shape != (len(self), len(other)):
            raise ValueError(
                f"Expected weight matrix of shape {(len(self), len(other))}, got {matrix.shape}"
            )
        for row, neuron in enumerate(self._neurons):
            for col, source in enumerate(other):
                neuron.set_weight(source, matrix[row, col])


__all__ = ["Primitive"]
