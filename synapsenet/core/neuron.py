"""Single computational unit and its outgoing synapses."""

from __future__ import annotations

import itertools
import numbers
import weakref
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .activations import ActivationFn, differential, sigmoid
from .constants import ERROR_DEFAULT, LEARNING_RATE_DEFAULT, OUTPUT_NEURON_DEFAULT

_ids = itertools.count()


def next_id() -> int:
    """Mint a process-unique neuron id."""

    return next(_ids)


@dataclass
class Synapse:
    """Weighted edge to a neuron owned by another layer.

    ``target`` is a weak reference: neurons are owned by their primitive,
    never by the edges that point at them.
    """

    target: "weakref.ReferenceType[Neuron]"
    weight: float


class Neuron:
    """A unit holding an output, an error and edges to the previous layer.

    Synapses are keyed by the target's id. Ids are minted in creation order
    and layers are connected in member order, so iteration follows the key
    order. Equality is identity.
    """

    def __init__(
        self,
        activation: ActivationFn = sigmoid,
        learning_rate: float = LEARNING_RATE_DEFAULT,
    ) -> None:
        self.id = next_id()
        self.activation = activation
        self.learning_rate = float(learning_rate)
        self.output = OUTPUT_NEURON_DEFAULT
        self.error = ERROR_DEFAULT
        self._categories: List[str] = []
        self._synapses: Dict[int, Synapse] = {}

    # ------------------------------------------------------------------
    # Topology

    def create_synapse(self, target: "Neuron", weight: float) -> "Neuron":
        """Link to ``target`` unless an edge already exists; return ``target``."""

        if target.id not in self._synapses:
            self._synapses[target.id] = Synapse(weakref.ref(target), float(weight))
        return target

    def get_weight(self, target: Optional["Neuron"]) -> Optional[float]:
        if target is None:
            return None
        synapse = self._synapses.get(target.id)
        if synapse is None or synapse.target() is not target:
            return None
        return synapse.weight

    def set_weight(self, target: "Neuron", weight: float) -> None:
        synapse = self._synapses.get(target.id)
        if synapse is None or synapse.target() is not target:
            raise KeyError(f"Neuron {self.id} has no synapse to neuron {target.id}")
        synapse.weight = float(weight)

    @property
    def fan_in(self) -> int:
        """Number of synapses whose target is still alive."""

        return sum(1 for synapse in self._synapses.values() if synapse.target() is not None)

    @property
    def synapses(self) -> Iterator[Tuple["Neuron", float]]:
        for synapse in self._synapses.values():
            target = synapse.target()
            if target is not None:
                yield target, synapse.weight

    # ------------------------------------------------------------------
    # Categories

    @property
    def categories(self) -> List[str]:
        return list(self._categories)

    def add_category(self, category: str) -> None:
        if category not in self._categories:
            self._categories.append(category)

    def clear_categories(self) -> None:
        self._categories.clear()

    # ------------------------------------------------------------------
    # Passes

    def compute_output_value(self) -> float:
        acc = 0.0
        for target, weight in self.synapses:
            acc += target.output * weight
        self.output = self.activation(acc)
        return self.output

    def compute_error(self, signal: Union[str, float]) -> float:
        """Set the error from a category label or a backpropagated sum.

        For a label the target is 1 when the label is one of this unit's
        categories and 0 otherwise. Several output units may share a label,
        in which case all of them are pushed towards 1.
        """

        if isinstance(signal, str):
            expected = 1.0 if signal in self._categories else 0.0
            self.error = expected - self.output
        elif isinstance(signal, numbers.Real):
            self.error = float(signal)
        else:
            raise TypeError(f"Unsupported error signal: {signal!r}")
        return self.error

    def compute_weights(self) -> None:
        slope = differential(self.activation, self.output)
        step = self.learning_rate * self.error * slope
        for synapse in self._synapses.values():
            target = synapse.target()
            if target is not None:
                synapse.weight += step * target.output

    def __repr__(self) -> str:
        edges = ", ".join(f"(id:{target.id}, weight:{weight:.4f})" for target, weight in self.synapses)
        return f"Neuron(id={self.id}, output={self.output:.4f}, synapses=[{edges}])"


__all__ = ["Neuron", "Synapse", "next_id"]
