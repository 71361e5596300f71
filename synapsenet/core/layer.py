"""Shape-tagged layers: one primitive, or a stack of primitives."""

from __future__ import annotations

import enum
from typing import Iterable, Iterator, List, Optional

from .activations import ActivationFn, sigmoid
from .constants import LEARNING_RATE_DEFAULT
from .errors import StructuralError
from .primitive import Primitive


class LayerShape(enum.Enum):
    SINGLE = "single"
    GROUPED = "grouped"


class Layer:
    """A stage of the network (input, hidden or output).

    ``SINGLE`` layers hold exactly one primitive and bound the network;
    ``GROUPED`` layers hold successive hidden depths. The shape is chosen at
    construction; groups can be appended until the network wires the layer.
    """

    def __init__(
        self,
        shape: LayerShape,
        *,
        activation: ActivationFn = sigmoid,
        learning_rate: float = LEARNING_RATE_DEFAULT,
    ) -> None:
        self.shape = LayerShape(shape)
        self.activation = activation
        self.learning_rate = float(learning_rate)
        self._groups: List[Primitive] = []
        self._frozen = False

    @classmethod
    def single(cls, size: int, **kwargs) -> "Layer":
        layer = cls(LayerShape.SINGLE, **kwargs)
        layer.create(size)
        return layer

    @classmethod
    def grouped(cls, sizes: Iterable[int], **kwargs) -> "Layer":
        layer = cls(LayerShape.GROUPED, **kwargs)
        for size in sizes:
            layer.create(size)
        return layer

    @property
    def is_single(self) -> bool:
        return self.shape is LayerShape.SINGLE

    @property
    def frozen(self) -> bool:
        return self._frozen

    def create(self, size: int) -> Primitive:
        """Allocate the primitive (single) or append a new group (grouped)."""

        if self._frozen:
            raise StructuralError("Layer is already wired into a network")
        if size < 0:
            raise StructuralError(f"Layer size must be non-negative, got {size}")
        if self.is_single and self._groups:
            raise StructuralError("Single-shape layer is already created")
        group = Primitive(size, activation=self.activation, learning_rate=self.learning_rate)
        self._groups.append(group)
        return group

    def freeze(self) -> None:
        self._frozen = True

    @property
    def groups(self) -> List[Primitive]:
        return list(self._groups)

    @property
    def primitive(self) -> Optional[Primitive]:
        """The single primitive of a ``SINGLE`` layer, if created."""

        if not self.is_single:
            raise StructuralError("Grouped layer has no single primitive")
        return self._groups[0] if self._groups else None

    @property
    def first(self) -> Primitive:
        return self._groups[0]

    @property
    def last(self) -> Primitive:
        return self._groups[-1]

    @property
    def sizes(self) -> List[int]:
        return [len(group) for group in self._groups]

    def __len__(self) -> int:
        return len(self._groups)

    def __iter__(self) -> Iterator[Primitive]:
        return iter(self._groups)

    def __repr__(self) -> str:
        return f"Layer(shape={self.shape.value}, sizes={self.sizes})"


__all__ = ["Layer", "LayerShape"]
