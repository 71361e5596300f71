"""Core engine: neurons, layers and the network that drives them."""

from . import activations, constants, errors, layer, network, neuron, primitive, types

__all__ = ["activations", "constants", "errors", "layer", "network", "neuron", "primitive", "types"]
