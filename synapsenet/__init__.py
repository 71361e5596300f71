"""SynapseNet public API."""

from .core import activations  # noqa: F401
from .core import types  # noqa: F401
from .core.errors import (
    ConfigNotFoundError,
    DatasetNotFoundError,
    NetworkError,
    NetworkIOError,
    ParseError,
    PreconditionError,
    StructuralError,
)
from .core.layer import Layer, LayerShape
from .core.network import Network
from .core.neuron import Neuron
from .core.primitive import Primitive
from .data.config import NetworkConfig, load_config, load_network
from .training.pipelines import run_pipeline

__version__ = "0.1.0"

__all__ = [
    "ConfigNotFoundError",
    "DatasetNotFoundError",
    "Layer",
    "LayerShape",
    "Network",
    "NetworkConfig",
    "NetworkError",
    "NetworkIOError",
    "Neuron",
    "ParseError",
    "PreconditionError",
    "Primitive",
    "StructuralError",
    "activations",
    "load_config",
    "load_network",
    "run_pipeline",
    "types",
]
