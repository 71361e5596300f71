"""Network configuration files (JSON or YAML)."""

from __future__ import annotations

import json
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple

import numpy as np
import yaml

from ..core import activations
from ..core.constants import LEARNING_RATE_DEFAULT
from ..core.errors import ConfigNotFoundError, DatasetNotFoundError, ParseError
from ..core.layer import Layer, LayerShape
from ..core.network import Network
from ..core.types import PathLike


@dataclass(frozen=True)
class NetworkConfig:
    """Topology and session settings read from a configuration file."""

    input_size: int
    hidden_sizes: Tuple[int, ...]
    output_size: int
    categories: Tuple[str, ...] = ()
    epoch: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    learning_rate: float = LEARNING_RATE_DEFAULT
    activation: str = "sigmoid"
    source: Optional[str] = field(default=None, compare=False)

    @property
    def topology(self) -> List[int]:
        return [self.input_size, *self.hidden_sizes, self.output_size]

    def as_dict(self) -> Mapping[str, Any]:
        payload: dict = {
            "topology": {
                "layers": {
                    "input": self.input_size,
                    "hidden": list(self.hidden_sizes),
                    "output": self.output_size,
                }
            },
            "category": list(self.categories),
            "learning_rate": self.learning_rate,
            "activation": self.activation,
        }
        if self.epoch is not None:
            payload["epoch"] = self.epoch
        if self.width is not None and self.height is not None:
            payload["dimensions"] = {"width": self.width, "height": self.height}
        return payload


def _read(path: Path) -> Mapping[str, Any]:
    text = path.read_text()
    suffix = path.suffix.lower()
    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text or "{}")
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ParseError(f"config file is error: {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ParseError(f"Config {path.name} must decode to a mapping")
    return data


def _lookup(root: Mapping[str, Any], dotted: str) -> Any:
    node: Any = root
    for key in dotted.split("."):
        if not isinstance(node, Mapping) or key not in node:
            raise ParseError(f"Missing required field {dotted!r}")
        node = node[key]
    return node


def _size(value: Any, topic: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParseError(f"{topic} must be an integer, got {value!r}")
    if value < 0:
        raise ParseError(f"size neurons in layer is < 0 ({topic}={value})")
    return value


def _sizes(value: Any, topic: str) -> Tuple[int, ...]:
    if isinstance(value, list):
        return tuple(_size(item, f"{topic}[{idx}]") for idx, item in enumerate(value))
    return (_size(value, topic),)


def parse_config(data: Mapping[str, Any], source: Optional[str] = None) -> NetworkConfig:
    """Validate a decoded configuration mapping."""

    input_size = _size(_lookup(data, "topology.layers.input"), "topology.layers.input")
    hidden_sizes = _sizes(_lookup(data, "topology.layers.hidden"), "topology.layers.hidden")
    output_size = _size(_lookup(data, "topology.layers.output"), "topology.layers.output")

    width = height = None
    if "dimensions" in data:
        width = _size(_lookup(data, "dimensions.width"), "dimensions.width")
        height = _size(_lookup(data, "dimensions.height"), "dimensions.height")
        if width * height != input_size:
            warnings.warn(
                "dimensions.width * dimensions.height != topology.layers.input size, "
                f"set to {width * height}",
                stacklevel=2,
            )
            input_size = width * height

    categories: Tuple[str, ...] = ()
    if "category" in data:
        raw = data["category"]
        if not isinstance(raw, list) or not raw:
            raise ParseError("category must be a non-empty list")
        categories = tuple(str(item) for item in raw)
        if output_size != len(categories):
            warnings.warn(
                f"category.size() != topology.layers.output size, set to {len(categories)}",
                stacklevel=2,
            )
            output_size = len(categories)

    epoch = None
    if "epoch" in data:
        epoch = _size(data["epoch"], "epoch")

    learning_rate = data.get("learning_rate", LEARNING_RATE_DEFAULT)
    if isinstance(learning_rate, bool) or not isinstance(learning_rate, (int, float)):
        raise ParseError(f"learning_rate must be a number, got {learning_rate!r}")

    activation = str(data.get("activation", "sigmoid"))
    if activation not in activations.ACTIVATIONS:
        raise ParseError(f"Unknown activation {activation!r}")

    return NetworkConfig(
        input_size=input_size,
        hidden_sizes=hidden_sizes,
        output_size=output_size,
        categories=categories,
        epoch=epoch,
        width=width,
        height=height,
        learning_rate=float(learning_rate),
        activation=activation,
        source=source,
    )


def load_config(path: PathLike) -> NetworkConfig:
    path = Path(path)
    if not path.is_file():
        raise ConfigNotFoundError(f"Could not find config file {path}")
    return parse_config(_read(path), source=str(path))


def build_layers(config: NetworkConfig) -> Tuple[Layer, Layer, Layer]:
    options = {
        "activation": activations.resolve(config.activation),
        "learning_rate": config.learning_rate,
    }
    input_layer = Layer.single(config.input_size, **options)
    hidden_layer = Layer(LayerShape.GROUPED, **options)
    for size in config.hidden_sizes:
        hidden_layer.create(size)
    output_layer = Layer.single(config.output_size, **options)
    return input_layer, hidden_layer, output_layer


def load_network(
    config: PathLike | NetworkConfig,
    dataset: Optional[PathLike] = None,
    *,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> Network:
    """Build a network from ``config`` and, with a dataset, prime its session."""

    if not isinstance(config, NetworkConfig):
        config = load_config(config)
    if dataset is not None and not Path(dataset).is_dir():
        raise DatasetNotFoundError(f"Could not find dataset folder {dataset}")

    network = Network(*build_layers(config), seed=seed, rng=rng)
    if dataset is not None:
        network.set_dataset(dataset)
        network.set_categories(config.categories)
        if config.epoch is not None:
            network.set_epoch(config.epoch)
    return network


__all__ = ["NetworkConfig", "build_layers", "load_config", "load_network", "parse_config"]
