from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest

from synapsenet.data.images import encode_image

REFERENCE_PIXELS = {
    "cat": np.array([0.9, 0.8, 0.1, 0.2]),
    "dog": np.array([0.1, 0.2, 0.9, 0.8]),
}


def _write_config(path: Path, **overrides) -> Path:
    config = {
        "dimensions": {"width": 2, "height": 2},
        "category": ["cat", "dog"],
        "topology": {"layers": {"input": 4, "hidden": [3], "output": 2}},
        "epoch": 1,
    }
    config.update(overrides)
    path.write_text(json.dumps(config))
    return path


@pytest.fixture
def reference_pixels():
    """2x2 grayscale vectors the dataset images are made from, keyed by category."""

    return {name: pixels.copy() for name, pixels in REFERENCE_PIXELS.items()}


@pytest.fixture
def config_writer():
    """Write a 4-[3]-2 cat/dog JSON config, with top-level keys overridden."""

    return _write_config


@pytest.fixture
def image_dataset(tmp_path):
    """Two categories with one 2x2 grayscale image each, plus a config file."""

    root = tmp_path / "dataset"
    for name, pixels in REFERENCE_PIXELS.items():
        encode_image(pixels, 2, 2, root / name / f"{name}_0.png")
    config = _write_config(tmp_path / "config.json")
    return root, config
