"""Image decoding into flat, normalised pixel vectors."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image

from ..core.types import Array, PathLike

logger = logging.getLogger(__name__)


def decode_image(path: PathLike) -> Optional[Array]:
    """Return the grayscale pixels of ``path`` row-major in ``[0, 1]``.

    ``None`` is returned when the file cannot be read as an image.
    """

    try:
        with Image.open(Path(path)) as image:
            pixels = np.asarray(image.convert("L"), dtype=np.float64)
    except OSError as exc:
        logger.debug("could not decode %s: %s", path, exc)
        return None
    return pixels.reshape(-1) / 255.0


def encode_image(pixels: Array, width: int, height: int, path: PathLike) -> Path:
    """Write a ``[0, 1]`` pixel vector as an 8-bit grayscale image."""

    values = np.clip(np.asarray(pixels, dtype=np.float64).reshape(height, width), 0.0, 1.0)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(np.rint(values * 255.0).astype(np.uint8)).save(path)
    return path


__all__ = ["decode_image", "encode_image"]
