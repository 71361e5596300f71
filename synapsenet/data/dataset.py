"""Dataset folder enumeration.

A dataset is a directory tree in which every folder named after a category
holds that category's images::

    dataset/
        cat/0001.png
        dog/0001.png
"""

from __future__ import annotations

import warnings
from pathlib import Path
from typing import Dict, List, Sequence

from ..core.errors import DatasetNotFoundError
from ..core.types import PathLike

IMAGE_FORMATS = (".png", ".jpeg", ".jpg")


def is_image(path: Path) -> bool:
    return path.suffix.lower() in IMAGE_FORMATS


def index_dataset(root: PathLike, categories: Sequence[str]) -> Dict[str, List[Path]]:
    """Map each category found under ``root`` to its sorted image paths.

    Folders that are not categories and files with unknown extensions are
    reported with a warning and ignored. The mapping follows the order of
    ``categories``; categories without a folder are absent.
    """

    root = Path(root)
    if not root.is_dir():
        raise DatasetNotFoundError(f"Could not find dataset folder {root}")

    wanted = list(dict.fromkeys(categories))
    found: Dict[str, List[Path]] = {}
    for path in sorted(root.rglob("*")):
        if path.is_dir():
            if path.name in wanted:
                found.setdefault(path.name, [])
            else:
                warnings.warn(
                    f"Folder {path.name!r} is not one of the categories {wanted}",
                    stacklevel=2,
                )
            continue
        category = path.parent.name
        if category not in wanted or path.parent == root:
            continue
        if is_image(path):
            found.setdefault(category, []).append(path)
        else:
            warnings.warn(
                f"Image {path.name!r} is not in a supported format {list(IMAGE_FORMATS)}",
                stacklevel=2,
            )
    return {category: found[category] for category in wanted if category in found}


__all__ = ["IMAGE_FORMATS", "index_dataset", "is_image"]
