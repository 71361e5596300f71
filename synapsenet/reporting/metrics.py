"""Per-epoch metric sinks, passed to ``Network.education`` as callbacks."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Dict, Mapping, Optional

from ..core.types import PathLike

FIELDS = ("epoch", "split", "processed", "skipped", "loss")


def epoch_record(epoch: int, split: str, metrics: Mapping[str, float]) -> Dict[str, object]:
    """Build one row of :data:`FIELDS` from ``EpochStats.as_metrics()``."""

    missing = [name for name in FIELDS[2:] if name not in metrics]
    if missing:
        raise KeyError(f"Epoch metrics are missing {missing}")
    record: Dict[str, object] = {"epoch": int(epoch), "split": split}
    record["processed"] = int(metrics["processed"])
    record["skipped"] = int(metrics["skipped"])
    record["loss"] = float(metrics["loss"])
    return record


class JsonlSink:
    """One JSON object per epoch; the file is truncated on creation."""

    def __init__(self, path: PathLike, *, split: str = "train", seed: Optional[int] = None) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")
        self.split = split
        self.seed = seed

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        record = epoch_record(epoch, self.split, metrics)
        record["seed"] = self.seed
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record) + "\n")

    __call__ = on_epoch


class CsvSink:
    """CSV with the fixed :data:`FIELDS` header written up front."""

    def __init__(self, path: PathLike, *, split: str = "train") -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.split = split
        with self.path.open("w", encoding="utf-8", newline="") as handle:
            csv.writer(handle).writerow(FIELDS)

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        with self.path.open("a", encoding="utf-8", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=FIELDS)
            writer.writerow(epoch_record(epoch, self.split, metrics))

    __call__ = on_epoch


__all__ = ["FIELDS", "CsvSink", "JsonlSink", "epoch_record"]
