"""End-to-end run: load a network, train it, evaluate it, write artifacts."""

from __future__ import annotations

import dataclasses
import json
import logging
import time
from pathlib import Path
from typing import Mapping, Optional, Sequence

import numpy as np

from ..core.network import Network
from ..core.types import Array, PathLike, RunResult
from ..data.config import NetworkConfig, load_config, load_network
from ..reporting.artifacts import write_manifest
from ..reporting.metrics import CsvSink, JsonlSink

logger = logging.getLogger(__name__)


def save_checkpoint(path: PathLike, state: Mapping[str, Array]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as handle:
        np.savez_compressed(handle, **dict(state))
    return path


def load_checkpoint(network: Network, path: PathLike) -> None:
    with np.load(Path(path)) as data:
        network.load_state_dict({name: data[name] for name in data.files})


def run_pipeline(
    config: PathLike | NetworkConfig,
    dataset: PathLike,
    *,
    epochs: Optional[int] = None,
    seed: Optional[int] = None,
    learning_rate: Optional[float] = None,
    run_dir: Optional[PathLike] = None,
    evaluate: bool = True,
    weights: Optional[PathLike] = None,
) -> RunResult:
    """Train on ``dataset`` and leave metrics, weights and a manifest in ``run_dir``."""

    if not isinstance(config, NetworkConfig):
        config = load_config(config)
    overrides = {}
    if epochs is not None:
        overrides["epoch"] = int(epochs)
    if learning_rate is not None:
        overrides["learning_rate"] = float(learning_rate)
    if overrides:
        config = dataclasses.replace(config, **overrides)

    network = load_network(config, dataset, seed=seed)
    if weights is not None:
        load_checkpoint(network, weights)

    run_dir = _resolve_run_dir(run_dir)
    run_dir.mkdir(parents=True, exist_ok=True)

    _print_startup_summary(
        dataset=str(dataset),
        topology=network.topology,
        categories=config.categories,
        epochs=config.epoch,
        learning_rate=config.learning_rate,
        activation=config.activation,
        param_count=network.parameter_count(),
    )

    train_jsonl = JsonlSink(run_dir / "metrics.jsonl", split="train", seed=seed)
    train_csv = CsvSink(run_dir / "metrics.csv", split="train")
    summary = network.education(callbacks=[train_jsonl, train_csv])
    logger.info(
        "education finished: epochs=%d processed=%d skipped=%d",
        summary.epochs,
        summary.processed,
        summary.skipped,
    )

    checkpoint = save_checkpoint(run_dir / "weights.npz", network.state_dict())

    evaluation_path = ""
    accuracy = None
    if evaluate:
        report = network.check_on_data()
        accuracy = report.accuracy
        path = run_dir / "evaluation.json"
        path.write_text(json.dumps(report.as_dict(), indent=2))
        evaluation_path = str(path)
        logger.info("evaluation: %d/%d correct", report.correct, report.total)

    manifest = write_manifest(
        run_dir / "manifest.json",
        config=config.as_dict(),
        run={
            "dataset": str(dataset),
            "seed": seed,
            "processed": summary.processed,
            "skipped": list(summary.skipped_samples),
            "weights": str(weights) if weights is not None else None,
        },
    )

    return RunResult(
        epochs=summary.epochs,
        processed=summary.processed,
        skipped=summary.skipped,
        metrics_path=str(train_jsonl.path),
        checkpoint_path=str(checkpoint),
        manifest_path=manifest,
        evaluation_path=evaluation_path,
        accuracy=accuracy,
    )


def _resolve_run_dir(run_dir: Optional[PathLike]) -> Path:
    if run_dir is not None:
        return Path(run_dir)
    timestamp = time.strftime("%Y%m%d-%H%M%S")
    return Path("runs") / timestamp


def _print_startup_summary(
    *,
    dataset: str,
    topology: Sequence[int],
    categories: Sequence[str],
    epochs: Optional[int],
    learning_rate: float,
    activation: str,
    param_count: int,
) -> None:
    print("=== SynapseNet run ===")
    print(f"Dataset       : {dataset}")
    print(f"Topology      : {list(topology)}")
    print(f"Categories    : {list(categories)}")
    print(f"Epochs        : {epochs}")
    print(f"Learning rate : {learning_rate}")
    print(f"Activation    : {activation}")
    print(f"Parameters    : {param_count}")
    print("======================")


__all__ = ["load_checkpoint", "run_pipeline", "save_checkpoint"]
