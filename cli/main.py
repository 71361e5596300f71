"""Command line entry point: load a network, train it and evaluate it."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Iterable

from synapsenet.core.errors import NetworkError
from synapsenet.data.config import load_network
from synapsenet.training import pipelines


def _format_result(result) -> str:
    payload = {
        "epochs": result.epochs,
        "processed": result.processed,
        "skipped": result.skipped,
        "metrics": result.metrics_path,
        "weights": result.checkpoint_path,
        "manifest": result.manifest_path,
    }
    if result.evaluation_path:
        payload["evaluation"] = result.evaluation_path
        payload["accuracy"] = result.accuracy
    return json.dumps(payload, sort_keys=True)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config", type=Path, required=True, help="Network JSON/YAML config")
    parser.add_argument("--dataset", type=Path, required=True, help="Dataset root folder")
    parser.add_argument("--epochs", type=int, help="Override the configured epoch count")
    parser.add_argument("--seed", type=int, help="Seed for the initial synapse weights")
    parser.add_argument("--learning-rate", type=float, help="Override the learning rate")
    parser.add_argument("--run-dir", type=Path, help="Where metrics and weights are written")
    parser.add_argument("--weights", type=Path, help="Start from a saved weights.npz")
    parser.add_argument(
        "--evaluate",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Check the trained network against the dataset",
    )
    parser.add_argument(
        "--predict",
        type=Path,
        nargs="+",
        default=[],
        help="Classify these images with the trained weights",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        result = pipelines.run_pipeline(
            args.config,
            args.dataset,
            epochs=args.epochs,
            seed=args.seed,
            learning_rate=args.learning_rate,
            run_dir=args.run_dir,
            evaluate=args.evaluate,
            weights=args.weights,
        )
        print(_format_result(result))

        if args.predict:
            network = load_network(args.config, args.dataset, seed=args.seed)
            pipelines.load_checkpoint(network, result.checkpoint_path)
            network.assign_categories(network.enumerator(args.dataset, network.categories))
            for sample in args.predict:
                labels = network.perception(sample)
                print(json.dumps({"sample": str(sample), "categories": labels}))
    except NetworkError as exc:
        raise SystemExit(f"error: {exc}") from exc


if __name__ == "__main__":
    main()
