"""Core typing contracts for SynapseNet."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Protocol, Sequence, Tuple, Union

import numpy as np

Array = np.ndarray
PathLike = Union[str, os.PathLike]


class DatasetEnumerator(Protocol):
    """Map each category name to its ordered sample paths."""

    def __call__(self, root: PathLike, categories: Sequence[str]) -> Dict[str, List[Path]]:
        ...


class SampleDecoder(Protocol):
    """Decode one sample into a flat pixel vector, or ``None`` on failure."""

    def __call__(self, sample: PathLike) -> Optional[Array]:
        ...


class SampleOutcome(enum.Enum):
    """Per-sample result of the training phase."""

    PROCESSED = "processed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class EpochStats:
    """Aggregates for a single pass over the dataset."""

    epoch: int
    processed: int
    skipped: int
    loss: float

    def as_metrics(self) -> Mapping[str, float]:
        return {
            "processed": float(self.processed),
            "skipped": float(self.skipped),
            "loss": float(self.loss),
        }


@dataclass(frozen=True)
class TrainingSummary:
    """Summary returned by :meth:`synapsenet.core.network.Network.education`.

    A summary only exists once the precondition phase has passed, so
    ``completed`` distinguishes "ran" from "did not run" for callers that
    hold on to an optional summary.
    """

    epochs: int
    processed: int
    skipped: int
    skipped_samples: Tuple[str, ...] = ()
    history: Tuple[EpochStats, ...] = ()
    completed: bool = True

    def __bool__(self) -> bool:
        return self.completed


@dataclass(frozen=True)
class SampleResult:
    sample: str
    expected: str
    predicted: Tuple[str, ...]

    @property
    def correct(self) -> bool:
        return self.expected in self.predicted


@dataclass(frozen=True)
class EvaluationReport:
    """Outcome of running inference over a labelled dataset."""

    results: Tuple[SampleResult, ...] = ()
    skipped: Tuple[str, ...] = ()

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def correct(self) -> int:
        return sum(1 for result in self.results if result.correct)

    @property
    def accuracy(self) -> float:
        return self.correct / self.total if self.total else 0.0

    def as_dict(self) -> Dict[str, object]:
        return {
            "total": self.total,
            "correct": self.correct,
            "accuracy": self.accuracy,
            "skipped": list(self.skipped),
            "results": [
                {
                    "sample": result.sample,
                    "expected": result.expected,
                    "predicted": list(result.predicted),
                    "correct": result.correct,
                }
                for result in self.results
            ],
        }


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :func:`synapsenet.training.pipelines.run_pipeline`."""

    epochs: int
    processed: int
    skipped: int
    metrics_path: str
    checkpoint_path: str
    manifest_path: str
    evaluation_path: str = ""
    accuracy: Optional[float] = None


__all__ = [
    "Array",
    "DatasetEnumerator",
    "EpochStats",
    "EvaluationReport",
    "PathLike",
    "RunResult",
    "SampleDecoder",
    "SampleOutcome",
    "SampleResult",
    "TrainingSummary",
]
