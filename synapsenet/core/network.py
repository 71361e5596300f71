"""Network assembly, per-sample passes and the training/inference loops."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import numpy as np

from ..data.dataset import index_dataset
from ..data.images import decode_image
from .errors import DatasetNotFoundError, PreconditionError, StructuralError
from .layer import Layer
from .primitive import Primitive
from .types import (
    Array,
    DatasetEnumerator,
    EpochStats,
    EvaluationReport,
    PathLike,
    SampleDecoder,
    SampleOutcome,
    SampleResult,
    TrainingSummary,
)

logger = logging.getLogger(__name__)


class Network:
    """Feed-forward network built from an input, a hidden and an output layer.

    Construction wires every layer to its predecessor and freezes the layers.
    The network owns every neuron; synapses only hold weak references, so the
    object must not be copied (``copy.copy`` and ``copy.deepcopy`` raise).
    """

    def __init__(
        self,
        input_layer: Layer,
        hidden_layer: Layer,
        output_layer: Layer,
        *,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        enumerator: DatasetEnumerator = index_dataset,
        decoder: SampleDecoder = decode_image,
    ) -> None:
        self._validate(input_layer, hidden_layer, output_layer)
        self._input_layer = input_layer
        self._hidden_layer = hidden_layer
        self._output_layer = output_layer
        self.enumerator = enumerator
        self.decoder = decoder

        self._dataset: Optional[Path] = None
        self._categories: List[str] = []
        self._epoch: Optional[int] = None

        self._wire(rng if rng is not None else np.random.default_rng(seed))

    # ------------------------------------------------------------------
    # Construction

    @staticmethod
    def _validate(input_layer: Layer, hidden_layer: Layer, output_layer: Layer) -> None:
        if input_layer is None or hidden_layer is None or output_layer is None:
            raise StructuralError("Not initialize layers in Network.")
        if not input_layer.is_single:
            raise StructuralError("Input layer must be single-shape")
        if hidden_layer.is_single:
            raise StructuralError("Hidden layer must be multi-shape")
        if not output_layer.is_single:
            raise StructuralError("Output layer must be single-shape")
        if input_layer.primitive is None or output_layer.primitive is None:
            raise StructuralError("Not initialize input or output layer.")
        if len(hidden_layer) == 0:
            raise StructuralError("Not initialize hidden layer.")
        for name, layer in (("input", input_layer), ("hidden", hidden_layer), ("output", output_layer)):
            if layer.frozen:
                raise StructuralError(f"The {name} layer already belongs to a network")
            if any(size == 0 for size in layer.sizes):
                raise StructuralError(f"The {name} layer has an empty group: {layer.sizes}")

    def _wire(self, rng: np.random.Generator) -> None:
        groups = self._hidden_layer.groups
        self.output.connect(groups[-1], rng)
        for current, successor in zip(groups[:-1], groups[1:]):
            successor.connect(current, rng)
        groups[0].connect(self.input, rng)

        for target, source in self._connections():
            expected = len(source)
            for neuron in target:
                if neuron.fan_in != expected:
                    raise StructuralError(
                        f"Neuron {neuron.id} has fan-in {neuron.fan_in}, expected {expected}"
                    )

        for layer in (self._input_layer, self._hidden_layer, self._output_layer):
            layer.freeze()

    def _connections(self) -> List[tuple[Primitive, Primitive]]:
        """Return ``(destination, source)`` pairs from the input side out."""

        groups = self._hidden_layer.groups
        pairs = [(groups[0], self.input)]
        pairs.extend(zip(groups[1:], groups[:-1]))
        pairs.append((self.output, groups[-1]))
        return pairs

    def __copy__(self):
        raise TypeError("Network objects cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("Network objects cannot be copied")

    # ------------------------------------------------------------------
    # Layers and session state

    @property
    def input(self) -> Primitive:
        return self._input_layer.primitive

    @property
    def hidden(self) -> List[Primitive]:
        return self._hidden_layer.groups

    @property
    def output(self) -> Primitive:
        return self._output_layer.primitive

    @property
    def topology(self) -> List[int]:
        return [len(self.input), *self._hidden_layer.sizes, len(self.output)]

    @property
    def dataset(self) -> Optional[Path]:
        return self._dataset

    @property
    def categories(self) -> List[str]:
        return list(self._categories)

    @property
    def epoch(self) -> Optional[int]:
        return self._epoch

    def set_dataset(self, dataset: PathLike) -> None:
        self._dataset = Path(dataset)

    def set_categories(self, categories: Sequence[str]) -> None:
        self._categories = [str(category) for category in categories]

    def set_epoch(self, epoch: int) -> None:
        epoch = int(epoch)
        if epoch < 0:
            raise ValueError(f"epoch must be non-negative, got {epoch}")
        self._epoch = epoch

    # ------------------------------------------------------------------
    # Per-sample passes

    def forward(self, pixels: Sequence[float]) -> Array:
        values = np.asarray(pixels, dtype=np.float64).reshape(-1)
        if values.size != len(self.input):
            raise ValueError(f"Expected {len(self.input)} input values, got {values.size}")
        for position, value in enumerate(values):
            self.input.set(position, value)
        for group in self.hidden:
            group.calculate()
        self.output.calculate()
        return self.output.outputs()

    def backward(self, category: str) -> None:
        self.output.update(category)
        groups = self.hidden
        groups[-1].update(self.output)
        for index in range(len(groups) - 1, 0, -1):
            groups[index - 1].update(groups[index])

    def update_weights(self) -> None:
        for group in self.hidden:
            group.update_weight()
        self.output.update_weight()

    def fit_sample(self, pixels: Sequence[float], category: str) -> float:
        """Run one forward/backward/update cycle; return the squared error."""

        self.forward(pixels)
        self.backward(category)
        self.update_weights()
        return float(np.sum(np.square(self.output.errors())))

    def predict(self, pixels: Sequence[float]) -> List[str]:
        outputs = self.forward(pixels)
        winner = int(np.argmax(outputs))
        return self.output[winner].categories

    # ------------------------------------------------------------------
    # Training

    def education(self, callbacks: Optional[Sequence[object]] = None) -> TrainingSummary:
        """Train on the session dataset for the configured number of epochs.

        Every precondition is checked and the dataset indexed before a single
        weight changes. Samples that cannot be decoded are skipped and
        reported in the summary.
        """

        index = self._prepare_education()
        return self._run_education(index, list(callbacks or []))

    def _prepare_education(self) -> Dict[str, List[Path]]:
        if self._dataset is None or str(self._dataset) == "":
            raise PreconditionError("Dataset path is not set")
        if not self._dataset.exists():
            raise DatasetNotFoundError(f"Could not find dataset folder {self._dataset}")
        if self._epoch is None or not self._categories:
            raise PreconditionError("Network isn't initialize: epoch and categories are required")

        index = self.enumerator(self._dataset, self._categories)
        if len(index) != len(self.output):
            raise PreconditionError(
                f"Dataset has {len(index)} categories but the output layer has "
                f"{len(self.output)} neurons"
            )

        self.assign_categories(index)
        return index

    def assign_categories(self, categories: Iterable[str]) -> None:
        """Label output neuron *k* with the *k*-th category, dropping old labels."""

        categories = list(categories)
        if len(categories) > len(self.output):
            raise PreconditionError(
                f"{len(categories)} categories for {len(self.output)} output neurons"
            )
        self.output.clear_categories()
        for position, category in enumerate(categories):
            self.output.set_category(position, category)

    def _run_education(
        self, index: Mapping[str, Sequence[Path]], callbacks: Sequence[object]
    ) -> TrainingSummary:
        processed = 0
        skipped: List[str] = []
        history: List[EpochStats] = []
        for epoch in range(1, self._epoch + 1):
            losses: List[float] = []
            epoch_skipped = 0
            for category, samples in index.items():
                for sample in samples:
                    outcome, loss = self._train_on(sample, category)
                    if outcome is SampleOutcome.SKIPPED:
                        epoch_skipped += 1
                        skipped.append(str(sample))
                    else:
                        losses.append(loss)
            processed += len(losses)
            stats = EpochStats(
                epoch=epoch,
                processed=len(losses),
                skipped=epoch_skipped,
                loss=float(np.mean(losses)) if losses else 0.0,
            )
            history.append(stats)
            logger.info(
                "epoch %d/%d: processed=%d skipped=%d loss=%.6f",
                epoch,
                self._epoch,
                stats.processed,
                stats.skipped,
                stats.loss,
            )
            self._emit_epoch(callbacks, stats)
        return TrainingSummary(
            epochs=self._epoch,
            processed=processed,
            skipped=len(skipped),
            skipped_samples=tuple(skipped),
            history=tuple(history),
        )

    def _train_on(self, sample: Path, category: str) -> tuple[SampleOutcome, float]:
        pixels = self._decode(sample)
        if pixels is None:
            return SampleOutcome.SKIPPED, 0.0
        return SampleOutcome.PROCESSED, self.fit_sample(pixels, category)

    def _decode(self, sample: PathLike) -> Optional[Array]:
        pixels = self.decoder(sample)
        if pixels is None:
            logger.debug("skipping %s: could not decode", sample)
            return None
        pixels = np.asarray(pixels, dtype=np.float64).reshape(-1)
        if pixels.size != len(self.input):
            logger.debug(
                "skipping %s: %d values for %d input neurons", sample, pixels.size, len(self.input)
            )
            return None
        return pixels

    @staticmethod
    def _emit_epoch(callbacks: Sequence[object], stats: EpochStats) -> None:
        metrics = stats.as_metrics()
        for callback in callbacks:
            if hasattr(callback, "on_epoch"):
                callback.on_epoch(stats.epoch, metrics)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(stats.epoch, metrics)

    # ------------------------------------------------------------------
    # Inference

    def perception(self, sample: PathLike) -> List[str]:
        """Classify one sample; return the winning neuron's categories."""

        if not Path(sample).exists():
            return []
        pixels = self._decode(sample)
        if pixels is None:
            return []
        return self.predict(pixels)

    def check_on_data(self, dataset: Optional[PathLike] = None) -> EvaluationReport:
        """Run :meth:`perception` over every sample of a labelled dataset."""

        root = Path(dataset) if dataset is not None else self._dataset
        if root is None:
            raise PreconditionError("Dataset path is not set")
        categories = self._categories or self._output_categories()
        if not categories:
            raise PreconditionError("Network has no categories to evaluate against")

        results: List[SampleResult] = []
        skipped: List[str] = []
        for category, samples in self.enumerator(root, categories).items():
            for sample in samples:
                pixels = self._decode(sample)
                if pixels is None:
                    skipped.append(str(sample))
                    continue
                predicted = self.predict(pixels)
                results.append(SampleResult(str(sample), category, tuple(predicted)))
        return EvaluationReport(results=tuple(results), skipped=tuple(skipped))

    def _output_categories(self) -> List[str]:
        seen: List[str] = []
        for neuron in self.output:
            for category in neuron.categories:
                if category not in seen:
                    seen.append(category)
        return seen

    # ------------------------------------------------------------------
    # Weights

    def state_dict(self) -> Mapping[str, Array]:
        return {
            f"W{idx}": target.weight_matrix(source)
            for idx, (target, source) in enumerate(self._connections())
        }

    def load_state_dict(self, state: Mapping[str, Array]) -> None:
        for idx, (target, source) in enumerate(self._connections()):
            key = f"W{idx}"
            if key not in state:
                raise KeyError(f"Missing weight {key} in state dict")
            target.load_weight_matrix(source, state[key])

    def parameter_count(self) -> int:
        return sum(len(target) * len(source) for target, source in self._connections())

    def __repr__(self) -> str:
        return f"Network(topology={self.topology})"


__all__ = ["Network"]
