"""Color classification on top of the sigmoid network."""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Sequence, Tuple

import numpy as np

from ..colors import RGB
from ..core.errors import InvalidTopology
from ..core.network import NeuralNetwork
from ..core.types import EpochRecord
from ..data.samples import TEST_NOISE, Sample, build_samples, build_test_samples
from ..pixels import Pixel

logger = logging.getLogger(__name__)

INPUT_SIZE = 3
DEFAULT_HIDDEN = 16
DEFAULT_LEARNING_RATE = 0.5


def resolve_rgb(definition: object) -> RGB:
    """Accept a :class:`Color`, anything exposing ``.rgb`` or a plain triple."""

    rgb = getattr(definition, "rgb", definition)
    try:
        red, green, blue = rgb  # type: ignore[misc]
    except (TypeError, ValueError) as exc:
        raise TypeError(f"Cannot interpret {definition!r} as an RGB color") from exc
    return Pixel(red, green, blue).rgb


class ColorRecognitionSystem:
    """Train a ``[3, hidden, len(palette)]`` network to name pixel colors.

    The palette's insertion order fixes the one-hot index of every label.
    Callbacks receive ``on_epoch(epoch, {"loss": ..., "accuracy": ...})``
    after each training epoch.
    """

    def __init__(
        self,
        palette: Mapping[str, object],
        *,
        learning_rate: float = DEFAULT_LEARNING_RATE,
        hidden_size: int = DEFAULT_HIDDEN,
        rng: np.random.Generator | None = None,
        callbacks: Sequence[object] | None = None,
        log_every: int = 20,
    ) -> None:
        if not palette:
            raise InvalidTopology("Palette must contain at least one color")
        self.labels: Tuple[str, ...] = tuple(palette.keys())
        self.colors: Tuple[RGB, ...] = tuple(resolve_rgb(v) for v in palette.values())
        self.rng = rng if rng is not None else np.random.default_rng()
        self.network = NeuralNetwork(
            layer_sizes=[INPUT_SIZE, hidden_size, len(self.labels)],
            learning_rate=learning_rate,
            rng=self.rng,
        )
        self.callbacks = list(callbacks or [])
        self.log_every = max(1, int(log_every))
        self._history: List[EpochRecord] = []

    @property
    def training_history(self) -> Tuple[EpochRecord, ...]:
        return tuple(self._history)

    def generate_training_set(self, samples_per_color: int) -> List[Sample]:
        samples = build_samples(self.colors, samples_per_color, self.rng)
        self.rng.shuffle(samples)
        return samples

    def train(self, epochs: int, samples_per_color: int) -> List[EpochRecord]:
        """Train for ``epochs`` passes over one generated set; return the new records."""

        samples = self.generate_training_set(samples_per_color)
        logger.info(
            "Training %s on %d samples for %d epochs",
            list(self.network.layer_sizes),
            len(samples),
            epochs,
        )
        records: List[EpochRecord] = []
        if not samples:
            return records
        start = len(self._history)
        for offset in range(epochs):
            self.rng.shuffle(samples)
            total_loss = 0.0
            correct = 0
            for sample in samples:
                total_loss += self.network.train(sample.inputs, sample.target)
                # Scored after this sample's own update.
                if self.network.best_prediction(sample.inputs) == sample.label_index:
                    correct += 1
            record = EpochRecord(
                epoch=start + offset + 1,
                loss=total_loss / len(samples),
                accuracy=correct / len(samples),
            )
            self._history.append(record)
            records.append(record)
            self._emit_epoch(record)
            if offset == 0 or record.epoch % self.log_every == 0 or offset == epochs - 1:
                logger.info(
                    "Epoch %d: loss=%.4f accuracy=%.2f%%",
                    record.epoch,
                    record.loss,
                    record.accuracy * 100,
                )
        return records

    def test_accuracy(self, test_samples_per_color: int) -> float:
        pairs = build_test_samples(
            self.colors, test_samples_per_color, self.rng, amplitude=TEST_NOISE
        )
        accuracy = self.network.accuracy(pairs)
        logger.info("Test accuracy over %d samples: %.2f%%", len(pairs), accuracy * 100)
        return accuracy

    def predict(self, pixel: Pixel) -> Dict[str, float]:
        output = self.network.predict(pixel.normalized())
        return {label: float(score) for label, score in zip(self.labels, output)}

    def best_prediction_label(self, pixel: Pixel) -> str:
        return self.labels[self.network.best_prediction(pixel.normalized())]

    # ------------------------------------------------------------------
    # Internal helpers

    def _emit_epoch(self, record: EpochRecord) -> None:
        metrics = {"loss": record.loss, "accuracy": record.accuracy}
        for callback in self.callbacks:
            if hasattr(callback, "on_epoch"):
                callback.on_epoch(record.epoch, metrics)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(record.epoch, metrics)


__all__ = ["ColorRecognitionSystem", "resolve_rgb"]
