"""Core typing contracts for colornet."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

Array = np.ndarray


@dataclass(frozen=True)
class ForwardTrace:
    """Layer-by-layer outputs captured during a single forward pass.

    ``activations[0]`` is the raw input; ``activations[-1]`` is the network
    output. The arrays are read-only so a trace can be handed to
    :meth:`colornet.core.network.NeuralNetwork.backward` later without being
    disturbed by further forward passes.
    """

    activations: Tuple[Array, ...]

    @property
    def inputs(self) -> Array:
        return self.activations[0]

    @property
    def output(self) -> Array:
        return self.activations[-1]

    def __len__(self) -> int:
        return len(self.activations)


@dataclass(frozen=True)
class ModelDescription:
    """Description of the feed-forward network architecture."""

    layer_sizes: List[int]
    learning_rate: float


@dataclass(frozen=True)
class EpochRecord:
    """Mean loss and training accuracy for one completed epoch."""

    epoch: int
    loss: float
    accuracy: float


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :func:`colornet.training.pipelines.run_pipeline`."""

    epochs: int
    final_loss: float
    final_accuracy: float
    test_accuracy: float
    metrics_path: str
    summary_path: str = ""
