"""Synthetic labelled pixels sampled around reference colors."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from ..colors import RGB
from ..core.types import Array
from ..pixels import CHANNEL_MAX, Pixel, clamp_channel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sample:
    """A normalized input, its one-hot target and the class index."""

    inputs: Array
    target: Array
    label_index: int


@dataclass(frozen=True)
class NoiseTier:
    """Samples with index below ``ceil(n * until_tenths / 10)`` not claimed by an
    earlier tier get per-channel noise in ``[-amplitude, amplitude]``."""

    until_tenths: int
    amplitude: int


TRAINING_TIERS: Tuple[NoiseTier, ...] = (
    NoiseTier(until_tenths=3, amplitude=0),
    NoiseTier(until_tenths=7, amplitude=30),
    NoiseTier(until_tenths=10, amplitude=60),
)
TEST_NOISE = 40


def one_hot(index: int, width: int) -> Array:
    if not 0 <= index < width:
        raise IndexError(f"Class index {index} outside [0, {width})")
    out = np.zeros(width, dtype=np.float64)
    out[index] = 1.0
    return out


def tier_counts(samples_per_color: int) -> Tuple[int, ...]:
    """Return how many of ``samples_per_color`` samples fall in each training tier.

    Boundaries are exact integer ceilings, so ``10`` splits into ``3/4/3``.
    """

    counts: List[int] = []
    start = 0
    for tier in TRAINING_TIERS:
        end = -(-samples_per_color * tier.until_tenths // 10)
        counts.append(end - start)
        start = end
    return tuple(counts)


def jitter(rgb: RGB, amplitude: int, rng: np.random.Generator) -> Array:
    """Perturb each channel by an integer in ``[-amplitude, amplitude]`` and normalize."""

    if amplitude:
        noise = rng.integers(-amplitude, amplitude + 1, size=3)
    else:
        noise = np.zeros(3, dtype=np.int64)
    channels = [clamp_channel(c + int(n)) for c, n in zip(rgb, noise)]
    return Pixel(*channels).normalized()


def _tier_amplitudes(samples_per_color: int) -> List[int]:
    counts = tier_counts(samples_per_color)
    amplitudes: List[int] = []
    for tier, count in zip(TRAINING_TIERS, counts):
        amplitudes.extend([tier.amplitude] * count)
    return amplitudes


def build_samples(
    colors: Sequence[RGB], samples_per_color: int, rng: np.random.Generator
) -> List[Sample]:
    """Training samples grouped by color, each group in pure/slight/heavy order."""

    if samples_per_color < 0:
        raise ValueError(f"samples_per_color must be non-negative, got {samples_per_color}")
    width = len(colors)
    amplitudes = _tier_amplitudes(samples_per_color)
    samples: List[Sample] = []
    for index, rgb in enumerate(colors):
        target = one_hot(index, width)
        for amplitude in amplitudes:
            samples.append(
                Sample(inputs=jitter(rgb, amplitude, rng), target=target, label_index=index)
            )
    logger.debug(
        "Built %d training samples (%d colors x %d)", len(samples), width, samples_per_color
    )
    return samples


def build_test_samples(
    colors: Sequence[RGB],
    samples_per_color: int,
    rng: np.random.Generator,
    amplitude: int = TEST_NOISE,
) -> List[Tuple[Array, int]]:
    """Evaluation pairs ``(inputs, class_index)`` with a single noise level."""

    if not 0 <= amplitude <= CHANNEL_MAX:
        raise ValueError(f"amplitude must be within [0, {CHANNEL_MAX}], got {amplitude}")
    pairs = [
        (jitter(rgb, amplitude, rng), index)
        for index, rgb in enumerate(colors)
        for _ in range(samples_per_color)
    ]
    logger.debug("Built %d test samples with noise +/-%d", len(pairs), amplitude)
    return pairs


__all__ = [
    "Sample",
    "NoiseTier",
    "TRAINING_TIERS",
    "TEST_NOISE",
    "one_hot",
    "tier_counts",
    "jitter",
    "build_samples",
    "build_test_samples",
]
