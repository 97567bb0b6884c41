"""Sample generation for colornet."""

from .samples import (
    TEST_NOISE,
    TRAINING_TIERS,
    NoiseTier,
    Sample,
    build_samples,
    build_test_samples,
    jitter,
    one_hot,
    tier_counts,
)

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
