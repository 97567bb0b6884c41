"""Activation utilities for colornet."""

from __future__ import annotations

import numpy as np

from .types import Array

# exp() overflows float64 just past 709; the clamp keeps z well inside it.
Z_CLAMP = 500.0


def sigmoid(z: Array) -> Array:
    """Return the logistic sigmoid of ``z`` after clamping to ``[-500, 500]``."""

    z = np.clip(z, -Z_CLAMP, Z_CLAMP)
    return 1.0 / (1.0 + np.exp(-z))


def sigmoid_deriv(output: Array) -> Array:
    """Sigmoid derivative expressed in terms of the sigmoid *output*."""

    return output * (1.0 - output)


__all__ = ["Z_CLAMP", "sigmoid", "sigmoid_deriv"]
