"""Core numerical primitives for colornet."""

from . import activations, errors, network, types

__all__ = ["activations", "errors", "network", "types"]
