"""Exceptions raised by the network engine."""

from __future__ import annotations


class NetworkError(Exception):
    """Base class for engine precondition violations."""


class InvalidTopology(NetworkError, ValueError):
    """The layer-size sequence cannot describe a network."""


class DimensionMismatch(NetworkError, ValueError):
    """A vector's length disagrees with the width of the layer it feeds."""


class StateError(NetworkError, RuntimeError):
    """Backward was requested without a usable forward trace."""


__all__ = ["NetworkError", "InvalidTopology", "DimensionMismatch", "StateError"]
