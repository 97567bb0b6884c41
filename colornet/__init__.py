"""colornet public API."""

from .colors import Color
from .core import activations, types  # noqa: F401
from .core.errors import DimensionMismatch, InvalidTopology, NetworkError, StateError
from .core.network import NeuralNetwork
from .pixels import InvalidPixel, Pixel
from .training.pipelines import load_preset, presets, run_pipeline
from .training.system import ColorRecognitionSystem

__all__ = [
    "Color",
    "ColorRecognitionSystem",
    "DimensionMismatch",
    "InvalidPixel",
    "InvalidTopology",
    "NetworkError",
    "NeuralNetwork",
    "Pixel",
    "StateError",
    "activations",
    "load_preset",
    "presets",
    "run_pipeline",
    "types",
]
