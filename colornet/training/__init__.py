"""Training orchestration for colornet."""

from .pipelines import load_preset, presets, run_pipeline
from .system import ColorRecognitionSystem

__all__ = ["ColorRecognitionSystem", "load_preset", "presets", "run_pipeline"]
