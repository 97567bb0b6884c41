"""Reporting utilities for colornet."""

from .metrics import CsvSink, JsonlSink
from .plots import PlotAdapter

__all__ = ["JsonlSink", "CsvSink", "PlotAdapter"]
