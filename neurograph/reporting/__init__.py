"""Reporting utilities for neurograph."""

from .metrics import CsvSink, FanOut, JsonlSink, TextSink, sink_for_path
from .plots import PlotAdapter

__all__ = ["CsvSink", "FanOut", "JsonlSink", "TextSink", "PlotAdapter", "sink_for_path"]
