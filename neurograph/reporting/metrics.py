"""Sinks receiving the per-round training error."""

from __future__ import annotations

import csv
import json
import sys
import time
from pathlib import Path
from typing import Mapping, TextIO


class TextSink:
    """Write one human readable line per round to a text stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stderr

    def on_step(self, step: int, metrics: Mapping[str, float]) -> None:
        stamp = time.strftime("%Y-%m-%d %H:%M:%S")
        error = float(metrics.get("cumulative_error", 0.0))
        self.stream.write(f"{stamp} – cumulated error: {error:.10f}\n")

    __call__ = on_step


class JsonlSink:
    """Append-only JSONL writer for per-round metrics."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")

    def on_step(self, step: int, metrics: Mapping[str, float]) -> None:
        record = {"round": int(step)}
        record.update({k: float(v) for k, v in metrics.items() if isinstance(v, (int, float))})
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record) + "\n")

    __call__ = on_step


class CsvSink:
    """Write per-round metrics to CSV with a stable schema."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def on_step(self, step: int, metrics: Mapping[str, float]) -> None:
        row = {"round": int(step)}
        row.update({k: float(v) for k, v in metrics.items() if isinstance(v, (int, float))})
        with self.path.open("a", encoding="utf-8", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=sorted(row.keys()))
            if handle.tell() == 0:
                writer.writeheader()
            writer.writerow(row)


class FanOut:
    """Forward every round to several sinks."""

    def __init__(self, *sinks) -> None:
        self.sinks = [sink for sink in sinks if sink is not None]

    def on_step(self, step: int, metrics: Mapping[str, float]) -> None:
        for sink in self.sinks:
            sink.on_step(step, metrics)


def sink_for_path(path: str | Path):
    """Pick a CSV or JSONL sink from the file suffix."""

    path = Path(path)
    if path.suffix == ".csv":
        return CsvSink(path)
    return JsonlSink(path)


__all__ = ["TextSink", "JsonlSink", "CsvSink", "FanOut", "sink_for_path"]
