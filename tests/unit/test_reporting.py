import io
import json

import pytest

from neurograph import LoggingStrategy, Network, RoundStrategy
from neurograph.reporting import CsvSink, FanOut, JsonlSink, PlotAdapter, TextSink, sink_for_path


def test_jsonl_sink_records_each_round(tmp_path):
    sink = JsonlSink(tmp_path / "metrics.jsonl")
    net = Network.construct(1, 2, 1, seed=0)
    net.train([([1.0], [0.0])], 0.5, LoggingStrategy(RoundStrategy(3), sink=sink))
    records = [json.loads(line) for line in sink.path.read_text().splitlines() if line]
    assert [r["round"] for r in records] == [0, 1, 2, 3]
    assert records[0]["cumulative_error"] == 0.0
    assert all(r["cumulative_error"] > 0.0 for r in records[1:])


def test_csv_sink_writes_header_once(tmp_path):
    sink = CsvSink(tmp_path / "metrics.csv")
    sink.on_step(0, {"cumulative_error": 1.5})
    sink.on_step(1, {"cumulative_error": 0.5})
    lines = sink.path.read_text().splitlines()
    assert lines[0] == "cumulative_error,round"
    assert len(lines) == 3


def test_text_sink_format():
    stream = io.StringIO()
    TextSink(stream).on_step(4, {"cumulative_error": 0.125})
    assert stream.getvalue().endswith("– cumulated error: 0.1250000000\n")


def test_sink_for_path_uses_suffix(tmp_path):
    assert isinstance(sink_for_path(tmp_path / "m.csv"), CsvSink)
    assert isinstance(sink_for_path(tmp_path / "m.jsonl"), JsonlSink)


def test_fan_out_skips_missing_sinks():
    stream = io.StringIO()
    fan = FanOut(None, TextSink(stream))
    fan.on_step(0, {"cumulative_error": 1.0})
    assert len(fan.sinks) == 1
    assert "cumulated error" in stream.getvalue()


def test_plot_adapter_headless(tmp_path):
    pytest.importorskip("matplotlib")
    adapter = PlotAdapter(tmp_path, enable_plots=True)
    adapter.on_step(0, {"cumulative_error": 1.0})
    adapter.on_step(1, {"cumulative_error": 0.5})
    path = adapter.close()
    assert path == tmp_path / "error.png"
    assert path.exists()


def test_plot_adapter_disabled(tmp_path):
    adapter = PlotAdapter(tmp_path / "plots")
    adapter.on_step(0, {"cumulative_error": 1.0})
    assert adapter.close() is None
    assert not (tmp_path / "plots").exists()


def test_plot_adapter_skips_empty_round_and_draws_threshold(tmp_path):
    pytest.importorskip("matplotlib")
    adapter = PlotAdapter(tmp_path, enable_plots=True, threshold=0.01, filename="curve.png")
    net = Network.construct(1, 2, 1, seed=0)
    net.train([([1.0], [0.2])], 0.5, LoggingStrategy(RoundStrategy(4), sink=adapter))
    assert adapter.rounds == [1, 2, 3, 4]
    assert all(error > 0.0 for error in adapter.errors)
    assert adapter.close() == tmp_path / "curve.png"
    assert (tmp_path / "curve.png").exists()


def test_plot_adapter_without_rounds_writes_nothing(tmp_path):
    adapter = PlotAdapter(tmp_path, enable_plots=True)
    adapter.on_step(0, {"cumulative_error": 0.0})
    assert adapter.close() is None
    assert not (tmp_path / "error.png").exists()
