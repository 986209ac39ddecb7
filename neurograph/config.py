"""Configuration defaults and loading for the command line front-end."""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Mapping

from .core.strategies import LoggingStrategy, RoundStrategy, StepSink, ThresholdStrategy
from .core.types import Strategy

DEFAULTS: Mapping[str, Mapping[str, object]] = {
    "network": {
        "activation": "logistic",
        "layers": [2, 3, 1],
        "seed": None,
    },
    "train": {
        "learning_rate": 0.5,
        "rounds": 1024,
        "threshold": None,
        "stop_after": None,
        "log_every_round": False,
    },
}


def defaults() -> dict:
    return deepcopy(dict(DEFAULTS))


def load_config(path: str | Path) -> dict:
    """Read a JSON or YAML override file."""

    path = Path(path)
    text = path.read_text()
    if path.suffix in {".yml", ".yaml"}:
        try:
            import yaml  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to load YAML configs") from exc
        data = yaml.safe_load(text)
    else:
        data = json.loads(text)
    if not isinstance(data, Mapping):
        raise ValueError(f"Config {path.name} must decode to a mapping")
    return dict(data)


def merge(base: dict, override: Mapping) -> dict:
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            base[key] = merge(dict(base[key]), value)
        else:
            base[key] = value
    return base


def build_strategy(train: Mapping[str, object], sink: StepSink | None = None) -> Strategy:
    """Build the stopping strategy described by a ``train`` config section."""

    threshold = train.get("threshold")
    strategy: Strategy
    if threshold is not None:
        strategy = ThresholdStrategy(
            threshold=float(threshold),
            stop_after=_optional_float(train.get("stop_after")),
        )
    else:
        strategy = RoundStrategy(int(train.get("rounds", 1)))
    if sink is not None or train.get("log_every_round"):
        strategy = LoggingStrategy(strategy, sink=sink)
    return strategy


def _optional_float(value) -> float | None:
    return None if value is None else float(value)


__all__ = ["DEFAULTS", "defaults", "load_config", "merge", "build_strategy"]
