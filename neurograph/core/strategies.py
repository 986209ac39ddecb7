"""Stopping strategies for the training loop."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Protocol, Sequence

from .types import Strategy

logger = logging.getLogger(__name__)


class StepSink(Protocol):
    """Anything accepting per-round metrics, e.g. the reporting sinks."""

    def on_step(self, step: int, metrics: dict) -> None:
        """Record ``metrics`` for round ``step``."""


def cumulative_error(errors: Sequence[float]) -> float:
    """Return the sum of absolute errors."""

    return float(sum(abs(err) for err in errors))


@dataclass
class RoundStrategy:
    """Run a fixed number of rounds; non-positive counts run one round."""

    rounds: int
    _counter: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        self.rounds = max(1, int(self.rounds))

    def __call__(self, errors: Sequence[float]) -> bool:
        if self._counter >= self.rounds:
            logger.debug("round budget of %d exhausted", self.rounds)
            return False
        self._counter += 1
        return True


@dataclass
class ThresholdStrategy:
    """Train until the cumulative absolute error reaches ``threshold``.

    ``stop_after`` is an optional wall-clock budget in seconds, measured
    from construction, that stops training regardless of the error.
    """

    threshold: float
    stop_after: float | None = None
    clock: Callable[[], float] = time.monotonic
    _deadline: float | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.stop_after is not None and self.stop_after > 0:
            self._deadline = self.clock() + float(self.stop_after)

    def __call__(self, errors: Sequence[float]) -> bool:
        if self._deadline is not None and self.clock() > self._deadline:
            logger.debug("training deadline reached")
            return False
        # no errors yet on the first round
        if not errors:
            return True
        return cumulative_error(errors) > self.threshold


@dataclass
class LoggingStrategy:
    """Report the cumulative error of every round, then defer to ``strategy``."""

    strategy: Strategy
    sink: StepSink | None = None
    _round: int = field(default=0, init=False, repr=False)

    def __call__(self, errors: Sequence[float]) -> bool:
        cumulated = cumulative_error(errors)
        logger.info("round %d - cumulated error: %.10f", self._round, cumulated)
        if self.sink is not None:
            self.sink.on_step(self._round, {"cumulative_error": cumulated})
        self._round += 1
        return self.strategy(errors)


__all__ = [
    "StepSink",
    "cumulative_error",
    "RoundStrategy",
    "ThresholdStrategy",
    "LoggingStrategy",
]
