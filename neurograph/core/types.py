"""Core typing contracts for neurograph."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Protocol, Sequence

import numpy as np

Array = np.ndarray


@dataclass(frozen=True)
class Expectation:
    """A single training sample."""

    input: Sequence[float]
    expected: Sequence[float]

    @classmethod
    def coerce(cls, sample: "Expectation | Sequence[Sequence[float]]") -> "Expectation":
        """Accept either an :class:`Expectation` or an ``(input, expected)`` pair."""

        if isinstance(sample, Expectation):
            return sample
        inputs, expected = sample
        return cls(input=list(inputs), expected=list(expected))


@dataclass
class ForwardPass:
    """Per-layer values captured during one evaluation.

    ``sums`` holds the pre-activation sums (the presets for the input
    layer) and ``values`` the resolved neuron values.
    """

    sums: List[Array]
    values: List[Array]

    @property
    def output(self) -> Array:
        return self.values[-1]


@dataclass(frozen=True)
class TrainingResult:
    """Summary returned by :meth:`neurograph.training.trainer.Trainer.run`."""

    rounds: int
    errors: List[float] = field(default_factory=list)


class Strategy(Protocol):
    """Decide whether training continues, given the previous round's errors."""

    def __call__(self, errors: Sequence[float]) -> bool:
        """Return ``True`` to run another round."""


__all__ = ["Array", "Expectation", "ForwardPass", "TrainingResult", "Strategy"]
