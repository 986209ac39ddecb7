"""The :class:`Network` facade tying graph, evaluator, trainer and codec together."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterable, List, Sequence

import numpy as np

from .core import codec
from .core.activations import Activation
from .core.errors import DimensionMismatchError
from .core.evaluator import clamp, forward
from .core.graph import Layer, build_layers
from .core.types import Expectation, Strategy, TrainingResult
from .training.trainer import Trainer, apply_updates

logger = logging.getLogger(__name__)


class Network:
    """A layered, fully connected feed-forward network.

    Layer 0 is the input layer, the last layer the output layer. Sizes are
    fixed once the network exists; training only mutates edge weights.
    """

    def __init__(self, layers: Sequence[Layer]) -> None:
        if len(layers) < 2:
            raise ValueError(f"A network needs at least two layers, got {len(layers)}")
        self.layers: List[Layer] = list(layers)
        self._lock = threading.RLock()

    @classmethod
    def construct(
        cls,
        *sizes: int,
        activation: Activation | str | None = None,
        seed: int | None = None,
    ) -> "Network":
        """Build a network with one layer per entry of ``sizes``."""

        resolved = Activation.resolve(activation)
        layers = build_layers(sizes, resolved, np.random.default_rng(seed))
        logger.debug("constructed network %s with %s activation", list(sizes), resolved.value)
        return cls(layers)

    @classmethod
    def deserialize(
        cls,
        payload: str | bytes,
        activation: Activation | str | None = None,
    ) -> "Network":
        """Restore a network from :meth:`serialize` output.

        Raises :class:`~neurograph.core.errors.DecodingError` on malformed
        payloads; no network is returned in that case.
        """

        network = cls(codec.decode(payload, activation))
        logger.debug("restored network %s", network.sizes)
        return network

    @classmethod
    def load(cls, path: str | Path, activation: Activation | str | None = None) -> "Network":
        return cls.deserialize(Path(path).read_text(encoding="utf-8"), activation)

    # ------------------------------------------------------------------
    # Shape

    @property
    def sizes(self) -> List[int]:
        return [len(layer) for layer in self.layers]

    @property
    def input_size(self) -> int:
        return len(self.layers[0])

    @property
    def output_size(self) -> int:
        return len(self.layers[-1])

    @property
    def activation(self) -> Activation:
        return self.layers[-1][0].activation

    def __repr__(self) -> str:
        return f"Network(sizes={self.sizes}, activation={self.activation.value!r})"

    # ------------------------------------------------------------------
    # Operations

    def output(self, inputs: Sequence[float]) -> List[float]:
        """Evaluate the network for ``inputs`` and return the output layer values."""

        if len(inputs) != self.input_size:
            raise DimensionMismatchError("input", self.input_size, len(inputs))
        with self._lock:
            clamp(self.layers[0], inputs)
            return forward(self.layers).output.tolist()

    def train(
        self,
        expectations: Iterable[Expectation | Sequence[Sequence[float]]],
        learning_rate: float,
        strategy: Strategy,
    ) -> TrainingResult:
        """Train in place until ``strategy`` asks to stop.

        All samples are validated before any weight changes; a malformed
        sample raises :class:`~neurograph.core.errors.DimensionMismatchError`.
        """

        return Trainer(self.layers, self._lock).run(expectations, learning_rate, strategy)

    def update(self) -> None:
        """Apply every staged weight change."""

        with self._lock:
            apply_updates(self.layers)

    def serialize(self) -> str:
        with self._lock:
            return codec.encode(self.layers)

    def save(self, path: str | Path) -> None:
        payload = self.serialize()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload, encoding="utf-8")


def construct(activation: Activation | str | None, *sizes: int, seed: int | None = None) -> Network:
    """Functional alias for :meth:`Network.construct`."""

    return Network.construct(*sizes, activation=activation, seed=seed)


def deserialize(activation: Activation | str | None, payload: str | bytes) -> Network:
    """Functional alias for :meth:`Network.deserialize`."""

    return Network.deserialize(payload, activation)


__all__ = ["Network", "construct", "deserialize"]
