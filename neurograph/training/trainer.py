"""Backpropagation and the strategy-driven training loop."""

from __future__ import annotations

import logging
import math
import threading
from typing import Iterable, List, Sequence

import numpy as np

from ..core.errors import DimensionMismatchError
from ..core.evaluator import clamp, forward
from ..core.graph import Layer
from ..core.types import Array, Expectation, ForwardPass, Strategy, TrainingResult

logger = logging.getLogger(__name__)


def _derivatives(layer: Layer, sums: Array) -> Array:
    derivs = np.array(
        [float(neuron.activation.derivative(z)) for neuron, z in zip(layer, sums)],
        dtype=np.float64,
    )
    # a preset neuron is constant with respect to its inputs
    derivs[layer.preset_mask()] = 0.0
    return derivs


def backpropagate(
    layers: Sequence[Layer],
    state: ForwardPass,
    expected: Sequence[float],
    learning_rate: float,
) -> None:
    """Stage weight corrections for one sample without touching any weight.

    Deltas are carried from the output layer towards the input layer; every
    edge ``k <- j`` accumulates ``learning_rate * delta_k * value_j`` into its
    pending change. Upstream deltas are computed from the current weights,
    which stay fixed until :func:`apply_updates` runs.
    """

    last = len(layers) - 1
    target = np.asarray(expected, dtype=np.float64)
    delta = (state.values[last] - target) * _derivatives(layers[last], state.sums[last])
    for depth in range(last, 0, -1):
        previous = state.values[depth - 1]
        upstream = np.zeros(len(layers[depth - 1]), dtype=np.float64)
        for k, neuron in enumerate(layers[depth]):
            if delta[k] == 0.0:
                continue
            for edge in neuron.edges:
                edge.pending_change += learning_rate * delta[k] * previous[edge.source]
                upstream[edge.source] += delta[k] * edge.weight
        if depth > 1:
            delta = upstream * _derivatives(layers[depth - 1], state.sums[depth - 1])


def apply_updates(layers: Iterable[Layer]) -> None:
    """Apply and drain every pending change."""

    for layer in layers:
        for edge in layer.edges():
            edge.apply()


def validate(layers: Sequence[Layer], expectations: Sequence[Expectation]) -> None:
    """Check every sample against the input and output layer sizes."""

    n_in, n_out = len(layers[0]), len(layers[-1])
    for idx, sample in enumerate(expectations):
        if len(sample.input) != n_in:
            raise DimensionMismatchError("input", n_in, len(sample.input), sample=idx)
        if len(sample.expected) != n_out:
            raise DimensionMismatchError(
                "expected output", n_out, len(sample.expected), sample=idx
            )


class Trainer:
    """Run rounds of per-sample gradient descent until the strategy stops.

    Each sample is a backward pass followed by weight application, executed
    as one unit under ``lock`` so that concurrent callers never observe or
    interleave with a half-applied update.
    """

    def __init__(self, layers: Sequence[Layer], lock: threading.RLock | None = None) -> None:
        self.layers = layers
        self.lock = lock or threading.RLock()

    def run(
        self,
        expectations: Iterable[Expectation | Sequence[Sequence[float]]],
        learning_rate: float,
        strategy: Strategy,
    ) -> TrainingResult:
        samples = [Expectation.coerce(sample) for sample in expectations]
        if not math.isfinite(learning_rate):
            raise ValueError(f"learning rate must be finite, got {learning_rate}")
        validate(self.layers, samples)
        if not samples:
            logger.info("no samples given, skipping training")
            return TrainingResult(rounds=0)
        logger.debug("training on %d samples with learning rate %s", len(samples), learning_rate)

        errors: List[float] = []
        rounds = 0
        while strategy(errors):
            errors = []
            for sample in samples:
                errors.extend(self.step(sample, learning_rate))
            rounds += 1
        logger.info("training stopped after %d rounds", rounds)
        return TrainingResult(rounds=rounds, errors=errors)

    def step(self, sample: Expectation, learning_rate: float) -> List[float]:
        """Train on one sample and return its raw per-output errors."""

        with self.lock:
            clamp(self.layers[0], sample.input)
            state = forward(self.layers)
            errors = (state.output - np.asarray(sample.expected, dtype=np.float64)).tolist()
            backpropagate(self.layers, state, sample.expected, learning_rate)
            apply_updates(self.layers)
        return errors


__all__ = ["backpropagate", "apply_updates", "validate", "Trainer"]
