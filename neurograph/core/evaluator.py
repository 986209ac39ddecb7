"""Forward evaluation over the neuron graph."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .errors import DimensionMismatchError
from .graph import Layer
from .types import Array, ForwardPass


def clamp(layer: Layer, inputs: Sequence[float]) -> None:
    """Write ``inputs`` into the presets of ``layer``."""

    if len(inputs) != len(layer):
        raise DimensionMismatchError("input", len(layer), len(inputs))
    for neuron, value in zip(layer, inputs):
        neuron.preset = float(value)


def forward(layers: Sequence[Layer]) -> ForwardPass:
    """Evaluate every layer once, reusing each neuron's value downstream.

    Sums come from the layer's weight matrix and bias vector; edges are
    positional, so column ``j`` of a layer's weights reads neuron ``j`` of
    the layer above.
    """

    sums: List[Array] = []
    values: List[Array] = []
    previous: Array = np.zeros(0, dtype=np.float64)
    for layer in layers:
        mask = layer.preset_mask()
        z = layer.weights().reshape(len(layer), len(previous)) @ previous + layer.biases()
        a = np.empty_like(z)
        for idx, neuron in enumerate(layer):
            if mask[idx]:
                a[idx] = neuron.preset
                if not neuron.edges:
                    z[idx] = neuron.preset
            else:
                a[idx] = neuron.activation.activate(z[idx])
        sums.append(z)
        values.append(a)
        previous = a
    return ForwardPass(sums=sums, values=values)


__all__ = ["clamp", "forward"]
