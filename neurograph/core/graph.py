"""Neuron graph: edges, neurons and the layers that own them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Sequence

import numpy as np

from .activations import Activation
from .types import Array


@dataclass
class Edge:
    """Weighted connection from a neuron in the preceding layer.

    ``source`` is the predecessor's position in that layer; the predecessor
    itself is owned by its own layer.
    """

    weight: float
    source: int = 0
    pending_change: float = 0.0

    def apply(self) -> None:
        self.weight -= self.pending_change
        self.pending_change = 0.0


@dataclass
class Neuron:
    """A node holding a bias, its incoming edges and an optional preset."""

    bias: float = 0.0
    edges: List[Edge] = field(default_factory=list)
    activation: Activation = Activation.LOGISTIC
    preset: float | None = None


class Layer:
    """Ordered group of neurons; position is significant."""

    def __init__(self, neurons: Sequence[Neuron]) -> None:
        self.neurons: List[Neuron] = list(neurons)

    def __len__(self) -> int:
        return len(self.neurons)

    def __iter__(self) -> Iterator[Neuron]:
        return iter(self.neurons)

    def __getitem__(self, index: int) -> Neuron:
        return self.neurons[index]

    def __repr__(self) -> str:
        return f"Layer(size={len(self.neurons)})"

    def edges(self) -> Iterator[Edge]:
        for neuron in self.neurons:
            yield from neuron.edges

    def biases(self) -> Array:
        return np.array([n.bias for n in self.neurons], dtype=np.float64)

    def weights(self) -> Array:
        """Return the ``(len(self), len(previous))`` weight matrix, one row per neuron."""

        return np.array([[e.weight for e in n.edges] for n in self.neurons], dtype=np.float64)

    def preset_mask(self) -> Array:
        return np.array([n.preset is not None for n in self.neurons], dtype=bool)


def build_layers(
    sizes: Sequence[int],
    activation: Activation,
    rng: np.random.Generator,
) -> List[Layer]:
    """Create fully connected layers with uniform ``[0, 1)`` parameters."""

    sizes = [int(size) for size in sizes]
    if len(sizes) < 2:
        raise ValueError(f"A network needs at least two layers, got {len(sizes)}")
    if any(size <= 0 for size in sizes):
        raise ValueError(f"Layer sizes must be positive, got {sizes}")

    layers: List[Layer] = [
        Layer([Neuron(bias=0.0, activation=activation, preset=1.0) for _ in range(sizes[0])])
    ]
    for previous, size in zip(sizes[:-1], sizes[1:]):
        neurons = []
        for _ in range(size):
            bias = float(rng.random())
            edges = [Edge(weight=float(rng.random()), source=idx) for idx in range(previous)]
            neurons.append(Neuron(bias=bias, edges=edges, activation=activation))
        layers.append(Layer(neurons))
    return layers


def connect(layers: Sequence[Layer]) -> None:
    """Point every edge at the neuron of the same position one layer up.

    Raises :class:`ValueError` when an edge count does not match the size of
    the preceding layer.
    """

    for depth, layer in enumerate(layers):
        if depth == 0:
            for position, neuron in enumerate(layer):
                if neuron.edges:
                    raise ValueError(f"Input neuron {position} must not have incoming edges")
            continue
        width = len(layers[depth - 1])
        for position, neuron in enumerate(layer):
            if len(neuron.edges) != width:
                raise ValueError(
                    f"Neuron {position} of layer {depth} has {len(neuron.edges)} "
                    f"edges but the preceding layer has {width} neurons"
                )
            for source, edge in enumerate(neuron.edges):
                edge.source = source


__all__ = ["Edge", "Neuron", "Layer", "build_layers", "connect"]
