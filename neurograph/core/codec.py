"""Structural snapshot encoding for trained networks.

The snapshot is JSON wrapped in standard base64. It lists the layers in
order; each neuron is stored as::

    {"inputs": [{"weight": 0.25}, ...], "bias": 0.5, "preset": null}

Activations and pending changes are not stored. Edges are restored by
position, so the ``n``-th input of a neuron always reads the ``n``-th neuron
of the preceding layer.
"""

from __future__ import annotations

import base64
import binascii
import json
import math
from typing import Any, List, Mapping, Sequence

from .activations import Activation
from .errors import DecodingError, EncodingError
from .graph import Edge, Layer, Neuron, connect


def snapshot(layers: Sequence[Layer]) -> List[List[dict]]:
    """Return the plain structure persisted for ``layers``."""

    return [
        [
            {
                "inputs": [{"weight": edge.weight} for edge in neuron.edges],
                "bias": neuron.bias,
                "preset": neuron.preset,
            }
            for neuron in layer
        ]
        for layer in layers
    ]


def encode(layers: Sequence[Layer]) -> str:
    """Encode ``layers`` into a base64 string.

    Raises :class:`EncodingError` if any bias, preset or weight is NaN or
    infinite.
    """

    try:
        payload = json.dumps(snapshot(layers), allow_nan=False, separators=(",", ":"))
    except ValueError as exc:
        raise EncodingError(f"network contains a non-finite value: {exc}") from exc
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")


def decode(payload: str | bytes, activation: Activation | str | None = None) -> List[Layer]:
    """Rebuild the layers stored in ``payload``.

    Every neuron gets ``activation`` (logistic by default) and every edge is
    reconnected to the preceding layer by position.
    """

    if isinstance(payload, str):
        try:
            payload = payload.strip().encode("ascii")
        except UnicodeEncodeError as exc:
            raise DecodingError("snapshot is not valid base64 text") from exc
    try:
        raw = base64.b64decode(payload.strip(), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodingError(f"snapshot is not valid base64: {exc}") from exc
    try:
        structure = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise DecodingError(f"snapshot is not valid JSON: {exc}") from exc

    layers = _parse_layers(structure, Activation.resolve(activation))
    try:
        connect(layers)
    except ValueError as exc:
        raise DecodingError(str(exc)) from exc
    return layers


def _parse_layers(structure: Any, activation: Activation) -> List[Layer]:
    if not isinstance(structure, list):
        raise DecodingError("snapshot must be a list of layers")
    if len(structure) < 2:
        raise DecodingError(f"snapshot must hold at least two layers, got {len(structure)}")
    layers: List[Layer] = []
    for depth, raw_layer in enumerate(structure):
        if not isinstance(raw_layer, list) or not raw_layer:
            raise DecodingError(f"layer {depth} must be a non-empty list of neurons")
        neurons = [
            _parse_neuron(raw, activation, depth, position)
            for position, raw in enumerate(raw_layer)
        ]
        layers.append(Layer(neurons))
    return layers


def _parse_neuron(raw: Any, activation: Activation, depth: int, position: int) -> Neuron:
    where = f"neuron {position} of layer {depth}"
    if not isinstance(raw, Mapping):
        raise DecodingError(f"{where} must be an object")
    bias = _number(raw.get("bias", 0.0), f"{where}: bias")
    preset = raw.get("preset")
    if preset is not None:
        preset = _number(preset, f"{where}: preset")
    elif depth == 0:
        preset = 1.0
    inputs = raw.get("inputs") or []
    if not isinstance(inputs, list):
        raise DecodingError(f"{where}: inputs must be a list")
    edges = []
    for idx, item in enumerate(inputs):
        if not isinstance(item, Mapping) or "weight" not in item:
            raise DecodingError(f"{where}: input {idx} must carry a weight")
        edges.append(Edge(weight=_number(item["weight"], f"{where}: input {idx} weight"), source=idx))
    return Neuron(bias=bias, edges=edges, activation=activation, preset=preset)


def _number(value: Any, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodingError(f"{what} must be a number, got {value!r}")
    try:
        value = float(value)
    except OverflowError as exc:
        raise DecodingError(f"{what} is out of range") from exc
    if not math.isfinite(value):
        raise DecodingError(f"{what} must be finite")
    return value


__all__ = ["snapshot", "encode", "decode"]
