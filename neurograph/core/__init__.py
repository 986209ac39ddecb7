"""Core numerical primitives for neurograph."""

from . import activations, codec, errors, evaluator, graph, strategies, types

__all__ = ["activations", "codec", "errors", "evaluator", "graph", "strategies", "types"]
