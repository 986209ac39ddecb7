"""Activation catalog: named activation/derivative pairs."""

from __future__ import annotations

from enum import Enum

import numpy as np

from .types import Array


def logistic(x: Array) -> Array:
    """Return the logistic (sigmoid) activation."""

    # tanh form stays finite for large negative inputs
    return 0.5 * (1.0 + np.tanh(0.5 * x))


def logistic_deriv(x: Array) -> Array:
    s = logistic(x)
    return s * (1.0 - s)


def relu(x: Array) -> Array:
    """Return the ReLU activation."""

    return np.maximum(x, 0.0)


def relu_deriv(x: Array) -> Array:
    return np.where(np.asarray(x) > 0, 1.0, 0.0)


def tanh(x: Array) -> Array:
    return np.tanh(x)


def tanh_deriv(x: Array) -> Array:
    return 1.0 - np.tanh(x) ** 2


class Activation(str, Enum):
    """Closed set of activation functions a neuron can use.

    Derivatives take the neuron's pre-activation sum, never its activated
    output.
    """

    LOGISTIC = "logistic"
    RECTIFIED_LINEAR = "relu"
    HYPERBOLIC_TANGENT = "tanh"

    def activate(self, x):
        return _FUNCTIONS[self][0](x)

    def derivative(self, x):
        return _FUNCTIONS[self][1](x)

    @classmethod
    def resolve(cls, selector: "Activation | str | None") -> "Activation":
        """Map ``selector`` onto a catalog entry, defaulting to logistic."""

        if isinstance(selector, Activation):
            return selector
        if selector is None:
            return cls.LOGISTIC
        return _ALIASES.get(str(selector).strip().lower(), cls.LOGISTIC)

    @classmethod
    def names(cls) -> list[str]:
        return sorted(_ALIASES)


_FUNCTIONS = {
    Activation.LOGISTIC: (logistic, logistic_deriv),
    Activation.RECTIFIED_LINEAR: (relu, relu_deriv),
    Activation.HYPERBOLIC_TANGENT: (tanh, tanh_deriv),
}

_ALIASES = {
    "logistic": Activation.LOGISTIC,
    "sigmoid": Activation.LOGISTIC,
    "relu": Activation.RECTIFIED_LINEAR,
    "rectified_linear": Activation.RECTIFIED_LINEAR,
    "tanh": Activation.HYPERBOLIC_TANGENT,
    "hyperbolic_tangent": Activation.HYPERBOLIC_TANGENT,
}

__all__ = [
    "Activation",
    "logistic",
    "logistic_deriv",
    "relu",
    "relu_deriv",
    "tanh",
    "tanh_deriv",
]
