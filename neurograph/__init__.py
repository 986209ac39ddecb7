"""neurograph public API."""

from .core import activations  # noqa: F401
from .core import strategies  # noqa: F401
from .core import types  # noqa: F401
from .core.activations import Activation
from .core.errors import DecodingError, DimensionMismatchError, EncodingError, NetworkError
from .core.strategies import LoggingStrategy, RoundStrategy, ThresholdStrategy
from .core.types import Expectation, TrainingResult
from .network import Network, construct, deserialize

__version__ = "0.1.0"

__all__ = [
    "Activation",
    "Network",
    "construct",
    "deserialize",
    "Expectation",
    "TrainingResult",
    "RoundStrategy",
    "ThresholdStrategy",
    "LoggingStrategy",
    "NetworkError",
    "DimensionMismatchError",
    "EncodingError",
    "DecodingError",
    "activations",
    "strategies",
    "types",
]
