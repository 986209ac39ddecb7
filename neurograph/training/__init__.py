"""Training loop for neurograph networks."""

from .trainer import Trainer, apply_updates, backpropagate, validate

__all__ = ["Trainer", "apply_updates", "backpropagate", "validate"]
