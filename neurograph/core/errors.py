"""Exception taxonomy for the network engine."""

from __future__ import annotations


class NetworkError(Exception):
    """Base class for all engine errors."""


class DimensionMismatchError(NetworkError, ValueError):
    """A vector length disagrees with the size of the layer it feeds."""

    def __init__(
        self,
        what: str,
        expected: int,
        actual: int,
        *,
        sample: int | None = None,
    ) -> None:
        self.what = what
        self.expected = expected
        self.actual = actual
        self.sample = sample
        prefix = f"sample {sample}: " if sample is not None else ""
        super().__init__(
            f"{prefix}{what} doesn't match layer size "
            f"(want len {expected}, got len {actual})"
        )


class EncodingError(NetworkError, ValueError):
    """A network snapshot could not be encoded."""


class DecodingError(NetworkError, ValueError):
    """A persisted snapshot is malformed and cannot be restored."""


__all__ = [
    "NetworkError",
    "DimensionMismatchError",
    "EncodingError",
    "DecodingError",
]
