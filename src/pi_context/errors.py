"""
Errors raised by context compressors.
"""
from __future__ import annotations


class CompressionError(Exception):
    """Base class for all compression failures."""

    prefix = "Compression error"

    def __init__(self, reason: str = "") -> None:
        self.reason = reason
        super().__init__(f"{self.prefix}: {reason}" if reason else self.prefix)


class EstimationFailedError(CompressionError):
    """Token estimation failed (reserved for non-heuristic tokenizers)."""

    prefix = "Token estimation failed"


class InvalidStructureError(CompressionError):
    """The history is malformed, e.g. a tool result without its call."""

    prefix = "Invalid message structure"


class CompressionFailedError(CompressionError):
    """A strategy could not produce a compressed history."""

    prefix = "Compression failed"
