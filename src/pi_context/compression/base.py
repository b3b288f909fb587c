"""
Compression strategy interface.

Every strategy takes an ordered history and a token budget and returns a new
list that keeps the surviving messages in their original order.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

from ..estimator import estimate_messages_tokens
from ..types import Message


class ContextCompressor(ABC):
    """
    Pluggable context compression strategy.

    Implementations return the input list itself when it already fits the
    budget, and degrade gracefully (possibly still over budget) instead of
    raising when the budget cannot be met.
    """

    @abstractmethod
    def compress(self, messages: list[Message], max_tokens: int) -> list[Message]:
        """Compress messages to fit within max_tokens."""

    async def compress_async(self, messages: list[Message], max_tokens: int) -> list[Message]:
        """Async entry point; strategies without I/O just run compress()."""
        return self.compress(messages, max_tokens)

    def estimate_tokens(self, messages: Sequence[Message]) -> int:
        return estimate_messages_tokens(messages)

    def needs_compression(self, messages: Sequence[Message], max_tokens: int) -> bool:
        return self.estimate_tokens(messages) > max_tokens

    # ── Builder helpers ───────────────────────────────────────────────────────

    @abstractmethod
    def _options(self) -> dict[str, Any]:
        """Constructor keyword arguments that reproduce this compressor."""

    def _evolve(self, **changes: Any) -> "ContextCompressor":
        return type(self)(**{**self._options(), **changes})

    def __repr__(self) -> str:
        opts = ", ".join(f"{k}={v!r}" for k, v in self._options().items())
        return f"{type(self).__name__}({opts})"
