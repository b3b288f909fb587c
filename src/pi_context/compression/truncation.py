"""
Truncation compressor — drops the oldest messages until the budget is met.

The simplest strategy; whatever was dropped is lost for good.
"""
from __future__ import annotations

import logging
from typing import Any

from ..estimator import estimate_message_tokens
from ..types import Message
from .base import ContextCompressor
from .utils import is_valid_cut_point

logger = logging.getLogger(__name__)


class TruncationCompressor(ContextCompressor):
    """
    Keep the longest suffix of the history that fits the budget.

    At least ``min_preserve`` messages are kept from the end even when they
    alone exceed the budget. With ``keep_tool_pairs`` the kept suffix never
    starts with a tool result whose call would be dropped.

    Example::

        compressor = TruncationCompressor().with_min_preserve(2)
        compressed = compressor.compress(messages, 4096)
    """

    def __init__(self, min_preserve: int = 1, keep_tool_pairs: bool = False) -> None:
        self.min_preserve = min_preserve
        self.keep_tool_pairs = keep_tool_pairs

    def with_min_preserve(self, count: int) -> "TruncationCompressor":
        return self._evolve(min_preserve=count)

    def with_keep_tool_pairs(self, enabled: bool = True) -> "TruncationCompressor":
        return self._evolve(keep_tool_pairs=enabled)

    def _options(self) -> dict[str, Any]:
        return {"min_preserve": self.min_preserve, "keep_tool_pairs": self.keep_tool_pairs}

    def _can_start_at(self, messages: list[Message], index: int) -> bool:
        return not self.keep_tool_pairs or is_valid_cut_point(messages, index)

    def compress(self, messages: list[Message], max_tokens: int) -> list[Message]:
        if not messages:
            return messages

        costs = [estimate_message_tokens(m) for m in messages]
        remaining = sum(costs)
        if remaining <= max_tokens:
            return messages

        max_start = max(len(messages) - self.min_preserve, 0)
        start = 0
        while start < max_start:
            if remaining <= max_tokens and self._can_start_at(messages, start):
                break
            remaining -= costs[start]
            start += 1

        # Nothing fit before the bound: back off to a cut that keeps pairs intact
        while start > 0 and not self._can_start_at(messages, start):
            start -= 1

        logger.debug(
            "Truncation dropped %d of %d messages (min_preserve=%d, budget=%d)",
            start, len(messages), self.min_preserve, max_tokens,
        )
        return messages[start:]
