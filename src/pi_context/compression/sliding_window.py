"""
Sliding window compressor — keeps a fixed head plus as much recent history as fits.
"""
from __future__ import annotations

import logging
from typing import Any

from ..estimator import estimate_message_tokens, estimate_messages_tokens
from ..types import Message
from .base import ContextCompressor
from .utils import is_valid_cut_point, split_preserved

logger = logging.getLogger(__name__)


class SlidingWindowCompressor(ContextCompressor):
    """
    Preserve the first ``preserve_first`` messages (e.g. an anchoring system
    prompt) and the last ``min_recent`` messages, then fill the remaining
    budget with the most recent part of the middle.

    When head and tail cannot both fit, only the tail is returned. With
    ``keep_tool_pairs``, no kept run opens on a tool result: the window grows
    backwards to the matching call even if that overflows the budget.
    """

    def __init__(
        self,
        preserve_first: int = 0,
        min_recent: int = 2,
        keep_tool_pairs: bool = False,
    ) -> None:
        self.preserve_first = preserve_first
        self.min_recent = min_recent
        self.keep_tool_pairs = keep_tool_pairs

    def with_preserve_first(self, count: int) -> "SlidingWindowCompressor":
        return self._evolve(preserve_first=count)

    def with_min_recent(self, count: int) -> "SlidingWindowCompressor":
        return self._evolve(min_recent=count)

    def with_keep_tool_pairs(self, enabled: bool = True) -> "SlidingWindowCompressor":
        return self._evolve(keep_tool_pairs=enabled)

    def _options(self) -> dict[str, Any]:
        return {
            "preserve_first": self.preserve_first,
            "min_recent": self.min_recent,
            "keep_tool_pairs": self.keep_tool_pairs,
        }

    def compress(self, messages: list[Message], max_tokens: int) -> list[Message]:
        if not messages:
            return messages
        if estimate_messages_tokens(messages) <= max_tokens:
            return messages

        split = split_preserved(messages, self.preserve_first, self.min_recent)
        preserved_tokens = estimate_messages_tokens(split.first) + estimate_messages_tokens(split.last)

        if preserved_tokens > max_tokens:
            logger.debug(
                "Preserved head+tail (%d tokens) exceed budget %d; keeping tail only",
                preserved_tokens, max_tokens,
            )
            return messages[self._back_off(messages, len(messages) - len(split.last)):]

        middle = split.middle
        if not middle:
            return split.first + split.last

        remaining_budget = max_tokens - preserved_tokens
        costs = [estimate_message_tokens(m) for m in middle]
        suffix_tokens = sum(costs)

        # Earliest start whose suffix fits; len(middle) means drop the whole middle
        window_start = len(middle)
        for start in range(len(middle)):
            if suffix_tokens <= remaining_budget and self._can_start_at(middle, start):
                window_start = start
                break
            suffix_tokens -= costs[start]

        if window_start == len(middle) and not self._can_start_at(messages, len(split.first) + len(middle)):
            # Tail opens on a tool result; keep its call even past the budget
            window_start = self._back_off(middle, len(middle) - 1)

        logger.debug(
            "Sliding window kept %d/%d middle messages (head=%d, tail=%d, budget=%d)",
            len(middle) - window_start, len(middle), len(split.first), len(split.last), max_tokens,
        )
        return split.first + middle[window_start:] + split.last

    def _can_start_at(self, messages: list[Message], index: int) -> bool:
        return not self.keep_tool_pairs or is_valid_cut_point(messages, index)

    def _back_off(self, messages: list[Message], start: int) -> int:
        while start > 0 and not self._can_start_at(messages, start):
            start -= 1
        return start
