"""
Summarizing compressor — replaces the middle of the history with an
LLM-written "Continuity Briefing".

Only compress_async() talks to the summarizer; the synchronous compress()
falls back to keeping the preserved head and tail.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..errors import CompressionFailedError
from ..estimator import estimate_messages_tokens, estimate_tokens
from ..types import Message, UserMessage, user_message
from .base import ContextCompressor
from .utils import format_messages_for_summary, split_preserved

if TYPE_CHECKING:
    from ..summarizers import Promptable

logger = logging.getLogger(__name__)

# ─── Prompts ──────────────────────────────────────────────────────────────────

CONVERSATION_PLACEHOLDER = "[CONVERSATION_HISTORY]"

# Middle sections cheaper than this are dropped rather than summarized
MIN_SUMMARIZABLE_TOKENS = 100

SUMMARIZATION_PROMPT = """**Your Role:** You are a context compression engine for an AI coding agent.

**Your Task:** Read the conversation below and write a "Continuity Briefing" that lets the agent resume the task exactly where it left off. Describe the *current state* in detail and the history that led to it only briefly.

**Instructions:**
1.  **Prioritize the present:** the most detail belongs to the immediate task and the current state of the code.
2.  **Compress the past:** give a high-level overview of earlier steps; do not list every attempt or iteration.
3.  **Be unambiguous:** plain, direct language. Function over prose.
4.  **Follow the output format exactly.**

**Input:**
[CONVERSATION_HISTORY]

**Output Format (Strict):**

### Overall Goal
*One sentence describing the user's main objective.*

### Recent Path (Brief Summary)
*The outcome of the last 2-3 major steps, not the process.*

---

### Current State (Detailed Explanation)
*   **Current Focus:** the file, function or module being worked on.
*   **Immediate Obstacle/Task:** the exact problem to solve or the next concrete action.
*   **Code Status:**
    *   **Relevant Code Snippet:** only the small block of code that is the direct subject of the current task.
    *   **Last Known Error:** the exact error message, if any, and where it occurs.
*   **Key Constraints & Requirements:** user requirements that bind the immediate task.

### Next Action Required
*A single, clear directive for the agent.*
"""

BRIEFING_TEMPLATE = (
    "**[CONTEXT CONTINUITY BRIEFING]**\n"
    "*The following is a compressed summary of the preceding conversation:*\n\n"
    "{summary}\n\n"
    "*[End of briefing - conversation continues below]*"
)


def build_briefing_message(summary: str) -> UserMessage:
    """Wrap a summary in the briefing frame as one synthetic user message."""
    return user_message(BRIEFING_TEMPLATE.format(summary=summary))


class SummarizingCompressor(ContextCompressor):
    """
    Summarize the messages between a preserved head and tail.

    The summarizer may be a smaller, faster model than the main agent. It is
    shared, never copied, so it must tolerate concurrent ``prompt`` calls when
    several compressions run at once.

    Example::

        compressor = SummarizingCompressor(summarizer).with_preserve_recent(3)
        compressed = await compressor.compress_async(messages, 4096)
    """

    def __init__(
        self,
        summarizer: "Promptable",
        preserve_first: int = 1,
        preserve_recent: int = 2,
        max_summary_tokens: int = 1000,
        custom_prompt: str | None = None,
    ) -> None:
        if custom_prompt is not None and CONVERSATION_PLACEHOLDER not in custom_prompt:
            raise ValueError(
                f"custom_prompt must contain the {CONVERSATION_PLACEHOLDER} placeholder"
            )
        self.summarizer = summarizer
        self.preserve_first = preserve_first
        self.preserve_recent = preserve_recent
        # Hint only; the summarizer decides how long the briefing actually is
        self.max_summary_tokens = max_summary_tokens
        self.custom_prompt = custom_prompt

    def with_preserve_first(self, count: int) -> "SummarizingCompressor":
        return self._evolve(preserve_first=count)

    def with_preserve_recent(self, count: int) -> "SummarizingCompressor":
        return self._evolve(preserve_recent=count)

    def with_max_summary_tokens(self, tokens: int) -> "SummarizingCompressor":
        return self._evolve(max_summary_tokens=tokens)

    def with_custom_prompt(self, prompt: str) -> "SummarizingCompressor":
        return self._evolve(custom_prompt=prompt)

    def _options(self) -> dict[str, Any]:
        return {
            "summarizer": self.summarizer,
            "preserve_first": self.preserve_first,
            "preserve_recent": self.preserve_recent,
            "max_summary_tokens": self.max_summary_tokens,
            "custom_prompt": self.custom_prompt,
        }

    @property
    def prompt_template(self) -> str:
        return self.custom_prompt or SUMMARIZATION_PROMPT

    def build_prompt(self, messages: list[Message]) -> str:
        """Render messages into the summarization prompt."""
        return self.prompt_template.replace(
            CONVERSATION_PLACEHOLDER, format_messages_for_summary(messages)
        )

    # ── Synchronous fallback ──────────────────────────────────────────────────

    def compress(self, messages: list[Message], max_tokens: int) -> list[Message]:
        if not messages:
            return messages
        if estimate_messages_tokens(messages) <= max_tokens:
            return messages

        split = split_preserved(messages, self.preserve_first, self.preserve_recent)
        if split.middle:
            logger.warning(
                "SummarizingCompressor.compress called synchronously; use compress_async "
                "for LLM summarization. Dropping the middle of the history instead."
            )
        return split.preserved

    # ── Summarization ─────────────────────────────────────────────────────────

    async def compress_async(self, messages: list[Message], max_tokens: int) -> list[Message]:
        if not messages:
            return messages
        if estimate_messages_tokens(messages) <= max_tokens:
            return messages

        split = split_preserved(messages, self.preserve_first, self.preserve_recent)
        if not split.middle:
            return split.preserved

        preserved_tokens = estimate_messages_tokens(split.first) + estimate_messages_tokens(split.last)
        middle_tokens = estimate_messages_tokens(split.middle)
        if middle_tokens < MIN_SUMMARIZABLE_TOKENS:
            logger.debug("Middle section too small to summarize (%d tokens); dropping it", middle_tokens)
            return split.preserved

        summary = await self.generate_summary(split.middle)

        summary_tokens = estimate_tokens(summary)
        if preserved_tokens + summary_tokens > max_tokens:
            logger.warning(
                "Summarized context (%d tokens) still exceeds budget with preserved messages. "
                "Falling back to simple truncation.",
                summary_tokens,
            )
            return split.preserved

        logger.info(
            "Compressed %d messages (%d tokens) into briefing (%d tokens). "
            "Preserved %d first + %d recent messages.",
            len(split.middle), middle_tokens, summary_tokens, len(split.first), len(split.last),
        )
        return split.first + [build_briefing_message(summary)] + split.last

    async def generate_summary(self, messages: list[Message]) -> str:
        """Ask the summarizer for a briefing covering messages."""
        prompt = self.build_prompt(messages)
        try:
            return await self.summarizer.prompt(prompt)
        except Exception as exc:
            raise CompressionFailedError(f"Summarization failed: {exc}") from exc
