"""
Token estimation — fast character-based heuristics, no tokenizer required.

The 3.4 chars/token ratio is calibrated for code-heavy content; natural
language prose runs closer to 4.0 chars/token, so prose is over-counted.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .types import (
    AudioContent,
    DocumentContent,
    ImageContent,
    Message,
    ReasoningContent,
    TextContent,
    ToolCall,
    ToolResultContent,
    VideoContent,
)

# ─── Constants ────────────────────────────────────────────────────────────────

CHARS_PER_TOKEN = 3.4
MESSAGE_OVERHEAD = 4  # role and formatting tokens per message
IMAGE_TOKENS = 85
MEDIA_TOKENS = 100  # audio / video reference placeholders


# ─── Estimation ───────────────────────────────────────────────────────────────

def estimate_tokens(text: str) -> int:
    """Estimate the token count of a text string: ceil(len / 3.4)."""
    if not text:
        return 0
    # n / 3.4 == 5n / 17, kept in integers to avoid float drift
    return -(-len(text) * 5 // 17)


def _estimate_block_tokens(block: object) -> int:
    if isinstance(block, TextContent):
        return estimate_tokens(block.text)
    if isinstance(block, ToolCall):
        return estimate_tokens(block.name) + estimate_tokens(block.serialized_arguments())
    if isinstance(block, ToolResultContent):
        total = estimate_tokens(block.id)
        for part in block.content:
            if isinstance(part, TextContent):
                total += estimate_tokens(part.text)
            elif isinstance(part, ImageContent):
                total += IMAGE_TOKENS
        return total
    if isinstance(block, ImageContent):
        return IMAGE_TOKENS
    if isinstance(block, (AudioContent, VideoContent)):
        return MEDIA_TOKENS
    if isinstance(block, DocumentContent):
        return estimate_tokens(str(block.data))
    if isinstance(block, ReasoningContent):
        return sum(estimate_tokens(fragment) for fragment in block.reasoning)
    return 0


def estimate_message_tokens(message: Message) -> int:
    """Estimate the token count of one message, including its fixed overhead."""
    return sum(_estimate_block_tokens(block) for block in message.content) + MESSAGE_OVERHEAD


def estimate_messages_tokens(messages: Sequence[Message]) -> int:
    """Estimate the token count of a sequence of messages."""
    return sum(estimate_message_tokens(m) for m in messages)


# ─── Context usage snapshot ───────────────────────────────────────────────────

@dataclass(frozen=True)
class ContextEstimate:
    """Token usage of a full request against a model's context window."""

    system_prompt_tokens: int
    tool_definitions_tokens: int
    messages_tokens: int
    total_tokens: int
    context_window: int
    usage_percent: int

    @classmethod
    def compute(
        cls,
        system_prompt: str,
        tool_definitions: str,
        messages: Sequence[Message],
        context_window: int,
    ) -> "ContextEstimate":
        system_prompt_tokens = estimate_tokens(system_prompt)
        tool_definitions_tokens = estimate_tokens(tool_definitions)
        messages_tokens = estimate_messages_tokens(messages)
        total = system_prompt_tokens + tool_definitions_tokens + messages_tokens
        usage_percent = total * 100 // context_window if context_window > 0 else 0
        return cls(
            system_prompt_tokens=system_prompt_tokens,
            tool_definitions_tokens=tool_definitions_tokens,
            messages_tokens=messages_tokens,
            total_tokens=total,
            context_window=context_window,
            usage_percent=usage_percent,
        )

    @property
    def remaining_tokens(self) -> int:
        return max(self.context_window - self.total_tokens, 0)

    def needs_compression(self, threshold_percent: int) -> bool:
        """True once usage reaches the given percentage of the window."""
        return self.usage_percent >= threshold_percent

    def threshold_tokens(self, threshold_percent: int) -> int:
        """Token count corresponding to a percentage of the window (truncated)."""
        return self.context_window * threshold_percent // 100
