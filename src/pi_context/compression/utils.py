"""
Shared utilities for the compression strategies.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..types import (
    AssistantMessage,
    AudioContent,
    DocumentContent,
    ImageContent,
    Message,
    ReasoningContent,
    TextContent,
    ToolCall,
    ToolResultContent,
    UserMessage,
    VideoContent,
    has_tool_results,
)

MAX_TOOL_RESULT_CHARS = 2000
MAX_TOOL_ARGS_CHARS = 500


@dataclass
class PreservedSplit:
    """A history cut into always-kept head, trimmable middle and always-kept tail."""

    first: list[Message]
    middle: list[Message]
    last: list[Message]

    @property
    def preserved(self) -> list[Message]:
        return self.first + self.last


def split_preserved(
    messages: Sequence[Message],
    preserve_first: int,
    preserve_last: int,
) -> PreservedSplit:
    """Split messages into head/middle/tail windows.

    The head claims its messages first; the tail only gets what is left.
    """
    total = len(messages)
    keep_start = min(preserve_first, total)
    keep_end = min(preserve_last, total - keep_start)
    middle_end = total - keep_end
    return PreservedSplit(
        first=list(messages[:keep_start]),
        middle=list(messages[keep_start:middle_end]),
        last=list(messages[middle_end:]),
    )


def is_valid_cut_point(messages: Sequence[Message], index: int) -> bool:
    """True if a kept run may start at index without orphaning tool results.

    A run that starts at a message carrying tool results would keep the
    results but drop the assistant message holding the matching calls.
    """
    if index <= 0 or index >= len(messages):
        return True
    return not has_tool_results(messages[index])


# ─── Transcript rendering ─────────────────────────────────────────────────────

def _truncate(text: str, limit: int, marker: str) -> str:
    if len(text) > limit:
        return f"{text[:limit]}{marker}"
    return text


def _format_user_block(block: object) -> str | None:
    if isinstance(block, TextContent):
        return block.text
    if isinstance(block, ToolResultContent):
        lines = [f"[Tool Result for '{block.id}']:"]
        for part in block.content:
            if isinstance(part, TextContent):
                lines.append(_truncate(part.text, MAX_TOOL_RESULT_CHARS, "...[truncated]"))
        return "\n".join(lines)
    if isinstance(block, ImageContent):
        return "[Image attached]"
    if isinstance(block, AudioContent):
        return "[Audio attached]"
    if isinstance(block, VideoContent):
        return "[Video attached]"
    if isinstance(block, DocumentContent):
        return f"[Document: {block.data}]"
    return None


def _format_assistant_block(block: object) -> str | None:
    if isinstance(block, TextContent):
        return block.text
    if isinstance(block, ToolCall):
        args = _truncate(block.serialized_arguments(), MAX_TOOL_ARGS_CHARS, "...")
        return f"[Tool Call: {block.name}({args})]"
    if isinstance(block, ReasoningContent):
        return f"[Reasoning: {' '.join(block.reasoning)}]"
    if isinstance(block, ImageContent):
        return "[Image generated]"
    return None


def format_messages_for_summary(messages: Sequence[Message]) -> str:
    """Flatten messages into a numbered transcript for a summarization prompt.

    Rendered as plain text so the summarizer does not treat it as a
    conversation to continue.
    """
    output: list[str] = []
    for i, msg in enumerate(messages, start=1):
        if isinstance(msg, UserMessage):
            output.append(f"**[User Message {i}]**\n")
            formatter = _format_user_block
        elif isinstance(msg, AssistantMessage):
            output.append(f"**[Assistant Message {i}]**\n")
            formatter = _format_assistant_block
        else:
            continue
        for block in msg.content:
            rendered = formatter(block)
            if rendered is not None:
                output.append(f"{rendered}\n")
        output.append("\n")
    return "".join(output)
