"""
Core type definitions — conversation messages and their content blocks.

Messages are frozen models: fields cannot be reassigned, and compressors only
rearrange references to them. The content lists themselves are plain lists and
are treated as read-only by convention.
"""
from __future__ import annotations

import json
from typing import Any, Literal, Union

from pydantic import BaseModel, Field

# ─── Content blocks ───────────────────────────────────────────────────────────

_FROZEN = {"frozen": True}


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str

    model_config = _FROZEN


class ImageContent(BaseModel):
    type: Literal["image"] = "image"
    data: str  # base64 encoded
    mime_type: str | None = None  # e.g. "image/jpeg"

    model_config = _FROZEN


class AudioContent(BaseModel):
    type: Literal["audio"] = "audio"
    data: str  # base64 encoded
    mime_type: str | None = None

    model_config = _FROZEN


class VideoContent(BaseModel):
    type: Literal["video"] = "video"
    data: str  # base64 encoded
    mime_type: str | None = None

    model_config = _FROZEN


class DocumentContent(BaseModel):
    type: Literal["document"] = "document"
    data: str  # raw text or base64 payload
    mime_type: str | None = None

    model_config = _FROZEN


class ToolCall(BaseModel):
    type: Literal["toolCall"] = "toolCall"
    id: str
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)

    model_config = _FROZEN

    def serialized_arguments(self) -> str:
        return json.dumps(self.arguments)


class ToolResultContent(BaseModel):
    type: Literal["toolResult"] = "toolResult"
    id: str  # id of the tool call this result answers
    content: list[TextContent | ImageContent] = Field(default_factory=list)

    model_config = _FROZEN


class ReasoningContent(BaseModel):
    type: Literal["reasoning"] = "reasoning"
    reasoning: list[str] = Field(default_factory=list)

    model_config = _FROZEN


UserContent = Union[
    TextContent,
    ToolResultContent,
    ImageContent,
    AudioContent,
    VideoContent,
    DocumentContent,
]

AssistantContent = Union[TextContent, ToolCall, ReasoningContent, ImageContent]


# ─── Messages ─────────────────────────────────────────────────────────────────

class UserMessage(BaseModel):
    role: Literal["user"] = "user"
    content: list[UserContent]

    model_config = _FROZEN


class AssistantMessage(BaseModel):
    role: Literal["assistant"] = "assistant"
    id: str | None = None
    content: list[AssistantContent]

    model_config = _FROZEN


Message = Union[UserMessage, AssistantMessage]


def user_message(text: str) -> UserMessage:
    """Build a user message holding a single text block."""
    return UserMessage(content=[TextContent(text=text)])


def assistant_message(text: str) -> AssistantMessage:
    """Build an assistant message holding a single text block."""
    return AssistantMessage(content=[TextContent(text=text)])


def has_tool_results(message: Message) -> bool:
    """True if the message answers one or more tool calls."""
    return isinstance(message, UserMessage) and any(
        isinstance(block, ToolResultContent) for block in message.content
    )


# ─── Tool ─────────────────────────────────────────────────────────────────────

class Tool(BaseModel):
    name: str
    description: str
    parameters: dict[str, Any] = Field(default_factory=dict)  # JSON Schema object


def serialize_tool_definitions(tools: list[Tool] | None) -> str:
    """Render a tool catalog as the JSON text a provider would receive."""
    if not tools:
        return ""
    return json.dumps([tool.model_dump() for tool in tools])
