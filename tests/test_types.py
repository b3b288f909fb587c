"""
Tests for message and content models.
"""
from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from pi_context.types import (
    TextContent,
    Tool,
    ToolResultContent,
    UserMessage,
    assistant_message,
    has_tool_results,
    serialize_tool_definitions,
    user_message,
)


class TestFrozenMessages:
    def test_message_fields_cannot_be_reassigned(self):
        msg = user_message("hello")
        with pytest.raises(ValidationError):
            msg.content = [TextContent(text="changed")]
        assert msg.content[0].text == "hello"

    def test_content_block_fields_cannot_be_reassigned(self):
        block = TextContent(text="hello")
        with pytest.raises(ValidationError):
            block.text = "changed"

    def test_equal_by_value(self):
        assert assistant_message("x") == assistant_message("x")


class TestHelpers:
    def test_has_tool_results(self):
        result = UserMessage(content=[ToolResultContent(id="c1", content=[TextContent(text="ok")])])
        assert has_tool_results(result) is True
        assert has_tool_results(user_message("plain")) is False
        assert has_tool_results(assistant_message("plain")) is False

    def test_serialize_tool_definitions_empty(self):
        assert serialize_tool_definitions(None) == ""
        assert serialize_tool_definitions([]) == ""

    def test_serialize_tool_definitions(self):
        tool = Tool(name="read", description="Read a file", parameters={"type": "object"})
        data = json.loads(serialize_tool_definitions([tool]))
        assert data[0]["name"] == "read"
        assert data[0]["parameters"] == {"type": "object"}
