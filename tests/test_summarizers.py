"""
Tests for summarizer adapters.
"""
from __future__ import annotations

import os
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from pi_context.summarizers import (
    DEFAULT_SYSTEM_PROMPT,
    CallableSummarizer,
    OpenAISummarizer,
    Promptable,
)


def _completion(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _mock_client(response) -> MagicMock:
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=response)
    return client


class TestCallableSummarizer:
    @pytest.mark.asyncio
    async def test_delegates(self):
        async def fn(text: str) -> str:
            return text.upper()

        assert await CallableSummarizer(fn).prompt("abc") == "ABC"

    def test_is_promptable(self):
        async def fn(text: str) -> str:
            return text

        assert isinstance(CallableSummarizer(fn), Promptable)


class TestOpenAISummarizer:
    @pytest.mark.asyncio
    async def test_returns_stripped_text(self):
        client = _mock_client(_completion("  the briefing \n"))
        summarizer = OpenAISummarizer("gpt-4o-mini", client=client)
        assert await summarizer.prompt("conversation") == "the briefing"

    @pytest.mark.asyncio
    async def test_request_params(self):
        client = _mock_client(_completion("ok"))
        summarizer = OpenAISummarizer("gpt-4o-mini", max_tokens=800, temperature=0.2, client=client)
        await summarizer.prompt("conversation")

        params = client.chat.completions.create.await_args.kwargs
        assert params["model"] == "gpt-4o-mini"
        assert params["max_tokens"] == 800
        assert params["temperature"] == 0.2
        assert params["messages"] == [
            {"role": "system", "content": DEFAULT_SYSTEM_PROMPT},
            {"role": "user", "content": "conversation"},
        ]

    @pytest.mark.asyncio
    async def test_no_system_prompt(self):
        client = _mock_client(_completion("ok"))
        summarizer = OpenAISummarizer("m", system_prompt=None, client=client)
        await summarizer.prompt("hi")
        params = client.chat.completions.create.await_args.kwargs
        assert params["messages"] == [{"role": "user", "content": "hi"}]
        assert "max_tokens" not in params
        assert "temperature" not in params

    @pytest.mark.asyncio
    async def test_empty_content_raises(self):
        summarizer = OpenAISummarizer("m", client=_mock_client(_completion(None)))
        with pytest.raises(RuntimeError):
            await summarizer.prompt("hi")

    @pytest.mark.asyncio
    async def test_no_choices_raises(self):
        summarizer = OpenAISummarizer("m", client=_mock_client(SimpleNamespace(choices=[])))
        with pytest.raises(RuntimeError):
            await summarizer.prompt("hi")

    def test_is_promptable(self):
        assert isinstance(OpenAISummarizer("m", client=MagicMock()), Promptable)


@pytest.mark.live
class TestOpenAISummarizerLive:
    @pytest.mark.asyncio
    async def test_live_summary(self):
        if not os.environ.get("OPENAI_API_KEY"):
            pytest.skip("OPENAI_API_KEY not set")
        summarizer = OpenAISummarizer(os.environ.get("PI_CONTEXT_TEST_MODEL", "gpt-4o-mini"), max_tokens=200)
        text = await summarizer.prompt("Summarize in one sentence: the user asked to rename a function.")
        assert isinstance(text, str)
        assert text
