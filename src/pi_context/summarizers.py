"""
Summarizer capabilities — anything that turns a prompt into text.

SummarizingCompressor only needs ``await summarizer.prompt(text)``. The
adapters here cover the two common cases: a plain async function, and an
OpenAI-compatible chat completions endpoint.
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Protocol, runtime_checkable

import openai as _openai

DEFAULT_SYSTEM_PROMPT = (
    "You are a context summarization assistant. Read the conversation you are given "
    "and produce the summary in the exact format requested.\n\n"
    "Do NOT continue the conversation. Do NOT answer any questions in it. "
    "ONLY output the summary."
)


@runtime_checkable
class Promptable(Protocol):
    """A single request/response text capability (an LLM, an agent, a fake)."""

    async def prompt(self, text: str) -> str:
        ...


class CallableSummarizer:
    """Adapt an ``async (str) -> str`` function to the Promptable protocol."""

    def __init__(self, fn: Callable[[str], Awaitable[str]]) -> None:
        self._fn = fn

    async def prompt(self, text: str) -> str:
        return await self._fn(text)


class OpenAISummarizer:
    """
    Summarize through an OpenAI-compatible Chat Completions endpoint.

    ``client`` may be passed to share one ``openai.AsyncOpenAI`` between
    summarizer instances; otherwise one is created from ``api_key`` and
    ``base_url`` (falling back to the SDK's environment lookup).
    """

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        base_url: str | None = None,
        system_prompt: str | None = DEFAULT_SYSTEM_PROMPT,
        max_tokens: int | None = None,
        temperature: float | None = None,
        client: Any | None = None,
    ) -> None:
        self.model = model
        self.system_prompt = system_prompt
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._client = client or _openai.AsyncOpenAI(
            api_key=api_key or None,
            base_url=base_url if base_url != "https://api.openai.com/v1" else None,
        )

    def _build_params(self, text: str) -> dict[str, Any]:
        messages: list[dict[str, Any]] = []
        if self.system_prompt:
            messages.append({"role": "system", "content": self.system_prompt})
        messages.append({"role": "user", "content": text})

        params: dict[str, Any] = {"model": self.model, "messages": messages}
        if self.max_tokens:
            params["max_tokens"] = self.max_tokens
        if self.temperature is not None:
            params["temperature"] = self.temperature
        return params

    async def prompt(self, text: str) -> str:
        response = await self._client.chat.completions.create(**self._build_params(text))
        if not response.choices:
            raise RuntimeError(f"Model {self.model!r} returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise RuntimeError(f"Model {self.model!r} returned an empty summary")
        return content.strip()
