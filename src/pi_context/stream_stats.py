"""
Byte counting for streamed responses, for throughput telemetry.

Counters are explicit handles: create one per request or stream and pass it
to whatever wraps the byte stream. There is no process-wide active counter.
"""
from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, AsyncIterator

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)


class StreamBytesCounter:
    """Thread-safe running total of bytes received."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._count = 0

    @property
    def bytes_received(self) -> int:
        with self._lock:
            return self._count

    def add(self, count: int) -> int:
        """Add count bytes and return the new total."""
        with self._lock:
            self._count += count
            return self._count

    def reset(self) -> int:
        """Zero the counter and return the previous value."""
        with self._lock:
            previous, self._count = self._count, 0
            return previous


class ByteCountingStream:
    """Async iterator that passes chunks through unchanged while counting them."""

    def __init__(self, inner: AsyncIterator[bytes], counter: StreamBytesCounter) -> None:
        self._inner = inner
        self.counter = counter

    def __aiter__(self) -> "ByteCountingStream":
        return self

    async def __anext__(self) -> bytes:
        chunk = await self._inner.__anext__()
        total = self.counter.add(len(chunk))
        logger.debug("ByteCountingStream: received %d bytes, total now %d", len(chunk), total)
        return chunk


async def count_response_bytes(
    response: "httpx.Response",
    counter: StreamBytesCounter,
) -> AsyncIterator[bytes]:
    """
    Iterate a streaming httpx response's decoded body while counting wire bytes.

    The counter tracks ``response.num_bytes_downloaded``, the raw bytes read
    off the connection before any Content-Encoding is undone, so compressed
    responses count their compressed size.
    """
    seen = response.num_bytes_downloaded
    async for chunk in response.aiter_bytes():
        seen = _count_downloaded(response, counter, seen)
        yield chunk
    _count_downloaded(response, counter, seen)


def _count_downloaded(response: "httpx.Response", counter: StreamBytesCounter, seen: int) -> int:
    downloaded = response.num_bytes_downloaded
    if downloaded > seen:
        total = counter.add(downloaded - seen)
        logger.debug("count_response_bytes: received %d bytes, total now %d", downloaded - seen, total)
    return downloaded
