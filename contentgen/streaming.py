"""Incremental-response emulation for single-shot backends."""
from typing import AsyncIterator, Awaitable, Callable, TypeVar

T = TypeVar("T")


async def one_shot_stream(fetch: Callable[[], Awaitable[T]]) -> AsyncIterator[T]:
    """Expose a single awaited result as a one-element async stream.

    ``fetch`` is not called until the stream is first iterated, and the one
    item is yielded only once the complete result is known.
    """
    yield await fetch()
