"""Tests for one_shot_stream."""
import pytest

from contentgen.streaming import one_shot_stream

pytestmark = pytest.mark.unit


class TestOneShotStream:

    async def test_yields_single_result(self):
        async def fetch():
            return {"answer": 42}

        items = [item async for item in one_shot_stream(fetch)]

        assert items == [{"answer": 42}]

    async def test_fetch_is_deferred_until_iteration(self):
        calls = []

        async def fetch():
            calls.append(1)
            return "done"

        stream = one_shot_stream(fetch)
        assert calls == []

        assert await stream.__anext__() == "done"
        assert calls == [1]
        with pytest.raises(StopAsyncIteration):
            await stream.__anext__()

    async def test_error_surfaces_on_iteration(self):
        async def fetch():
            raise RuntimeError("backend down")

        stream = one_shot_stream(fetch)

        with pytest.raises(RuntimeError, match="backend down"):
            await stream.__anext__()
