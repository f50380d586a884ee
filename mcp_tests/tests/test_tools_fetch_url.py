import pytest

from core.errors import ValidationError
from tools import fetch_url as fetch_url_tool


class FakeFetchClient:
    def __init__(self, out):
        self._out = out
        self.calls = []

    async def fetch_text(self, url: str, *, max_chars: int):
        self.calls.append((url, max_chars))
        return self._out


@pytest.mark.asyncio
async def test_fetch_url_tool_validates_missing_url(dummy_mcp):
    fetch_url_tool.register(dummy_mcp, fetch_client=FakeFetchClient("x"))
    fn = dummy_mcp.tools["fetch_url"]

    with pytest.raises(ValidationError):
        await fn(url="   ")


@pytest.mark.asyncio
async def test_fetch_url_tool_delegates_to_client(dummy_mcp):
    client = FakeFetchClient("content")
    fetch_url_tool.register(dummy_mcp, fetch_client=client)
    fn = dummy_mcp.tools["fetch_url"]

    out = await fn(url="https://example.test/a", max_chars=123)

    assert out == "content"
    assert client.calls == [("https://example.test/a", 123)]


def test_fetch_url_tool_builds_default_client(monkeypatch, dummy_mcp):
    created = []

    class RecordingClient(FakeFetchClient):
        def __init__(self, **kwargs):
            super().__init__("x")
            created.append(kwargs)

    monkeypatch.setattr(fetch_url_tool, "FetchClient", RecordingClient)
    fetch_url_tool.register(dummy_mcp)

    assert len(created) == 1
    assert set(created[0]) == {"timeout", "verify", "cache_ttl_seconds", "cache_maxsize"}
    assert "fetch_url" in dummy_mcp.tools
