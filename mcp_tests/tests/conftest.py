import pytest

import core.cache as cache_mod


class DummyMCP:
    """FastMCP stand-in that records registered tools by name."""

    def __init__(self) -> None:
        self.tools = {}

    def tool(self, *, name: str):
        def _decorator(fn):
            assert name not in self.tools, f"tool registered twice: {name}"
            self.tools[name] = fn
            return fn
        return _decorator


@pytest.fixture
def dummy_mcp():
    return DummyMCP()


@pytest.fixture
def clock(monkeypatch):
    # Controllable time.monotonic() for the cache engine; tests set clock["now"]
    t = {"now": 0.0}

    def fake_monotonic():
        return t["now"]

    monkeypatch.setattr(cache_mod.time, "monotonic", fake_monotonic)
    return t
