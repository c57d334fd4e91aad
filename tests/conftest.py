"""
Shared test fixtures and helpers for the Atto test suite.
"""

import pytest
from typing import List, Optional

from atto import Atto
from atto.patterns import set_global_cache


@pytest.fixture(autouse=True)
def fresh_pattern_cache():
    """Every test starts with an empty process-wide pattern cache."""
    set_global_cache(None)
    yield
    set_global_cache(None)


@pytest.fixture
def app() -> Atto:
    return Atto()


@pytest.fixture
def template_dir(tmp_path):
    """Directory with a view and a layout, mirroring a typical blog page."""
    (tmp_path / "view.html").write_text("<h1>{{ data.get('title') }}</h1>")
    (tmp_path / "layout.html").write_text("<div>{{ data.get('atto.view') }}</div>")
    (tmp_path / "other.html").write_text("<p>other</p>")
    return tmp_path


# ============================================================================
# ASGI Helpers
# ============================================================================


def make_scope(
    method: str = "GET",
    path: str = "/",
    query_string: str = "",
    headers: Optional[List[tuple]] = None,
) -> dict:
    """Build a minimal ASGI HTTP scope."""
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "path": path,
        "raw_path": path.encode("latin-1"),
        "query_string": query_string.encode("latin-1"),
        "headers": [
            (name.encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or [])
        ],
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 12345),
    }


class SendCollector:
    """Collects ASGI messages sent by an application."""

    def __init__(self):
        self.messages = []

    async def __call__(self, message: dict):
        self.messages.append(message)

    @property
    def status(self) -> int:
        return self.messages[0]["status"]

    @property
    def headers(self) -> dict:
        return {k.decode("latin-1"): v.decode("latin-1") for k, v in self.messages[0]["headers"]}

    @property
    def body(self) -> bytes:
        return b"".join(m.get("body", b"") for m in self.messages[1:])


def make_receive(*messages: dict):
    """ASGI receive callable replaying the given messages."""
    queue = list(messages)

    async def receive() -> dict:
        return queue.pop(0)

    return receive
