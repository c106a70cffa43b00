"""
Shared fixtures: a scripted stand-in for requests.Session and page builders.
"""
from __future__ import annotations

from typing import Optional

import pytest
from requests.structures import CaseInsensitiveDict

from analyzers.orchestrator import build_context
from models import FetchResult


# ── Fake transport ────────────────────────────────────────────────────────────

class FakeSocket:
    def __init__(self):
        self.timeouts: list[float] = []

    def settimeout(self, value):
        self.timeouts.append(value)


class FakeConnection:
    def __init__(self):
        self.sock = FakeSocket()


class FakeRaw:
    """
    Serves `size` bytes of body (or `data`) through read1, recording what
    was read. `on_read` runs before every read, e.g. to advance a fake clock.
    """

    def __init__(self, data: bytes = b"", size: Optional[int] = None, on_read=None):
        self.data = data
        self.size = len(data) if size is None else size
        self.bytes_read = 0
        self.reads = 0
        self.closed = False
        self.on_read = on_read
        self.connection = FakeConnection()

    def read1(self, amt: int, decode_content: bool = True) -> bytes:
        assert decode_content is False
        assert not self.closed
        self.reads += 1
        if self.on_read is not None:
            self.on_read(self)
        n = min(amt, self.size - self.bytes_read)
        if n <= 0:
            return b""
        if self.data:
            chunk = self.data[self.bytes_read:self.bytes_read + n]
        else:
            chunk = b"x" * n
        self.bytes_read += n
        return chunk

    def close(self):
        self.closed = True


class FakeResponse:
    def __init__(self, status_code: int = 200, body: bytes = b"", headers=None,
                 size: Optional[int] = None, encoding: Optional[str] = None):
        self.status_code = status_code
        self.headers = CaseInsensitiveDict(headers or {})
        self.raw = FakeRaw(body, size)
        self.encoding = encoding
        self.closed = False

    def close(self):
        self.closed = True


class FakeSession:
    """Maps URL -> FakeResponse or exception instance; records every GET."""

    def __init__(self, routes: dict, on_get=None):
        self.routes = routes
        self.on_get = on_get
        self.calls: list[tuple[str, dict]] = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.on_get is not None:
            self.on_get(url)
        outcome = self.routes[url]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def close(self):
        pass


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse


# ── Pages ─────────────────────────────────────────────────────────────────────

GOOD_HEADERS = {
    "content-type": "text/html; charset=utf-8",
    "cache-control": "public, max-age=3600",
    "content-encoding": "gzip",
    "x-frame-options": "SAMEORIGIN",
    "x-content-type-options": "nosniff",
    "strict-transport-security": "max-age=31536000",
    "x-xss-protection": "1; mode=block",
}

PERFECT_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Example Bakery - Fresh bread every morning</title>
  <meta name="description" content="Family bakery baking sourdough and pastries daily.">
  <script>/* layout switches at @media (max-width: 600px) */</script>
</head>
<body>
  <nav>
    <a href="/">Home</a>
    <a href="/menu">Menu</a>
    <a href="/contact">Contact</a>
  </nav>
  <main>
    <h1>Fresh bread every morning</h1>
    <img src="/loaf.jpg" alt="A sourdough loaf">
    <form>
      <label for="email">Email</label>
      <input id="email" type="email">
      <input type="text" aria-label="Name">
      <button type="submit">Subscribe</button>
    </form>
  </main>
</body>
</html>
"""


def make_fetch(
    html: str,
    headers: Optional[dict] = None,
    final_url: str = "https://example.com/",
    elapsed_ms: int = 120,
) -> FetchResult:
    return FetchResult(
        url=final_url,
        final_url=final_url,
        status_code=200,
        body=html,
        headers=dict(GOOD_HEADERS if headers is None else headers),
        elapsed_ms=elapsed_ms,
        size_bytes=len(html.encode("utf-8")),
    )


def make_ctx(html: str, headers: Optional[dict] = None,
             final_url: str = "https://example.com/", load_time_ms: int = 120):
    return build_context(make_fetch(html, headers, final_url, load_time_ms))


@pytest.fixture
def perfect_html():
    return PERFECT_HTML


@pytest.fixture
def good_headers():
    return dict(GOOD_HEADERS)
