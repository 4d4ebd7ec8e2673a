"""Shared fixtures: a fake ``requests.post``, a slow local server and a clean environment."""

import io
import json
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

import pytest
import requests

ACTION_ENV_VARS = (
    "URL",
    "ACCESS_TOKEN",
    "MESSAGE",
    "VISIBILITY",
    "SENSITIVE",
    "SPOILER_TEXT",
    "LANGUAGE",
    "SCHEDULED_AT",
    "MAX_CHARS",
    "LOG_LEVEL",
    "LOG_FILE",
    "GITHUB_OUTPUT",
)


class BrokenStream:
    """A raw stream that fails as soon as it is read."""

    def read(self, *args: Any, **kwargs: Any) -> bytes:
        raise OSError("connection reset by peer")

    def close(self) -> None:
        pass


def make_response(
    status_code: int = 200,
    body: bytes | str | dict[str, Any] = b"",
    reason: str = "OK",
    raw: Any = None,
) -> requests.Response:
    """Build a real, unread ``requests.Response`` around an in-memory body."""
    if isinstance(body, dict):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")

    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.encoding = "utf-8"
    response.raw = raw if raw is not None else io.BytesIO(body)
    return response


class FakePost:
    """Stands in for ``requests.post`` and records every call."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.result: requests.Response | Exception = make_response(
            200, {"id": "1", "url": "https://example.com/@bot/1"}
        )

    def respond_with(self, result: requests.Response | Exception) -> None:
        self.result = result

    def __call__(self, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append({"url": url, **kwargs})
        if isinstance(self.result, Exception):
            raise self.result
        return self.result

    @property
    def last_payload(self) -> dict[str, Any]:
        return json.loads(self.calls[-1]["data"])


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the runner's own environment out of option resolution."""
    for name in ACTION_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_post(monkeypatch: pytest.MonkeyPatch) -> FakePost:
    fake = FakePost()
    monkeypatch.setattr(requests, "post", fake)
    return fake


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def broken_stream() -> BrokenStream:
    return BrokenStream()


class DripHandler(BaseHTTPRequestHandler):
    """Answers every POST with a 200 JSON body sent a few bytes at a time."""

    body = b'{"id":"1","url":"https://example.com/@bot/1"}'
    chunk_size = 2
    delay = 0.0

    def do_POST(self) -> None:  # noqa: N802
        self.rfile.read(int(self.headers.get("Content-Length", 0)))
        self.send_response(200)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(self.body)))
        self.end_headers()
        try:
            for start in range(0, len(self.body), self.chunk_size):
                self.wfile.write(self.body[start : start + self.chunk_size])
                self.wfile.flush()
                time.sleep(self.delay)
        except (BrokenPipeError, ConnectionResetError):
            pass

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
        pass


@pytest.fixture
def drip_server(monkeypatch: pytest.MonkeyPatch):
    """Start a local server whose body trickles out with ``delay`` seconds between chunks."""
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    servers: list[ThreadingHTTPServer] = []

    def start(delay: float, chunk_size: int = 2) -> str:
        handler = type("Handler", (DripHandler,), {"delay": delay, "chunk_size": chunk_size})
        server = ThreadingHTTPServer(("127.0.0.1", 0), handler)
        server.daemon_threads = True
        server.block_on_close = False
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        return f"http://127.0.0.1:{server.server_port}"

    yield start

    for server in servers:
        server.shutdown()
        server.server_close()
