"""Shared fixtures: a fake urlopen and a throwaway range server."""

import threading
import urllib.error
import urllib.request
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest


PASSWORD_DIGEST = "5baa61e4c9b93f3f0682250b6cf8331b7ee68fd8"
PASSWORD_SUFFIX = PASSWORD_DIGEST[5:].upper()


class FakeResponse:
    """Minimal stand-in for the object urlopen returns."""

    def __init__(self, body: bytes = b"", status: int = 200, reason: str = "OK", read_error=None):
        self.body = body
        self.status = status
        self.reason = reason
        self.read_error = read_error

    def read(self):
        if self.read_error is not None:
            raise self.read_error
        return self.body

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


class FakeUrlopen:
    """Records requests and returns or raises a configured outcome."""

    def __init__(self):
        self.requests = []
        self.timeouts = []
        self.response = FakeResponse()
        self.error = None

    def __call__(self, request, timeout=None):
        self.requests.append(request)
        self.timeouts.append(timeout)
        if self.error is not None:
            raise self.error
        return self.response

    def respond(self, body, status=200, reason="OK", read_error=None):
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.response = FakeResponse(body, status=status, reason=reason, read_error=read_error)

    def fail_with_status(self, code, reason):
        self.error = urllib.error.HTTPError(
            "https://example.invalid/range/00000", code, reason, {}, None
        )


@pytest.fixture
def fake_urlopen(monkeypatch):
    """Replace urllib.request.urlopen for the duration of a test."""
    fake = FakeUrlopen()
    monkeypatch.setattr(urllib.request, "urlopen", fake)
    return fake


class _RangeHandler(BaseHTTPRequestHandler):
    ranges: dict = {}
    status_code = 200
    seen_paths: list = []

    def do_GET(self):
        self.seen_paths.append(self.path)
        prefix = self.path.rsplit("/", 1)[-1].upper()
        if self.status_code != 200:
            self.send_error(self.status_code)
            return
        body = self.ranges.get(prefix, "").encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "text/plain")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def range_server():
    """Local range service. Configure via ``server.handler.ranges``."""
    handler = type("RangeHandler", (_RangeHandler,), {"ranges": {}, "status_code": 200, "seen_paths": []})
    server = ThreadingHTTPServer(("127.0.0.1", 0), handler)
    server.handler = handler
    server.base_url = f"http://127.0.0.1:{server.server_address[1]}/range/"
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()
