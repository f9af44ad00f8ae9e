import json
from pathlib import Path
from urllib.parse import parse_qs

import httpx
import pytest

from spotify_web_api.http import Request, Transport

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class RecordingHandler:
    """httpx mock handler that replays canned responses and records requests"""

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def form(self, index=-1):
        """Decode the form body of a recorded request"""
        body = self.requests[index].content.decode("utf-8")
        return {key: values[0] for key, values in parse_qs(body).items()}


@pytest.fixture
def load_fixture():
    def _load(name):
        return (FIXTURES_DIR / f"{name}.json").read_text()

    return _load


@pytest.fixture
def json_response(load_fixture):
    """Build an httpx response from a fixture file"""

    def _build(name, status=200, headers=None):
        return httpx.Response(status, text=load_fixture(name), headers={"Content-Type": "application/json", **(headers or {})})

    return _build


@pytest.fixture
def make_request():
    """Create a Request wired to a mock transport

    Returns (request, handler); the handler answers with ``responses`` in order.
    """

    def _make(*responses, options=None):
        handler = RecordingHandler(responses)
        client = httpx.Client(transport=httpx.MockTransport(handler))
        return Request(options=options, transport=Transport(client)), handler

    return _make


@pytest.fixture
def error_body():
    """Build an API style error body"""

    def _build(status, message, reason=None):
        error = {"status": status, "message": message}
        if reason:
            error["reason"] = reason
        return json.dumps({"error": error})

    return _build
