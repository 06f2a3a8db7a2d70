"""
Shared pytest fixtures for the commerce MCP server test suite.

HTTP is never real: clients are built on `httpx.MockTransport` with a
handler that records every request it sees.
"""

import json
from typing import Any, Callable, List

import httpx
import pytest

from commerce.client import CommerceClient
from commerce.credentials import BearerCredentials, SignedCredentials
from core.client import set_client

BASE_URL = "https://shop.example.com/"
TOKEN_HOST = "ims.example.com"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request, in order."""

    def __init__(self, handler: Callable[[httpx.Request], Any]):
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request):
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    def api_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.host != TOKEN_HOST]

    def token_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.host == TOKEN_HOST]


def json_response(status_code: int, payload: Any) -> httpx.Response:
    return httpx.Response(status_code, json=payload)


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content.decode("utf-8"))


def fail_if_called(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected HTTP request: {request.method} {request.url}")


@pytest.fixture
def signed_credentials() -> SignedCredentials:
    return SignedCredentials(
        consumer_key="ck",
        consumer_secret="cs",
        access_token="at",
        access_token_secret="ats",
        base_url=BASE_URL,
    )


@pytest.fixture
def bearer_credentials() -> BearerCredentials:
    return BearerCredentials(
        client_id="client-id",
        client_secret="client-secret",
        base_url=BASE_URL,
        scopes=("AdobeID", "openid"),
        token_host=TOKEN_HOST,
    )


@pytest.fixture
def make_client():
    """Build a CommerceClient whose HTTP goes to `handler`; returns (client, transport)."""

    def _make(credentials, handler: Callable[[httpx.Request], Any]):
        transport = RecordingTransport(handler)
        return CommerceClient(credentials, timeout=5.0, verify=True, transport=transport), transport

    return _make


@pytest.fixture
def installed_client(make_client, signed_credentials):
    """Install a signed-mode client as the process-wide client used by tools."""

    def _install(handler: Callable[[httpx.Request], Any]):
        client, transport = make_client(signed_credentials, handler)
        set_client(client)
        return transport

    yield _install
    set_client(None)
