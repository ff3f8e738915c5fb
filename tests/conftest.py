from __future__ import annotations

import itertools
import json
from collections.abc import Mapping
from typing import Any

import pytest

from idp_client.exceptions import TransportError
from idp_client.http.transport import HttpResponse
from idp_client.providers import GenericProvider

AUTHORIZE_URL = "https://idp.example.com/oauth/authorize"
TOKEN_URL = "https://idp.example.com/oauth/token"
USER_URL = "https://idp.example.com/api/me"


class StubTransport:
    """Returns queued responses and records every request sent."""

    def __init__(self, *responses: HttpResponse | Exception):
        self.responses = list(responses)
        self.requests: list[dict[str, Any]] = []

    def queue_json(self, payload: Any, status_code: int = 200) -> StubTransport:
        response = HttpResponse(status_code=status_code, body=json.dumps(payload).encode())
        if status_code >= 400:
            self.responses.append(TransportError(f"HTTP {status_code}", response=response))
        else:
            self.responses.append(response)
        return self

    def queue(self, item: HttpResponse | Exception) -> StubTransport:
        self.responses.append(item)
        return self

    def send(self, method: str, url: str, headers: Mapping[str, str], body=None) -> HttpResponse:
        self.requests.append({
            "method": method,
            "url": url,
            "headers": {k.lower(): v for k, v in headers.items()},
            "body": body,
        })
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def last_request(self) -> dict[str, Any]:
        return self.requests[-1]


class SequenceRandomGenerator:
    """Deterministic generator yielding state-1, state-2, ..."""

    def __init__(self):
        self._counter = itertools.count(1)
        self.lengths: list[int] = []

    def generate(self, length: int) -> str:
        self.lengths.append(length)
        return f"state-{next(self._counter)}"


@pytest.fixture
def transport() -> StubTransport:
    return StubTransport()


@pytest.fixture
def random_generator() -> SequenceRandomGenerator:
    return SequenceRandomGenerator()


@pytest.fixture
def make_provider(transport, random_generator):
    def _make(**overrides: Any) -> GenericProvider:
        options: dict[str, Any] = {
            "client_id": "client-123",
            "client_secret": "secret-456",
            "redirect_uri": "https://app.example.com/callback",
            "url_authorize": AUTHORIZE_URL,
            "url_access_token": TOKEN_URL,
            "url_user_details": USER_URL,
            "default_scopes": ["profile", "email"],
            "transport": transport,
            "random_generator": random_generator,
        }
        options.update(overrides)
        return GenericProvider(**options)

    return _make


@pytest.fixture
def provider(make_provider) -> GenericProvider:
    return make_provider()
