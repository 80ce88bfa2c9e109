"""
Shared fakes for the transport and token store collaborators.
"""

import json
from typing import Any

import pytest

from tuyacloud.api_request import TransportRequest
from tuyacloud.config import ClientConfig


def ok_body(**payload: Any) -> str:
    return json.dumps({"success": True, "t": 1700000000000, **payload})


def error_body(code: int, msg: str = "failed") -> str:
    return json.dumps({"success": False, "code": code, "msg": msg, "t": 1700000000000})


class FakeTransport:
    """Replays queued bodies (or raises queued exceptions) and records every request."""

    def __init__(self, responses=None, file_bytes: bytes = b"") -> None:
        self.responses = list(responses or [])
        self.file_bytes = file_bytes
        self.requests: list[TransportRequest] = []
        self.timeouts: list[float] = []

    async def do_request(self, req: TransportRequest, *, timeout: float) -> str:
        self.requests.append(req)
        self.timeouts.append(timeout)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def do_file_request(self, req: TransportRequest, sink, *, timeout: float) -> int:
        self.requests.append(req)
        self.timeouts.append(timeout)
        if self.responses and isinstance(self.responses[0], Exception):
            raise self.responses.pop(0)
        sink.write(self.file_bytes)
        return len(self.file_bytes)


class FakeTokenStore:
    def __init__(self, tokens=("token-1", "token-2", "token-3", "token-4")) -> None:
        self._tokens = list(tokens)
        self._current: str | None = None
        self.get_calls = 0
        self.invalidations = 0

    async def get_token(self) -> str:
        self.get_calls += 1
        if self._current is None:
            self._current = self._tokens.pop(0)
        return self._current

    def invalidate(self) -> None:
        self.invalidations += 1
        self._current = None


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(
        client_id="client-id",
        secret="client-secret",
        endpoint="openapi.example.com",
    )


@pytest.fixture
def token_store() -> FakeTokenStore:
    return FakeTokenStore()
