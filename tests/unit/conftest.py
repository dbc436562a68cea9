"""
Shared fixtures for the unit test suite.

ScriptedTransport stands in for the HTTP transport: it records every call
and answers sign-in and payload requests from queues of prepared responses.
"""

from __future__ import annotations

import asyncio
from collections import deque
from typing import Any

import pytest

from nfield_client.auth import SIGN_IN_PATH
from nfield_client.types import Credentials, Response, Token


class ScriptedTransport:
    """In-memory transport with scripted responses."""

    def __init__(
        self,
        sign_in_responses: list[Response] | None = None,
        payload_responses: list[Response] | None = None,
        sign_in_delay: float = 0.0,
    ) -> None:
        self.sign_in_responses = deque(sign_in_responses or [])
        self.payload_responses = deque(payload_responses or [])
        self.sign_in_delay = sign_in_delay
        self.calls: list[dict[str, Any]] = []
        self.closed = False
        self._issued = 0

    @property
    def base_url(self) -> str:
        return "https://api.nfieldmr.com/"

    @property
    def sign_in_calls(self) -> list[dict[str, Any]]:
        return [c for c in self.calls if c["path"] == SIGN_IN_PATH]

    @property
    def payload_calls(self) -> list[dict[str, Any]]:
        return [c for c in self.calls if c["path"] != SIGN_IN_PATH]

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> Response:
        self.calls.append(
            {"method": method, "path": path, "json": json, "headers": dict(headers or {})}
        )
        if path == SIGN_IN_PATH:
            await asyncio.sleep(self.sign_in_delay)
            if self.sign_in_responses:
                return self.sign_in_responses.popleft()
            self._issued += 1
            return Response(200, {"AuthenticationToken": f"token-{self._issued}"})

        await asyncio.sleep(0)
        if self.payload_responses:
            return self.payload_responses.popleft()
        return Response(200, {"ok": True})

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def credentials():
    """Valid sign-in credentials."""
    return Credentials(domain="acme", username="jo", password="s3cret")


@pytest.fixture
def transport():
    """A scripted transport answering every call with 200."""
    return ScriptedTransport()


@pytest.fixture
def fresh_token():
    """A token acquired just now."""
    token = Token()
    token.record("existing-token")
    return token


@pytest.fixture
def make_transport():
    """Factory for scripted transports with custom responses."""
    return ScriptedTransport
