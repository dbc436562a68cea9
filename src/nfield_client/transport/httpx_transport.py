# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
httpx-backed transport for the Nfield API.

TLS negotiation, redirects and connection pooling are left to
``httpx.AsyncClient``. This module only maps requests and responses to the
library's types and turns network failures into TransportError.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import ClientConfig
from ..exceptions import TransportError
from ..types.request import Response

logger = logging.getLogger(__name__)


def build_async_client(
    config: ClientConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """
    Create an ``httpx.AsyncClient`` from a client config.

    ``config.transport_options`` are applied last, so they can override the
    base URL, timeout or headers derived from the other fields.
    """
    options: dict[str, Any] = {
        "base_url": config.base_url,
        "timeout": httpx.Timeout(config.timeout),
        "headers": dict(config.headers),
    }
    options.update(config.transport_options)
    if transport is not None:
        options["transport"] = transport
    return httpx.AsyncClient(**options)


def decode_body(response: httpx.Response) -> Any:
    """Decode a response body: JSON when possible, text otherwise, None if empty."""
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            logger.debug(
                f"Response declared {content_type} but is not valid JSON; "
                "returning raw text"
            )
    return response.text


class HttpxTransport:
    """
    Transport that sends requests through a shared ``httpx.AsyncClient``.

    Example:
        >>> transport = HttpxTransport(ClientConfig())
        >>> response = await transport.request("GET", "v1/Surveys")
        >>> await transport.aclose()
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            config: Client configuration (defaults to ``ClientConfig()``)
            client: Pre-built async client; it is closed by ``aclose`` too
            transport: Low-level httpx transport, e.g. ``httpx.MockTransport``
                in tests. Ignored when ``client`` is given.
        """
        self.config = config or ClientConfig()
        self._client = client or build_async_client(self.config, transport=transport)

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """
        Send one request.

        Returns:
            The response, whatever its status code.

        Raises:
            TransportError: On timeouts, DNS failures, connection resets and
                other network-level errors.
        """
        try:
            response = await self._client.request(
                method, path, json=json, headers=headers
            )
        except httpx.TransportError as e:
            raise TransportError(
                f"{method} {path} failed: {e!r}", method=method, path=path
            ) from e

        logger.debug(f"{method} {path} -> {response.status_code}")
        return Response(
            status_code=response.status_code,
            body=decode_body(response),
            headers=dict(response.headers),
        )

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = ["HttpxTransport", "build_async_client", "decode_body"]
