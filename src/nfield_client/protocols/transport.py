# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for the HTTP transport used by the client."""

from typing import Any, Protocol, runtime_checkable

from ..types.request import Response


@runtime_checkable
class TransportProtocol(Protocol):
    """
    Minimal protocol for the transport behind the request pipeline.

    TLS, redirects and connection pooling are the transport's business.
    The pipeline only needs to send one request and get back the status
    code and decoded body. Network failures must be raised as
    ``nfield_client.exceptions.TransportError``.
    """

    @property
    def base_url(self) -> str:
        """Base URL request paths are resolved against."""
        ...

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """Send one request and return the response unmodified."""
        ...

    async def aclose(self) -> None:
        """Release pooled connections."""
        ...
