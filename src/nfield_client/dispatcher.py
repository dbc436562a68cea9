# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Authenticated request dispatch.

Each dispatch runs the same sequence:

1. Check - is the session token stale?
2. Refresh - only if stale; a rejected sign-in aborts the call
3. Attach - ``Authorization: Basic <token>``
4. Send - one transport call, response returned unmodified

Business error responses (4xx/5xx) are returned, not raised, and nothing
is retried here: retry policy is call-specific and left to the caller.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .types.request import RequestDescriptor, Response

if TYPE_CHECKING:
    from .auth.coordinator import TokenManager
    from .observability import MetricsRecorder
    from .protocols.transport import TransportProtocol

logger = logging.getLogger(__name__)


class RequestDispatcher:
    """
    Sends authenticated requests for one connected session.

    A dispatch issues exactly one network call when the token is fresh and
    at most two (refresh, then payload) when it is stale. The refresh always
    completes before the payload request is sent.
    """

    def __init__(
        self,
        transport: TransportProtocol,
        token_manager: TokenManager,
        metrics: MetricsRecorder | None = None,
    ) -> None:
        self._transport = transport
        self._token_manager = token_manager
        self._metrics = metrics

    @property
    def token_manager(self) -> TokenManager:
        return self._token_manager

    async def dispatch(self, descriptor: RequestDescriptor) -> Response:
        """
        Send a request with a valid bearer token attached.

        Args:
            descriptor: The request to send; its headers gain
                ``Authorization``

        Returns:
            The transport response, whatever its status code.

        Raises:
            AuthenticationFailedError: If the token was stale and the
                refresh sign-in was rejected. The payload is not sent.
            TransportError: If either network call fails.
        """
        token = await self._token_manager.ensure_fresh()

        descriptor.headers.update(token.authorization_header())

        response = await self._transport.request(
            descriptor.method,
            descriptor.path,
            json=descriptor.json,
            headers=descriptor.headers,
        )

        if self._metrics is not None:
            self._metrics.request(descriptor.method, response.status_code)
        return response


__all__ = ["RequestDispatcher"]
