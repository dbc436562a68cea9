# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Token lifecycle management for a connected session.

The TokenManager owns the session's Token and is the only code that
commits a new bearer value into it. Refreshes are single-flight: while a
sign-in is in progress, every other caller that finds the token stale
awaits that same sign-in instead of starting its own.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..config import REFRESH_WINDOW_SECONDS
from ..exceptions import AuthenticationFailedError
from ..types.token import Token

if TYPE_CHECKING:
    from ..observability import MetricsRecorder
    from ..types.credentials import Credentials
    from .authenticator import Authenticator

logger = logging.getLogger(__name__)


class TokenManager:
    """
    Keeps one session's bearer token fresh.

    Responsibilities:
    - Decide whether the held token is stale
    - Run at most one sign-in at a time and share its outcome
    - Commit the new token only after the service confirmed the sign-in

    A failed shared refresh raises the same AuthenticationFailedError in
    every waiter. The next stale observer starts a new attempt.
    """

    def __init__(
        self,
        authenticator: Authenticator,
        credentials: Credentials,
        token: Token | None = None,
        refresh_window: float = REFRESH_WINDOW_SECONDS,
        metrics: MetricsRecorder | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the token manager.

        Args:
            authenticator: Performs the sign-in exchange
            credentials: Credentials used for every sign-in
            token: Token to manage (a new empty token when omitted)
            refresh_window: Seconds after which the token is stale
            metrics: Optional metrics recorder
            clock: Monotonic time source, replaceable in tests
        """
        self._authenticator = authenticator
        self._credentials = credentials
        self._token = token if token is not None else Token()
        self._refresh_window = refresh_window
        self._metrics = metrics
        self._clock = clock

        self._refresh_task: asyncio.Task[Token] | None = None

    @property
    def token(self) -> Token:
        return self._token

    @property
    def refresh_window(self) -> float:
        return self._refresh_window

    @property
    def refresh_in_progress(self) -> bool:
        return self._refresh_task is not None and not self._refresh_task.done()

    def is_stale(self, now: float | None = None) -> bool:
        """Check the held token against the refresh window."""
        if now is None:
            now = self._clock()
        return self._token.is_stale(now=now, refresh_window=self._refresh_window)

    async def ensure_fresh(self) -> Token:
        """
        Return the token, signing in first if it is stale.

        Raises:
            AuthenticationFailedError: If the refresh sign-in was rejected.
            TransportError: If the sign-in could not be sent.
        """
        if not self.is_stale():
            return self._token
        logger.debug("Token is stale, refreshing before dispatch")
        return await self.refresh()

    async def refresh(self) -> Token:
        """
        Sign in again regardless of staleness, joining an in-flight
        refresh if there is one.

        Cancelling the caller does not cancel the shared sign-in; other
        waiters still get its result.
        """
        task = self._refresh_task
        if task is None or task.done():
            task = asyncio.create_task(self._sign_in_and_commit())
            task.add_done_callback(self._on_refresh_done)
            self._refresh_task = task
        else:
            logger.debug("Joining in-flight token refresh")
            if self._metrics is not None:
                self._metrics.coalesced_refresh()

        return await asyncio.shield(task)

    async def _sign_in_and_commit(self) -> Token:
        result = await self._authenticator.sign_in(self._credentials)
        if not result.ok:
            raise AuthenticationFailedError.from_sign_in(
                result.status_code, result.message
            )

        # Only reached for a confirmed 200 with a token
        self._token.record(result.authentication_token or "", now=self._clock())
        logger.debug("Committed refreshed token")
        return self._token

    def _on_refresh_done(self, task: asyncio.Task[Token]) -> None:
        if self._refresh_task is task:
            self._refresh_task = None
        # Mark the exception retrieved even if every waiter was cancelled
        if not task.cancelled():
            task.exception()

    async def aclose(self) -> None:
        """Cancel an in-flight refresh, if any."""
        task = self._refresh_task
        self._refresh_task = None
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)


__all__ = ["TokenManager"]
