# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Background token refresher.

Optionally re-signs in on a fixed cadence so the request path rarely finds
the token stale. It is the only long-lived background resource in the
library and must be stopped explicitly by its owner.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from typing_extensions import Self

from ..config import REFRESH_WINDOW_SECONDS

if TYPE_CHECKING:
    from .coordinator import TokenManager

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[Exception], Any]
"""Sync or async callable receiving a background refresh failure."""


class PersistentRefresher:
    """
    Proactively refreshes a session token on a fixed interval.

    Failures never propagate out of the background task. They are passed to
    ``on_error`` (sync or async callable) or, without a handler, logged as
    warnings. The loop keeps running after a failure.

    Example:
        >>> refresher = PersistentRefresher(token_manager)
        >>> refresher.start(on_error=alert_ops)
        >>> ...
        >>> await refresher.stop()
    """

    def __init__(
        self,
        token_manager: TokenManager,
        interval: float = REFRESH_WINDOW_SECONDS,
        on_error: ErrorHandler | None = None,
    ) -> None:
        self._token_manager = token_manager
        self._interval = interval
        self._on_error = on_error
        self._task: asyncio.Task[None] | None = None

    @property
    def interval(self) -> float:
        return self._interval

    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(
        self,
        interval: float | None = None,
        on_error: ErrorHandler | None = None,
    ) -> None:
        """
        Start the refresh loop. Calling it while running is a no-op.

        Args:
            interval: Seconds between refreshes (keeps the current value
                when omitted)
            on_error: Failure handler (keeps the current one when omitted)
        """
        if self.is_running():
            logger.debug("Token refresher already running")
            return

        if interval is not None:
            if interval <= 0:
                raise ValueError("interval must be positive")
            self._interval = interval
        if on_error is not None:
            self._on_error = on_error

        self._task = asyncio.create_task(
            self._refresh_loop(), name="nfield_token_refresher"
        )
        logger.debug(f"Token refresher started (every {self._interval:.0f}s)")

    async def stop(self) -> None:
        """Cancel the refresh loop. Calling it when not running is a no-op."""
        task = self._task
        self._task = None
        if task is None:
            return

        if not task.done():
            task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

        logger.debug("Token refresher stopped")

    async def _refresh_loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self._token_manager.refresh()
            except Exception as e:
                await self._report(e)

    async def _report(self, error: Exception) -> None:
        if self._on_error is None:
            logger.warning(f"Background token refresh failed: {error}")
            return
        try:
            result = self._on_error(error)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("Token refresh error handler raised")

    async def __aenter__(self) -> Self:
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self.stop()


__all__ = ["ErrorHandler", "PersistentRefresher"]
