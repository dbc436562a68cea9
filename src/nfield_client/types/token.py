# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Bearer token storage and staleness check.

A Token is either empty (never signed in) or valid as of its acquisition
time. It is mutated only by committing the result of a successful sign-in.
"""

import time
from dataclasses import dataclass

from ..config import REFRESH_WINDOW_SECONDS


@dataclass
class Token:
    """
    The bearer credential held by one connected session.

    Attributes:
        bearer_value: The ``AuthenticationToken`` returned by sign-in
            (empty string until the first successful sign-in)
        acquired_at: ``time.monotonic()`` timestamp of acquisition
    """

    bearer_value: str = ""
    acquired_at: float = 0.0

    def __repr__(self) -> str:
        state = "set" if self.bearer_value else "empty"
        return f"Token(<{state}>, acquired_at={self.acquired_at!r})"

    @property
    def is_empty(self) -> bool:
        return not self.bearer_value

    def is_stale(
        self,
        now: float | None = None,
        refresh_window: float = REFRESH_WINDOW_SECONDS,
    ) -> bool:
        """
        Check whether this token must be refreshed before use.

        Args:
            now: Current monotonic time (defaults to ``time.monotonic()``)
            refresh_window: Maximum token age in seconds

        Returns:
            True if the token is empty or older than ``refresh_window``.
        """
        if self.is_empty:
            return True
        if now is None:
            now = time.monotonic()
        return now - self.acquired_at > refresh_window

    def record(self, bearer_value: str, now: float | None = None) -> None:
        """Overwrite the token in place with a freshly acquired value."""
        self.bearer_value = bearer_value
        self.acquired_at = time.monotonic() if now is None else now

    def authorization_header(self) -> dict[str, str]:
        """Header attached to every authenticated call."""
        return {"Authorization": f"Basic {self.bearer_value}"}


def is_stale(
    token: Token,
    now: float | None = None,
    refresh_window: float = REFRESH_WINDOW_SECONDS,
) -> bool:
    """Function form of :meth:`Token.is_stale`."""
    return token.is_stale(now=now, refresh_window=refresh_window)


__all__ = ["Token", "is_stale"]
