# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request and response types exchanged with the transport.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class RequestDescriptor:
    """
    One HTTP request, constructed per call and never retained past dispatch.

    Attributes:
        method: HTTP method (GET, POST, PUT, PATCH, DELETE)
        path: Path relative to the configured base URL, e.g. ``v1/Surveys``
        json: Optional JSON body
        headers: Per-request headers; the dispatcher adds ``Authorization``
    """

    method: str
    path: str
    json: Any | None = None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class Response:
    """
    Transport response handed back to the caller unmodified.

    Error status codes are data, not exceptions: callers branch on
    ``status_code`` (404 and 422 are legitimately terminal for many calls).

    Attributes:
        status_code: HTTP status code
        body: Decoded JSON body, raw text for non-JSON bodies, or None
        headers: Response headers
    """

    status_code: int
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True for 2xx responses."""
        return 200 <= self.status_code < 300


__all__ = ["RequestDescriptor", "Response"]
