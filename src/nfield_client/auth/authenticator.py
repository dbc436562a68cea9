# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Sign-in exchange with the Nfield API.

Sign-in is the only operation that does not itself require a valid token.
The Authenticator performs the exchange and reports the outcome; it never
retries and never touches a Token. Committing a new token is left to the
caller, after it has confirmed the sign-in succeeded.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..exceptions import NfieldError
from ..params import definitions, normalize
from ..types.credentials import Credentials

if TYPE_CHECKING:
    from ..observability import MetricsRecorder
    from ..protocols.transport import TransportProtocol

logger = logging.getLogger(__name__)

SIGN_IN_PATH = "v1/SignIn"


@dataclass(frozen=True)
class SignInResult:
    """
    Outcome of ``POST v1/SignIn``.

    Attributes:
        status_code: HTTP status code of the sign-in response
        body: Decoded response body
    """

    status_code: int
    body: Any = None

    @property
    def authentication_token(self) -> str | None:
        if isinstance(self.body, dict):
            token = self.body.get("AuthenticationToken")
            return token or None
        return None

    @property
    def ok(self) -> bool:
        """Success is exactly HTTP 200 with an ``AuthenticationToken``."""
        return self.status_code == 200 and self.authentication_token is not None

    @property
    def message(self) -> str | None:
        """The service-reported failure message."""
        if isinstance(self.body, dict):
            return self.body.get("Message")
        if self.status_code == 200 and self.authentication_token is None:
            return "sign-in response did not contain an AuthenticationToken"
        return self.body if isinstance(self.body, str) and self.body else None


class Authenticator:
    """
    Performs the credentials -> bearer token exchange.

    Example:
        >>> authenticator = Authenticator(transport)
        >>> result = await authenticator.sign_in(credentials)
        >>> result.ok
        True
    """

    def __init__(
        self,
        transport: TransportProtocol,
        metrics: MetricsRecorder | None = None,
    ) -> None:
        self._transport = transport
        self._metrics = metrics

    async def sign_in(self, credentials: Credentials) -> SignInResult:
        """
        Issue one ``POST v1/SignIn`` with the given credentials.

        Raises:
            MissingParameterError: If Domain, Username or Password is empty
                (no request is sent).
            TransportError: If the network call fails.
        """
        body = normalize(definitions.SIGN_IN, credentials.to_wire())

        started = time.monotonic()
        try:
            response = await self._transport.request("POST", SIGN_IN_PATH, json=body)
        except NfieldError:
            self._record("error", started)
            raise

        result = SignInResult(status_code=response.status_code, body=response.body)
        self._record("success" if result.ok else "rejected", started)
        logger.debug(f"Sign-in returned {result.status_code}")
        return result

    def _record(self, outcome: str, started: float) -> None:
        if self._metrics is not None:
            self._metrics.sign_in(outcome, time.monotonic() - started)


__all__ = ["SIGN_IN_PATH", "Authenticator", "SignInResult"]
