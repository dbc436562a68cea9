# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the Nfield client library.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from NfieldError, making it easy to catch
all client-related exceptions with a single except clause.

Business-level HTTP errors (4xx/5xx on a payload call) are NOT exceptions:
they are returned as Response objects so callers can branch on status code.
"""

from typing import Any


class NfieldError(Exception):
    """Base exception for all Nfield client errors.

    Example:
        try:
            await session.survey_fieldwork.start("12345")
        except NfieldError as e:
            logger.error(f"Nfield call failed: {e}")
    """

    pass


class ConfigurationError(NfieldError):
    """Raised when the library is wired up incorrectly.

    This is a programming error in the calling layer, never a user error,
    and is not recoverable at runtime.

    Common causes include:
    - Requesting a parameter schema that was never registered
    - Registering a schema with an invalid definition or a duplicate name
    - Invalid ClientConfig values (non-positive windows, empty base URL)
    - Unknown option names passed to NfieldClient.defaults()

    Example:
        try:
            normalize("NoSuchOperation", {})
        except ConfigurationError as e:
            raise SystemExit(f"Integration bug: {e}")
    """

    pass


class MissingParameterError(NfieldError):
    """Raised when a required request parameter is absent or unusable.

    Always raised before any network I/O, and never retried internally.
    The caller recovers by supplying a corrected input.

    Attributes:
        field: Name of the offending parameter. The pseudo-field
            ``requestParams`` means the whole input was not usable.
        value: The value that was rejected (None when absent).

    Example:
        try:
            await session.survey_languages.add({"SurveyId": "s-1"})
        except MissingParameterError as e:
            print(f"Please provide {e.field}")
    """

    def __init__(self, message: str, field: str, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class AuthenticationFailedError(NfieldError):
    """Raised when the Nfield service rejects a sign-in.

    The pending business operation is abandoned; it is never attempted
    with a stale or absent token.

    Attributes:
        status_code: HTTP status code returned by ``POST v1/SignIn``.
        service_message: The ``Message`` field of the response body, if any.

    Example:
        try:
            session = await client.connect(credentials)
        except AuthenticationFailedError as e:
            if e.status_code == 401:
                prompt_for_new_password()
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        service_message: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.service_message = service_message

    @classmethod
    def from_sign_in(
        cls, status_code: int, service_message: str | None
    ) -> "AuthenticationFailedError":
        """Build the error from a rejected sign-in response."""
        return cls(
            f"{status_code}: {service_message}",
            status_code=status_code,
            service_message=service_message,
        )


class TransportError(NfieldError):
    """Raised when the network leg of a request fails.

    Wraps the underlying httpx exception (available as ``__cause__``).
    Timeouts, DNS failures and connection resets all surface as this
    error; the library does not classify or retry them.

    Attributes:
        method: HTTP method of the failed request.
        path: Request path relative to the base URL.

    Example:
        try:
            response = await session.surveys.get()
        except TransportError:
            await asyncio.sleep(5)
    """

    def __init__(
        self, message: str, method: str | None = None, path: str | None = None
    ):
        super().__init__(message)
        self.method = method
        self.path = path


class ClientClosedError(NfieldError):
    """Raised when a request is issued on a session that has been closed."""

    pass


__all__ = [
    "AuthenticationFailedError",
    "ClientClosedError",
    "ConfigurationError",
    "MissingParameterError",
    "NfieldError",
    "TransportError",
]
