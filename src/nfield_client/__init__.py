# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Nfield Client - Async client for the Nfield survey-management API.

This library signs in to the Nfield API, keeps the bearer token fresh and
validates request parameters before anything is sent over the network.

Key Features:
    - Transparent token refresh before the 15-minute token lifetime runs out
    - Single-flight refresh: concurrent calls share one sign-in
    - Optional background refresher for long-lived sessions
    - Schema-driven parameter validation with bare-id shorthand
    - Business error responses returned as data, never raised

Quick Start:
    >>> from nfield_client import NfieldClient
    >>>
    >>> client = NfieldClient()
    >>> async with await client.connect(
    ...     {"Domain": "acme", "Username": "jo", "Password": "..."}
    ... ) as session:
    ...     response = await session.survey_fieldwork.stop("12345")
    ...     print(response.status_code, response.body)

Main Exports:
    - NfieldClient, ConnectedSession: Client facade
    - ClientConfig: Configuration options
    - normalize, ParameterSchema, SchemaRegistry: Parameter validation
    - Token, TokenManager, PersistentRefresher: Token lifecycle
    - RequestDispatcher, Authenticator: Request pipeline
    - NfieldError and subclasses: Error taxonomy

Version: 1.0.0
"""

__version__ = "1.0.0"

from .auth import (
    Authenticator,
    PersistentRefresher,
    SignInResult,
    TokenManager,
)
from .client import ConnectedSession, NfieldClient
from .config import (
    DEFAULT_BASE_URL,
    REFRESH_WINDOW_MS,
    REFRESH_WINDOW_SECONDS,
    ClientConfig,
)
from .dispatcher import RequestDispatcher
from .endpoints import ENDPOINTS, Endpoint
from .exceptions import (
    AuthenticationFailedError,
    ClientClosedError,
    ConfigurationError,
    MissingParameterError,
    NfieldError,
    TransportError,
)
from .params import (
    OPTIONAL,
    REQUIRED,
    ParameterSchema,
    SchemaRegistry,
    default_registry,
    define_schema,
    normalize,
)
from .protocols import TransportProtocol
from .transport import HttpxTransport
from .types import (
    Credentials,
    RequestDescriptor,
    Response,
    Token,
    is_stale,
)

__all__ = [
    "DEFAULT_BASE_URL",
    # Endpoints
    "ENDPOINTS",
    # Params
    "OPTIONAL",
    "REFRESH_WINDOW_MS",
    "REFRESH_WINDOW_SECONDS",
    "REQUIRED",
    "AuthenticationFailedError",
    # Auth
    "Authenticator",
    "ClientClosedError",
    # Config
    "ClientConfig",
    "ConfigurationError",
    # Client
    "ConnectedSession",
    # Types
    "Credentials",
    "Endpoint",
    # Transport
    "HttpxTransport",
    "MissingParameterError",
    "NfieldClient",
    # Exceptions
    "NfieldError",
    "ParameterSchema",
    "PersistentRefresher",
    "RequestDescriptor",
    "RequestDispatcher",
    "Response",
    "SchemaRegistry",
    "SignInResult",
    "Token",
    "TokenManager",
    "TransportError",
    "TransportProtocol",
    "default_registry",
    "define_schema",
    "is_stale",
    "normalize",
]
