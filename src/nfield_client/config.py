# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client configuration for the Nfield client library.

This module provides the configuration dataclass shared by the transport,
the token manager and the background refresher. Configuration is built in
code; no file loading happens here.
"""

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any

from .exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.nfieldmr.com/"
"""Production Nfield API endpoint."""

REFRESH_WINDOW_SECONDS = 12 * 60.0
"""Age after which a bearer token is considered stale.

Shorter than the service's 15-minute token lifetime to leave margin for
clock skew and in-flight requests.
"""

REFRESH_WINDOW_MS = int(REFRESH_WINDOW_SECONDS * 1000)


def _default_headers() -> dict[str, str]:
    return {"Content-Type": "application/json"}


@dataclass
class ClientConfig:
    """
    Configuration for an Nfield client and the sessions it creates.
    """

    # === Transport ===

    base_url: str = DEFAULT_BASE_URL
    """Base URL every request path is resolved against."""

    timeout: float = 30.0
    """Request timeout in seconds."""

    headers: dict[str, str] = field(default_factory=_default_headers)
    """Headers sent with every request."""

    transport_options: dict[str, Any] = field(default_factory=dict)
    """Extra keyword arguments for ``httpx.AsyncClient``."""

    # === Token Lifecycle ===

    refresh_window: float = REFRESH_WINDOW_SECONDS
    """Seconds after acquisition at which a token is treated as stale."""

    refresh_interval: float = REFRESH_WINDOW_SECONDS
    """Cadence of the optional background refresher in seconds."""

    # === Metrics and Monitoring ===

    metrics_enabled: bool = False
    """Record Prometheus metrics for sign-ins and requests."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.base_url:
            raise ConfigurationError("base_url must not be empty")
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if self.refresh_window <= 0:
            raise ConfigurationError("refresh_window must be positive")
        if self.refresh_interval <= 0:
            raise ConfigurationError("refresh_interval must be positive")
        if not isinstance(self.headers, Mapping):
            raise ConfigurationError("headers must be a mapping")
        if not isinstance(self.transport_options, Mapping):
            raise ConfigurationError("transport_options must be a mapping")

    def merged(self, options: Mapping[str, Any]) -> "ClientConfig":
        """
        Return a new config with ``options`` deep-merged over this one.

        Nested mappings (``headers``, ``transport_options``) are merged key by
        key; any other value replaces the current one. The receiver is never
        modified.

        Raises:
            ConfigurationError: If ``options`` is not a mapping or names an
                unknown configuration field.
        """
        if not isinstance(options, Mapping):
            raise ConfigurationError("options must be a mapping of config fields")

        known = {f.name for f in fields(self)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ConfigurationError(f"Unknown config options: {', '.join(unknown)}")

        changes: dict[str, Any] = {}
        for name, value in options.items():
            current = getattr(self, name)
            if isinstance(current, Mapping) and isinstance(value, Mapping):
                changes[name] = deep_merge(current, value)
            else:
                changes[name] = copy.deepcopy(value)

        # replace() keeps untouched mutable fields shared; copy them too
        for name in ("headers", "transport_options"):
            changes.setdefault(name, copy.deepcopy(getattr(self, name)))

        return replace(self, **changes)


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    result = copy.deepcopy(dict(base))
    for key, value in override.items():
        existing = result.get(key)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(existing, value)
        else:
            result[key] = copy.deepcopy(value)
    return result


__all__ = [
    "DEFAULT_BASE_URL",
    "REFRESH_WINDOW_MS",
    "REFRESH_WINDOW_SECONDS",
    "ClientConfig",
    "deep_merge",
]
