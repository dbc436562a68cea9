# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Sign-in credentials for the Nfield service.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Credentials:
    """
    Domain, user name and password used for ``POST v1/SignIn``.

    Supplied once by the caller and immutable for the lifetime of a client
    session. The password is excluded from ``repr`` so credentials can be
    passed through logging and tracebacks safely.

    Attributes:
        domain: Nfield domain name
        username: User name within the domain
        password: Password for the user (never rendered)
    """

    domain: str
    username: str
    password: str = field(repr=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Credentials":
        """Build credentials from a ``{Domain, Username, Password}`` mapping."""
        return cls(
            domain=data.get("Domain", ""),
            username=data.get("Username", ""),
            password=data.get("Password", ""),
        )

    def to_wire(self) -> dict[str, str]:
        """Body of the sign-in request."""
        return {
            "Domain": self.domain,
            "Username": self.username,
            "Password": self.password,
        }


__all__ = ["Credentials"]
