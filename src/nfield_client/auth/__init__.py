# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Authentication: sign-in, token refresh coordination and background refresh."""

from .authenticator import SIGN_IN_PATH, Authenticator, SignInResult
from .coordinator import TokenManager
from .refresher import ErrorHandler, PersistentRefresher

__all__ = [
    "SIGN_IN_PATH",
    "Authenticator",
    "ErrorHandler",
    "PersistentRefresher",
    "SignInResult",
    "TokenManager",
]
