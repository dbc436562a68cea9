# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Type definitions shared across the client."""

from .credentials import Credentials
from .request import RequestDescriptor, Response
from .token import Token, is_stale

__all__ = [
    "Credentials",
    "RequestDescriptor",
    "Response",
    "Token",
    "is_stale",
]
