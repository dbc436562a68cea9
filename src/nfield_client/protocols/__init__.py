# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for pluggable client components.

Available protocols:
- TransportProtocol: Interface for the HTTP transport that sends requests
"""

from .transport import TransportProtocol

__all__ = ["TransportProtocol"]
