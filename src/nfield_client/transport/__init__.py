# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""HTTP transport implementations."""

from .httpx_transport import HttpxTransport, build_async_client, decode_body

__all__ = ["HttpxTransport", "build_async_client", "decode_body"]
