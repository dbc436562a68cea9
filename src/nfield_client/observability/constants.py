# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metric name constants following Prometheus naming conventions.

Naming Conventions:
    - Counter metrics end with `_total`
    - Histogram metrics for time end with `_seconds`

Label Best Practices:
    Use only categorical labels: `method`, `status_code`, `outcome`.
    NEVER label by survey id, user name or token (unbounded, and sensitive).
"""

METRIC_PREFIX = "nfield_client"
"""Prefix for all Prometheus metrics in this library."""

SIGN_INS_TOTAL = f"{METRIC_PREFIX}_sign_ins_total"
"""Sign-in attempts, labelled by outcome (success, rejected, error)."""

REFRESHES_COALESCED_TOTAL = f"{METRIC_PREFIX}_refreshes_coalesced_total"
"""Stale observers that joined an in-flight refresh instead of signing in."""

REQUESTS_SENT_TOTAL = f"{METRIC_PREFIX}_requests_sent_total"
"""Authenticated requests sent, labelled by method and status code."""

SIGN_IN_DURATION_SECONDS = f"{METRIC_PREFIX}_sign_in_duration_seconds"
"""Latency of the sign-in exchange."""

LATENCY_BUCKETS = (0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)
"""Histogram buckets for request latency (seconds)."""


__all__ = [
    "LATENCY_BUCKETS",
    "METRIC_PREFIX",
    "REFRESHES_COALESCED_TOTAL",
    "REQUESTS_SENT_TOTAL",
    "SIGN_INS_TOTAL",
    "SIGN_IN_DURATION_SECONDS",
]
