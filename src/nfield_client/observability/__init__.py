# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability and metrics for the Nfield client.

Classes:
    ClientMetrics: Per-session plain counters.
    PrometheusClientMetrics: Process-wide Prometheus counters and histograms.
    MetricsRecorder: Fan-out to both, used by the request pipeline.

Functions:
    get_prometheus_client_metrics: Get or create the Prometheus metrics singleton.
    reset_prometheus_client_metrics: Reset the Prometheus metrics singleton.
"""

from .constants import (
    LATENCY_BUCKETS,
    METRIC_PREFIX,
    REFRESHES_COALESCED_TOTAL,
    REQUESTS_SENT_TOTAL,
    SIGN_IN_DURATION_SECONDS,
    SIGN_INS_TOTAL,
)
from .metrics import (
    ClientMetrics,
    MetricsRecorder,
    PrometheusClientMetrics,
    get_prometheus_client_metrics,
    reset_prometheus_client_metrics,
)

__all__ = [
    "LATENCY_BUCKETS",
    "METRIC_PREFIX",
    "REFRESHES_COALESCED_TOTAL",
    "REQUESTS_SENT_TOTAL",
    "SIGN_INS_TOTAL",
    "SIGN_IN_DURATION_SECONDS",
    "ClientMetrics",
    "MetricsRecorder",
    "PrometheusClientMetrics",
    "get_prometheus_client_metrics",
    "reset_prometheus_client_metrics",
]
