# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client metrics for the Nfield client library.

This module provides:
1. ClientMetrics - Dataclass of plain counters kept per session
2. PrometheusClientMetrics - Prometheus counters and histograms shared by
   every session in the process

Usage:
    metrics = ClientMetrics()
    metrics.record_sign_in(succeeded=True)
    metrics.record_request(status_code=200)
    stats = metrics.get_stats()
"""

from __future__ import annotations

import logging
import threading
from collections import Counter as TallyCounter
from dataclasses import dataclass, field
from typing import Any

from prometheus_client import CollectorRegistry, Counter, Histogram

from .constants import (
    LATENCY_BUCKETS,
    REFRESHES_COALESCED_TOTAL,
    REQUESTS_SENT_TOTAL,
    SIGN_IN_DURATION_SECONDS,
    SIGN_INS_TOTAL,
)

logger = logging.getLogger(__name__)


@dataclass
class ClientMetrics:
    """
    Per-session counters for sign-ins and requests.

    Example:
        >>> metrics = ClientMetrics()
        >>> metrics.record_sign_in(succeeded=False)
        >>> metrics.sign_in_failures
        1
    """

    sign_ins: int = 0
    sign_in_failures: int = 0
    refreshes_coalesced: int = 0
    requests_sent: int = 0
    _status_codes: TallyCounter[int] = field(default_factory=TallyCounter, repr=False)

    def record_sign_in(self, succeeded: bool) -> None:
        self.sign_ins += 1
        if not succeeded:
            self.sign_in_failures += 1

    def record_coalesced_refresh(self) -> None:
        self.refreshes_coalesced += 1

    def record_request(self, status_code: int) -> None:
        self.requests_sent += 1
        self._status_codes[status_code] += 1

    def get_stats(self) -> dict[str, Any]:
        """Snapshot of all counters, suitable for JSON serialization."""
        return {
            "sign_ins": self.sign_ins,
            "sign_in_failures": self.sign_in_failures,
            "refreshes_coalesced": self.refreshes_coalesced,
            "requests_sent": self.requests_sent,
            "status_codes": {str(k): v for k, v in sorted(self._status_codes.items())},
        }

    def reset(self) -> None:
        self.sign_ins = 0
        self.sign_in_failures = 0
        self.refreshes_coalesced = 0
        self.requests_sent = 0
        self._status_codes.clear()


class PrometheusClientMetrics:
    """
    Prometheus metrics for the request pipeline.

    Metrics:
        - nfield_client_sign_ins_total{outcome}
        - nfield_client_refreshes_coalesced_total
        - nfield_client_requests_sent_total{method, status_code}
        - nfield_client_sign_in_duration_seconds
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """
        Initialize Prometheus client metrics.

        Args:
            registry: Optional CollectorRegistry. If None, uses the default registry.
        """
        kwargs: dict[str, Any] = {}
        if registry is not None:
            kwargs["registry"] = registry

        self.sign_ins = Counter(
            SIGN_INS_TOTAL,
            "Sign-in attempts against the Nfield API",
            ["outcome"],  # Values: success, rejected, error
            **kwargs,
        )
        self.refreshes_coalesced = Counter(
            REFRESHES_COALESCED_TOTAL,
            "Stale observers that awaited an in-flight refresh",
            **kwargs,
        )
        self.requests_sent = Counter(
            REQUESTS_SENT_TOTAL,
            "Authenticated requests sent to the Nfield API",
            ["method", "status_code"],
            **kwargs,
        )
        self.sign_in_duration_seconds = Histogram(
            SIGN_IN_DURATION_SECONDS,
            "Duration of the sign-in exchange",
            buckets=LATENCY_BUCKETS,
            **kwargs,
        )

        logger.info("Prometheus client metrics initialized")

    def observe_sign_in(self, outcome: str, duration_seconds: float) -> None:
        self.sign_ins.labels(outcome=outcome).inc()
        self.sign_in_duration_seconds.observe(duration_seconds)

    def observe_coalesced_refresh(self) -> None:
        self.refreshes_coalesced.inc()

    def observe_request(self, method: str, status_code: int) -> None:
        self.requests_sent.labels(method=method, status_code=str(status_code)).inc()


# Module-level singleton for Prometheus metrics
_prometheus_client_metrics: PrometheusClientMetrics | None = None
_prometheus_lock = threading.Lock()


def get_prometheus_client_metrics() -> PrometheusClientMetrics:
    """
    Get or create the Prometheus client metrics singleton.

    Double-checked locking prevents duplicate registration errors from
    prometheus_client when several sessions start at once.
    """
    global _prometheus_client_metrics

    if _prometheus_client_metrics is None:
        with _prometheus_lock:
            if _prometheus_client_metrics is None:
                _prometheus_client_metrics = PrometheusClientMetrics()

    return _prometheus_client_metrics


def reset_prometheus_client_metrics() -> None:
    """Reset the Prometheus client metrics singleton (mainly for testing)."""
    global _prometheus_client_metrics
    _prometheus_client_metrics = None


class MetricsRecorder:
    """
    Fan-out used by the pipeline: always updates the session's
    ClientMetrics, and the Prometheus metrics when enabled.
    """

    def __init__(self, prometheus: PrometheusClientMetrics | None = None) -> None:
        self.stats = ClientMetrics()
        self.prometheus = prometheus

    def sign_in(self, outcome: str, duration_seconds: float) -> None:
        self.stats.record_sign_in(succeeded=outcome == "success")
        if self.prometheus is not None:
            self.prometheus.observe_sign_in(outcome, duration_seconds)

    def coalesced_refresh(self) -> None:
        self.stats.record_coalesced_refresh()
        if self.prometheus is not None:
            self.prometheus.observe_coalesced_refresh()

    def request(self, method: str, status_code: int) -> None:
        self.stats.record_request(status_code)
        if self.prometheus is not None:
            self.prometheus.observe_request(method, status_code)


__all__ = [
    "ClientMetrics",
    "MetricsRecorder",
    "PrometheusClientMetrics",
    "get_prometheus_client_metrics",
    "reset_prometheus_client_metrics",
]
