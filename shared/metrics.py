"""
Shared metrics configuration for the permission engine.
"""

import time
import threading
from contextlib import contextmanager
from typing import Dict, Any, Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, Info


class MetricsCollector:
    """Centralized metrics collector for services."""

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        # Private registry unless one is shared explicitly; avoids duplicate
        # registration when several collectors live in one process.
        self.registry = registry if registry is not None else CollectorRegistry()
        self._metrics: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up common metrics for the service."""
        with self._lock:
            self._metrics["service_info"] = Info(
                "service_info",
                "Service information",
                registry=self.registry
            )
            self._metrics["service_info"].info({
                "service": self.service_name,
                "version": "1.0.0"
            })

            self._metrics["errors_total"] = Counter(
                "errors_total",
                "Total errors",
                ["error_type", "service"],
                registry=self.registry
            )

            self._metrics["permission_checks_total"] = Counter(
                "permission_checks_total",
                "Total permission checks",
                ["family", "decision"],
                registry=self.registry
            )

            self._metrics["permission_check_duration_seconds"] = Histogram(
                "permission_check_duration_seconds",
                "Permission check duration in seconds",
                ["operation"],
                registry=self.registry
            )

            self._metrics["role_management_checks_total"] = Counter(
                "role_management_checks_total",
                "Total role management checks",
                ["operation", "decision"],
                registry=self.registry
            )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def record_permission_check(self, family: str, allowed: bool):
        """Record a single permission decision."""
        self._metrics["permission_checks_total"].labels(
            family=family,
            decision="allow" if allowed else "deny"
        ).inc()

    def record_role_management_check(self, operation: str, allowed: bool):
        """Record a role management decision."""
        self._metrics["role_management_checks_total"].labels(
            operation=operation,
            decision="allow" if allowed else "deny"
        ).inc()

    def record_error(self, error_type: str, service: Optional[str] = None):
        """Record error metrics."""
        service_name = service or self.service_name
        self._metrics["errors_total"].labels(error_type=error_type, service=service_name).inc()

    @contextmanager
    def time_operation(self, operation_name: str, **labels):
        """Context manager to time an operation."""
        start_time = time.perf_counter()
        try:
            yield
        finally:
            duration = time.perf_counter() - start_time
            if operation_name in self._metrics:
                self._metrics[operation_name].labels(**labels).observe(duration)

    def sample_value(self, name: str, labels: Optional[Dict[str, str]] = None) -> float:
        """Read back a sample from the registry (0.0 when absent)."""
        value = self.registry.get_sample_value(name, labels or {})
        return value if value is not None else 0.0


def get_metrics_collector(service_name: str, registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get a metrics collector for a service."""
    return MetricsCollector(service_name, registry)
