"""Metrics collection and reporting module."""

from .collector import MetricsCollector, aggregate_worker_results
from .models import BenchmarkPointMetrics

__all__ = ["MetricsCollector", "BenchmarkPointMetrics", "aggregate_worker_results"]
