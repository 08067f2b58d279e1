"""Benchmark orchestration module."""

from .workload_driver import BenchmarkPointError, WorkloadDriver, initialize_bookstore_data

__all__ = ["WorkloadDriver", "BenchmarkPointError", "initialize_bookstore_data"]
