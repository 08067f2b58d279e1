"""Data models for metrics collection."""

from dataclasses import dataclass


@dataclass
class BenchmarkPointMetrics:
    """Aggregated metrics for one (execution mode, concurrency level) pair."""
    
    mode: str  # "local" or "remote"
    num_threads: int
    
    # Sum over workers of successful interactions per nanosecond
    aggregate_throughput: float
    # Mean over workers of nanoseconds per measured interaction
    average_latency_ns: float
    
    latency_std_error_ns: float = 0.0
    total_runs: int = 0
    successful_interactions: int = 0
    customer_interactions: int = 0
    successful_customer_interactions: int = 0
    
    @property
    def success_rate(self) -> float:
        return self.successful_interactions / self.total_runs if self.total_runs > 0 else 0.0
    
    @property
    def customer_success_rate(self) -> float:
        if self.customer_interactions == 0:
            return 0.0
        return self.successful_customer_interactions / self.customer_interactions
