"""Metrics aggregation and reporting for benchmark sweeps."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy import stats

from ..workload.models import WorkerRunResult
from .models import BenchmarkPointMetrics

logger = logging.getLogger(__name__)

DEFAULT_SINK_FILES = {
    "throughput_local_file": "fileT_local.txt",
    "latency_local_file": "fileL_local.txt",
    "throughput_remote_file": "fileT_http.txt",
    "latency_remote_file": "fileL_http.txt",
}


def aggregate_worker_results(results: Sequence[WorkerRunResult]) -> Tuple[float, float]:
    """Compute aggregate throughput and average latency over workers.
    
    Throughput is the sum of each worker's successful interactions per
    elapsed nanosecond. Latency is the mean of each worker's elapsed
    nanoseconds per measured run. A worker with zero elapsed time
    contributes zero throughput.
    
    Returns:
        (aggregate_throughput, average_latency_ns)
    """
    if not results:
        raise ValueError("Cannot aggregate an empty set of worker results")
    
    throughputs = [
        r.successful_interactions / r.elapsed_time_in_nano_secs if r.elapsed_time_in_nano_secs > 0 else 0.0
        for r in results
    ]
    latencies = [
        r.elapsed_time_in_nano_secs / r.total_runs if r.total_runs > 0 else 0.0
        for r in results
    ]
    return float(np.sum(throughputs)), float(np.mean(latencies))


class MetricsCollector:
    """Aggregates worker results per benchmark point and writes metric sinks."""
    
    def __init__(self, config: Dict[str, Any]):
        """Initialize the metrics collector.
        
        Args:
            config: Metrics configuration containing:
                - output_dir: Directory holding the metric sink files
                - throughput_local_file, latency_local_file,
                  throughput_remote_file, latency_remote_file: Sink file names
                - output_summary_json_path: Optional path for the JSON summary
                - output_workers_csv_path: Optional path for per-worker results
        """
        self.config = config
        self.output_dir = Path(config.get("output_dir", "."))
        self.sink_files = {
            key: self.output_dir / config.get(key, default)
            for key, default in DEFAULT_SINK_FILES.items()
        }
        
        self.benchmark_points: List[BenchmarkPointMetrics] = []
        self.worker_rows: List[Dict[str, Any]] = []
        
        logger.info(f"MetricsCollector initialized (output dir: {self.output_dir})")
    
    def sink_paths(self, mode: str) -> Tuple[Path, Path]:
        """Return the (throughput, latency) sink paths for an execution mode."""
        return (
            self.sink_files[f"throughput_{mode}_file"],
            self.sink_files[f"latency_{mode}_file"],
        )
    
    def record_benchmark_point(
        self, mode: str, num_threads: int, results: Sequence[WorkerRunResult]
    ) -> BenchmarkPointMetrics:
        """Aggregate the results of one benchmark point and append its metric lines."""
        throughput, latency = aggregate_worker_results(results)
        
        per_worker_latency = [r.elapsed_time_in_nano_secs / r.total_runs for r in results if r.total_runs > 0]
        latency_sem = float(stats.sem(per_worker_latency)) if len(per_worker_latency) > 1 else 0.0
        
        point = BenchmarkPointMetrics(
            mode=mode,
            num_threads=num_threads,
            aggregate_throughput=throughput,
            average_latency_ns=latency,
            latency_std_error_ns=latency_sem,
            total_runs=sum(r.total_runs for r in results),
            successful_interactions=sum(r.successful_interactions for r in results),
            customer_interactions=sum(r.total_frequent_book_store_interaction_runs for r in results),
            successful_customer_interactions=sum(
                r.successful_frequent_book_store_interaction_runs for r in results
            ),
        )
        self.benchmark_points.append(point)
        
        for worker_id, r in enumerate(results):
            self.worker_rows.append({
                "mode": mode,
                "num_threads": num_threads,
                "worker_id": worker_id,
                "successful_interactions": r.successful_interactions,
                "total_runs": r.total_runs,
                "elapsed_time_ns": r.elapsed_time_in_nano_secs,
                "successful_customer_interactions": r.successful_frequent_book_store_interaction_runs,
                "total_customer_interactions": r.total_frequent_book_store_interaction_runs,
            })
        
        throughput_path, latency_path = self.sink_paths(mode)
        self._append_metric_line(throughput_path, throughput, num_threads)
        self._append_metric_line(latency_path, latency, num_threads)
        
        logger.info(
            f"[{mode}] n={num_threads}: throughput={throughput:.6e} interactions/ns, "
            f"latency={latency:.1f} ns ({point.success_rate:.1%} successful)"
        )
        return point
    
    def _append_metric_line(self, path: Path, value: float, num_threads: int) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(f"{value}, {num_threads}\n")
    
    def generate_summary_report(self) -> Dict[str, Any]:
        """Generate a summary of every recorded benchmark point.
        
        Returns:
            Dictionary with one entry per point, grouped by execution mode
        """
        summary: Dict[str, Any] = {"benchmark_points": len(self.benchmark_points), "modes": {}}
        
        for point in self.benchmark_points:
            summary["modes"].setdefault(point.mode, []).append({
                "num_threads": point.num_threads,
                "aggregate_throughput": point.aggregate_throughput,
                "average_latency_ns": point.average_latency_ns,
                "latency_std_error_ns": point.latency_std_error_ns,
                "success_rate": point.success_rate,
                "customer_success_rate": point.customer_success_rate,
            })
        
        return summary
    
    def get_worker_results_df(self) -> pd.DataFrame:
        """Get all per-worker results as a pandas DataFrame."""
        if not self.worker_rows:
            return pd.DataFrame()
        return pd.DataFrame(self.worker_rows)
    
    def save_reports(self) -> Dict[str, Any]:
        """Write the optional JSON summary and per-worker CSV, return the summary."""
        summary = self.generate_summary_report()
        
        summary_path = self.config.get("output_summary_json_path")
        if summary_path:
            summary_file = Path(summary_path)
            summary_file.parent.mkdir(parents=True, exist_ok=True)
            with open(summary_file, "w") as f:
                json.dump(summary, f, indent=2)
            logger.info(f"Saved summary report to {summary_file}")
        
        csv_path = self.config.get("output_workers_csv_path")
        if csv_path:
            csv_file = Path(csv_path)
            csv_file.parent.mkdir(parents=True, exist_ok=True)
            self.get_worker_results_df().to_csv(csv_file, index=False)
            logger.info(f"Saved per-worker results to {csv_file}")
        
        return summary
