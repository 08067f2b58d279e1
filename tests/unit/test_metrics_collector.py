"""
Unit tests for metrics aggregation and reporting.
"""

import json

import pandas as pd
import pytest

from bookbench.metrics import MetricsCollector, aggregate_worker_results
from bookbench.workload import WorkerRunResult


@pytest.fixture
def two_results():
    return [
        WorkerRunResult(10, 1_000_000_000, 10, 4, 5),
        WorkerRunResult(20, 2_000_000_000, 20, 6, 8),
    ]


class TestAggregateWorkerResults:
    """Test throughput and latency aggregation."""
    
    def test_two_workers(self, two_results):
        throughput, latency = aggregate_worker_results(two_results)
        
        assert throughput == pytest.approx(10 / 1e9 + 20 / 2e9)
        assert latency == pytest.approx((1e9 / 10 + 2e9 / 20) / 2)
    
    def test_single_worker(self):
        throughput, latency = aggregate_worker_results([WorkerRunResult(5, 500, 10, 0, 0)])
        assert throughput == pytest.approx(0.01)
        assert latency == pytest.approx(50.0)
    
    def test_zero_elapsed_contributes_no_throughput(self):
        results = [WorkerRunResult(5, 0, 10, 0, 0), WorkerRunResult(5, 100, 10, 0, 0)]
        throughput, _ = aggregate_worker_results(results)
        assert throughput == pytest.approx(0.05)
    
    def test_empty_results(self):
        with pytest.raises(ValueError):
            aggregate_worker_results([])


class TestMetricsCollector:
    """Test metric sinks and reports."""
    
    def test_lines_written_to_mode_sinks(self, tmp_path, two_results):
        collector = MetricsCollector({"output_dir": str(tmp_path)})
        collector.record_benchmark_point("local", 2, two_results)
        
        throughput, latency = aggregate_worker_results(two_results)
        assert (tmp_path / "fileT_local.txt").read_text() == f"{throughput}, 2\n"
        assert (tmp_path / "fileL_local.txt").read_text() == f"{latency}, 2\n"
        assert not (tmp_path / "fileT_http.txt").exists()
    
    def test_remote_sinks(self, tmp_path, two_results):
        collector = MetricsCollector({
            "output_dir": str(tmp_path),
            "throughput_remote_file": "t_remote.txt",
        })
        collector.record_benchmark_point("remote", 2, two_results)
        
        assert (tmp_path / "t_remote.txt").exists()
        assert (tmp_path / "fileL_http.txt").exists()
        assert not (tmp_path / "fileT_local.txt").exists()
    
    def test_lines_are_appended(self, tmp_path, two_results):
        sink = tmp_path / "fileT_local.txt"
        sink.write_text("0.5, 1\n")
        
        MetricsCollector({"output_dir": str(tmp_path)}).record_benchmark_point("local", 2, two_results)
        MetricsCollector({"output_dir": str(tmp_path)}).record_benchmark_point("local", 3, two_results)
        
        lines = sink.read_text().splitlines()
        assert lines[0] == "0.5, 1"
        assert [line.split(", ")[1] for line in lines] == ["1", "2", "3"]
        float(lines[1].split(", ")[0])
    
    def test_point_metrics(self, tmp_path, two_results):
        collector = MetricsCollector({"output_dir": str(tmp_path)})
        point = collector.record_benchmark_point("local", 2, two_results)
        
        assert point.total_runs == 30
        assert point.successful_interactions == 30
        assert point.success_rate == 1.0
        assert point.customer_interactions == 13
        assert point.customer_success_rate == pytest.approx(10 / 13)
        # Both workers have the same per-run latency
        assert point.latency_std_error_ns == pytest.approx(0.0)
    
    def test_summary_and_worker_frame(self, tmp_path, two_results):
        collector = MetricsCollector({"output_dir": str(tmp_path)})
        collector.record_benchmark_point("local", 2, two_results)
        collector.record_benchmark_point("remote", 2, two_results)
        
        summary = collector.generate_summary_report()
        assert summary["benchmark_points"] == 2
        assert set(summary["modes"]) == {"local", "remote"}
        
        df = collector.get_worker_results_df()
        assert isinstance(df, pd.DataFrame)
        assert len(df) == 4
        assert list(df["worker_id"]) == [0, 1, 0, 1]
    
    def test_empty_worker_frame(self, tmp_path):
        assert MetricsCollector({"output_dir": str(tmp_path)}).get_worker_results_df().empty
    
    def test_save_reports(self, tmp_path, two_results):
        summary_path = tmp_path / "out" / "summary.json"
        csv_path = tmp_path / "out" / "workers.csv"
        collector = MetricsCollector({
            "output_dir": str(tmp_path),
            "output_summary_json_path": str(summary_path),
            "output_workers_csv_path": str(csv_path),
        })
        collector.record_benchmark_point("local", 2, two_results)
        collector.save_reports()
        
        assert json.loads(summary_path.read_text())["benchmark_points"] == 1
        assert len(pd.read_csv(csv_path)) == 2
