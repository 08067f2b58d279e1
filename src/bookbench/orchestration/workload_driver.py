"""Workload driver: sweeps concurrency levels and execution modes."""

import json
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
import yaml

from ..bookstore import (
    BookStoreHTTPProxy,
    InMemoryBookStore,
    StockManager,
    StockManagerHTTPProxy,
    Store,
)
from ..metrics import BenchmarkPointMetrics, MetricsCollector
from ..utils.config_validator import (
    VALID_MODES,
    BenchmarkConfigValidator,
    ConfigurationError,
)
from ..workload import BookSetGenerator, Worker, WorkerRunResult, WorkloadConfiguration

logger = logging.getLogger(__name__)

LOCAL_TEST_ENV_VAR = "BOOKBENCH_LOCAL_TEST"
DEFAULT_SERVER_ADDRESS = "http://localhost:8081"


class BenchmarkPointError(Exception):
    """Raised when a benchmark point cannot produce a measurement."""
    
    def __init__(self, mode: str, num_threads: int, reason: str):
        self.mode = mode
        self.num_threads = num_threads
        super().__init__(f"Benchmark point (mode={mode}, threads={num_threads}) failed: {reason}")


def initialize_bookstore_data(stock_manager: StockManager, num_books: int,
                              seed: Optional[int] = None) -> None:
    """Populate the bookstore with random books before workers start."""
    generator = BookSetGenerator(seed)
    stock_manager.add_books(generator.next_set_of_stock_books(num_books))


class WorkloadDriver:
    """Runs the benchmark matrix of execution modes and concurrency levels.
    
    For each benchmark point the driver builds fresh collaborators, seeds
    them, runs ``n`` workers on a dedicated thread pool, joins them and
    hands the results to the metrics collector.
    """
    
    def __init__(self, config_data: Dict[str, Any],
                 collaborator_factory: Optional[Callable[[str], Tuple[Store, StockManager]]] = None):
        """Initialize the driver with benchmark configuration.
        
        Args:
            config_data: Benchmark configuration dictionary
            collaborator_factory: Optional override returning (store, stock_manager)
                for an execution mode
        """
        self.config = config_data
        self._validate_config()
        
        benchmark = self.config.get("benchmark") or {}
        self.max_threads: int = benchmark.get("max_threads", 10)
        self.threads_step: int = benchmark.get("threads_step", 1)
        self.initial_num_books: int = benchmark.get("initial_num_books", 100)
        self.random_seed: Optional[int] = benchmark.get("random_seed")
        self.modes: List[str] = self._resolve_modes(benchmark)
        
        remote = self.config.get("remote") or {}
        self.server_address: str = remote.get("server_address", DEFAULT_SERVER_ADDRESS)
        self.timeout_s: float = remote.get("timeout_s", 30.0)
        
        self.workload_config: Dict[str, Any] = self.config.get("workload") or {}
        self.metrics_collector = MetricsCollector(self.config.get("metrics_config") or {})
        self._collaborator_factory = collaborator_factory or self._create_collaborators
        
        logger.info("WorkloadDriver initialized")
    
    def _validate_config(self) -> None:
        is_valid, errors = BenchmarkConfigValidator.validate(self.config)
        if not is_valid:
            raise ConfigurationError("; ".join(errors))
    
    def _resolve_modes(self, benchmark: Dict[str, Any]) -> List[str]:
        """Apply the local-test override, if any, to the configured sweep order."""
        local_test = benchmark.get("local_test")
        env_value = os.environ.get(LOCAL_TEST_ENV_VAR)
        if env_value is not None:
            local_test = env_value.strip().lower() in ("1", "true", "yes")
        
        if local_test is None:
            return list(benchmark.get("modes", VALID_MODES))
        
        mode = "local" if local_test else "remote"
        logger.info(f"Execution mode overridden to '{mode}'")
        return [mode]
    
    def _create_collaborators(self, mode: str) -> Tuple[Store, StockManager]:
        if mode == "local":
            store = InMemoryBookStore(seed=self.random_seed)
            return store, store
        
        book_store = BookStoreHTTPProxy(self.server_address, timeout_s=self.timeout_s)
        stock_manager = StockManagerHTTPProxy(f"{self.server_address}/stock", timeout_s=self.timeout_s)
        return book_store, stock_manager
    
    def _derive_seeds(self, mode: str, num_threads: int, count: int) -> List[Optional[int]]:
        if self.random_seed is None:
            return [None] * count
        seed_seq = np.random.SeedSequence([self.random_seed, VALID_MODES.index(mode), num_threads])
        return [int(s) for s in seed_seq.generate_state(count)]
    
    def run(self) -> Dict[str, Any]:
        """Run every benchmark point of the sweep.
        
        Returns:
            Summary report dictionary
            
        Raises:
            BenchmarkPointError: If a point fails; earlier points stay recorded
        """
        logger.info("=" * 60)
        logger.info("STARTING BENCHMARK SWEEP")
        logger.info("=" * 60)
        logger.info(f"Modes: {self.modes}, threads: 1..{self.max_threads} step {self.threads_step}")
        
        for mode in self.modes:
            for num_threads in range(1, self.max_threads + 1, self.threads_step):
                self.run_benchmark_point(mode, num_threads)
        
        summary = self.metrics_collector.save_reports()
        
        logger.info("=" * 60)
        logger.info("BENCHMARK SWEEP COMPLETED")
        logger.info("=" * 60)
        
        return summary
    
    def run_benchmark_point(self, mode: str, num_threads: int) -> BenchmarkPointMetrics:
        """Run ``num_threads`` concurrent workers for one execution mode."""
        logger.info(f"Running benchmark point: mode={mode}, threads={num_threads}")
        
        book_store, stock_manager = self._collaborator_factory(mode)
        try:
            results = self._run_workers(mode, num_threads, book_store, stock_manager)
        finally:
            book_store.stop()
            stock_manager.stop()
        
        return self.metrics_collector.record_benchmark_point(mode, num_threads, results)
    
    def _run_workers(
        self, mode: str, num_threads: int, book_store: Store, stock_manager: StockManager
    ) -> List[WorkerRunResult]:
        seeds = self._derive_seeds(mode, num_threads, 2 * num_threads + 1)
        
        try:
            initialize_bookstore_data(stock_manager, self.initial_num_books, seeds[0])
        except Exception as e:
            raise BenchmarkPointError(mode, num_threads, f"seeding the bookstore failed: {e}") from e
        
        workers = []
        for i in range(num_threads):
            config = WorkloadConfiguration.from_dict(
                self.workload_config, book_store, stock_manager, seed=seeds[2 * i + 1]
            )
            workers.append(Worker(config, worker_id=i, seed=seeds[2 * i + 2]))
        
        executor = ThreadPoolExecutor(max_workers=num_threads, thread_name_prefix=f"worker-{mode}")
        try:
            futures = [executor.submit(worker) for worker in workers]
            results = []
            for worker_id, future in enumerate(futures):
                try:
                    results.append(future.result())
                except Exception as e:
                    raise BenchmarkPointError(
                        mode, num_threads, f"worker {worker_id} crashed: {e!r}"
                    ) from e
        finally:
            executor.shutdown(wait=True, cancel_futures=True)
        
        return results
    
    @classmethod
    def from_yaml_file(cls, config_path: str) -> "WorkloadDriver":
        """Create a driver from a YAML configuration file.
        
        Args:
            config_path: Path to YAML configuration file
            
        Returns:
            WorkloadDriver instance
        """
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
        
        return cls(config_data)
    
    @classmethod
    def from_json_file(cls, config_path: str) -> "WorkloadDriver":
        """Create a driver from a JSON configuration file."""
        with open(config_path, "r") as f:
            config_data = json.load(f)
        
        return cls(config_data)
