"""Worker: a single simulated bookstore client."""

import logging
import time
from typing import List, Optional, Set

import numpy as np

from ..bookstore.exceptions import BookStoreError, OutOfRangeError
from ..bookstore.models import BookCopy, StockBook
from .models import WorkerRunResult, WorkloadConfiguration

logger = logging.getLogger(__name__)


class Worker:
    """Runs the configured interaction mix against the bookstore.
    
    A worker first performs ``warm_up_runs`` interactions whose outcomes are
    discarded, then ``num_actual_runs`` measured interactions. Each
    interaction is chosen by a uniform draw in [0, 100) against the
    configured percentages:
    
    - rare stock manager interaction (new stock acquisition)
    - frequent stock manager interaction (replenishment)
    - customer interaction (purchase of editor picks)
    
    A ``BookStoreError`` fails only the current iteration. Any other
    exception propagates and aborts the worker.
    
    Usage:
        worker = Worker(config)
        result = worker.run()
    """
    
    def __init__(self, config: WorkloadConfiguration, worker_id: int = 0,
                 seed: Optional[int] = None):
        self.config = config
        self.worker_id = worker_id
        self.rng = np.random.default_rng(seed)
        
        self._num_successful_frequent_book_store_interaction = 0
        self._num_total_frequent_book_store_interaction = 0
    
    def __call__(self) -> WorkerRunResult:
        return self.run()
    
    def run(self) -> WorkerRunResult:
        """Run the warmup and measured phases and return the measured result."""
        logger.debug(f"Worker {self.worker_id} started")
        
        for _ in range(self.config.warm_up_runs):
            self.run_interaction(self._choose_interaction())
        
        self._num_successful_frequent_book_store_interaction = 0
        self._num_total_frequent_book_store_interaction = 0
        successful_interactions = 0
        
        start_time_ns = time.perf_counter_ns()
        for _ in range(self.config.num_actual_runs):
            if self.run_interaction(self._choose_interaction()):
                successful_interactions += 1
        elapsed_ns = time.perf_counter_ns() - start_time_ns
        
        result = WorkerRunResult(
            successful_interactions=successful_interactions,
            elapsed_time_in_nano_secs=elapsed_ns,
            total_runs=self.config.num_actual_runs,
            successful_frequent_book_store_interaction_runs=self._num_successful_frequent_book_store_interaction,
            total_frequent_book_store_interaction_runs=self._num_total_frequent_book_store_interaction,
        )
        logger.debug(
            f"Worker {self.worker_id} finished: {successful_interactions}/{result.total_runs} "
            f"successful in {elapsed_ns / 1e9:.3f}s"
        )
        return result
    
    def _choose_interaction(self) -> float:
        return float(self.rng.random()) * 100.0
    
    def run_interaction(self, choose_interaction: float) -> bool:
        """Run the interaction selected by ``choose_interaction`` in [0, 100).
        
        Returns:
            True if the interaction completed without a bookstore error
        """
        percent_rare = self.config.percent_rare_stock_manager_interaction
        percent_frequent = self.config.percent_frequent_stock_manager_interaction
        
        try:
            if choose_interaction < percent_rare:
                self.run_rare_stock_manager_interaction()
            elif choose_interaction < percent_rare + percent_frequent:
                self.run_frequent_stock_manager_interaction()
            else:
                self._num_total_frequent_book_store_interaction += 1
                self.run_frequent_book_store_interaction()
                self._num_successful_frequent_book_store_interaction += 1
        except BookStoreError as e:
            logger.debug(f"Worker {self.worker_id} interaction failed: {e}")
            return False
        return True
    
    def run_rare_stock_manager_interaction(self) -> None:
        """Add freshly generated books whose ISBNs are not in stock yet."""
        books_in_store = self.config.stock_manager.get_books()
        random_books = self.config.book_set_generator.next_set_of_stock_books(
            self.config.num_books_to_add
        )
        
        # Candidates are checked against the listing only, not each other
        books_to_add: Set[StockBook] = set()
        for book in random_books:
            if not any(book.isbn == in_store.isbn for in_store in books_in_store):
                books_to_add.add(book)
        
        self.config.stock_manager.add_books(books_to_add)
    
    def run_frequent_stock_manager_interaction(self) -> None:
        """Add copies to the books with the fewest copies in stock."""
        books_in_store: List[StockBook] = sorted(
            self.config.stock_manager.get_books(), key=lambda book: book.num_copies
        )
        
        num_books = self.config.num_books_with_least_copies
        if num_books > len(books_in_store):
            raise OutOfRangeError(
                f"cannot replenish {num_books} books, only {len(books_in_store)} in stock"
            )
        
        copies_to_add = {
            BookCopy(book.isbn, self.config.num_add_copies)
            for book in books_in_store[:num_books]
        }
        self.config.stock_manager.add_copies(copies_to_add)
    
    def run_frequent_book_store_interaction(self) -> None:
        """Buy a random subset of the editor picks."""
        books = self.config.book_store.get_editor_picks(self.config.num_editor_picks_to_get)
        
        isbns = {book.isbn for book in books}
        isbns_subset = self.config.book_set_generator.sample_from_set_of_isbns(
            isbns, self.config.num_books_to_buy
        )
        
        books_to_buy = {
            BookCopy(book.isbn, self.config.num_book_copies_to_buy)
            for book in books if book.isbn in isbns_subset
        }
        self.config.book_store.buy_books(books_to_buy)
