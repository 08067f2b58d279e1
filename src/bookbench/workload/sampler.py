"""Randomized ISBN sampling and synthetic stock generation."""

import logging
from typing import Iterable, Optional, Set

import numpy as np

from ..bookstore.exceptions import InvalidArgumentError
from ..bookstore.models import StockBook

logger = logging.getLogger(__name__)

MAX_ISBN = 99_999_999
PROPERTY_BOUND = 10
MAX_COUNTER_VALUE = 2**31 - 1


class BookSetGenerator:
    """Generates ISBN samples and random stock books.
    
    Each instance owns its own random generator, so instances can be used
    from different threads without sharing state.
    """
    
    def __init__(self, seed: Optional[int] = None):
        """Initialize the generator with an optional random seed.
        
        Args:
            seed: Random seed for reproducibility
        """
        self.rng = np.random.default_rng(seed)
        self.books_generated = 0
    
    def sample_from_set_of_isbns(self, isbns: Iterable[int], num: int) -> Set[int]:
        """Return ``num`` distinct ISBNs drawn uniformly from ``isbns``.
        
        Each draw picks a uniform index over the keys still in the pool and
        removes the picked key, so exactly ``num`` draws are made. The
        caller's collection is not modified.
        
        Args:
            isbns: Universe of ISBNs to sample from
            num: Number of ISBNs to select
            
        Returns:
            Set of ``num`` selected ISBNs
            
        Raises:
            InvalidArgumentError: If ``num`` exceeds the number of ISBNs
        """
        pool = list(set(isbns))
        if num > len(pool):
            raise InvalidArgumentError(
                f"requested sample size exceeds universe size ({num} > {len(pool)})"
            )
        if num < 0:
            raise InvalidArgumentError(f"requested sample size {num} is negative")
        
        selected = set()
        remaining = len(pool)
        for _ in range(num):
            index = int(self.rng.integers(remaining))
            selected.add(pool[index])
            # Swap the picked key out of the live region of the pool
            remaining -= 1
            pool[index] = pool[remaining]
        
        return selected
    
    def next_set_of_stock_books(self, num: int) -> Set[StockBook]:
        """Return ``num`` randomly generated stock books.
        
        ISBNs are drawn independently, so collisions between books are
        possible and are not removed.
        """
        books = set()
        for _ in range(num):
            book = StockBook(
                isbn=int(self.rng.integers(1, MAX_ISBN)),
                title=str(self.rng.integers(PROPERTY_BOUND)),
                author=str(self.rng.integers(PROPERTY_BOUND)),
                price=float(self.rng.random()) + 1.0,
                num_copies=int(self.rng.integers(PROPERTY_BOUND)) + 1,
                num_sale_misses=int(self.rng.integers(MAX_COUNTER_VALUE)),
                num_times_rated=int(self.rng.integers(MAX_COUNTER_VALUE)),
                total_rating=int(self.rng.integers(MAX_COUNTER_VALUE)),
                editor_pick=bool(self.rng.random() < 0.5),
            )
            books.add(book)
            self.books_generated += 1
        
        logger.debug(f"Generated {num} stock books ({self.books_generated} total)")
        return books
