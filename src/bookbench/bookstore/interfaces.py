"""Capability interfaces consumed by the workload engine.

Workers and the driver depend only on these abstract classes. Concrete
bindings are the in-process ``InMemoryBookStore`` and the HTTP proxies.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List

from .models import Book, BookCopy, StockBook


class Store(ABC):
    """Customer-facing side of the bookstore."""
    
    @abstractmethod
    def buy_books(self, books_to_buy: Iterable[BookCopy]) -> None:
        """Buy the requested copies, all or nothing.
        
        Raises:
            BookStoreError: If any ISBN is unknown or has too few copies
        """
        pass
    
    @abstractmethod
    def get_editor_picks(self, num_books: int) -> List[Book]:
        """Return up to ``num_books`` books flagged as editor picks."""
        pass
    
    def stop(self) -> None:
        """Release any held resources. In-process stores hold none."""
        pass


class StockManager(ABC):
    """Inventory side of the bookstore."""
    
    @abstractmethod
    def get_books(self) -> List[StockBook]:
        """Return the full current stock listing."""
        pass
    
    @abstractmethod
    def add_books(self, books: Iterable[StockBook]) -> None:
        """Add new books, all or nothing.
        
        Raises:
            BookStoreError: If a book is invalid or its ISBN already exists
        """
        pass
    
    @abstractmethod
    def add_copies(self, book_copies: Iterable[BookCopy]) -> None:
        """Add copies to existing books, all or nothing.
        
        Raises:
            BookStoreError: If an ISBN is unknown or a count is not positive
        """
        pass
    
    def stop(self) -> None:
        """Release any held resources. In-process stores hold none."""
        pass
