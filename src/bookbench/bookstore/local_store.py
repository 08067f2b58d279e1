"""In-process bookstore used for local benchmark runs."""

import logging
import threading
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

import numpy as np

from .exceptions import BookStoreError, InvalidArgumentError
from .interfaces import StockManager, Store
from .models import Book, BookCopy, StockBook

logger = logging.getLogger(__name__)


class InMemoryBookStore(Store, StockManager):
    """Thread-safe bookstore keeping its inventory in a dict keyed by ISBN.
    
    Every batch operation is validated in full before any change is applied,
    so a rejected batch leaves the inventory untouched. A single lock
    serializes all operations.
    """
    
    def __init__(self, seed: Optional[int] = None):
        self._books: Dict[int, StockBook] = {}
        self._lock = threading.RLock()
        self._rng = np.random.default_rng(seed)
    
    def get_books(self) -> List[StockBook]:
        with self._lock:
            return list(self._books.values())
    
    def add_books(self, books: Iterable[StockBook]) -> None:
        books = list(books)
        with self._lock:
            for book in books:
                self._validate_stock_book(book)
            # Same-batch duplicates are not rejected; the last one wins
            for book in books:
                self._books[book.isbn] = book
        logger.debug(f"Added {len(books)} books")
    
    def add_copies(self, book_copies: Iterable[BookCopy]) -> None:
        book_copies = list(book_copies)
        with self._lock:
            for copy in book_copies:
                self._validate_book_copy(copy)
            for copy in book_copies:
                book = self._books[copy.isbn]
                self._books[copy.isbn] = replace(book, num_copies=book.num_copies + copy.num_copies)
    
    def get_editor_picks(self, num_books: int) -> List[Book]:
        if num_books < 0:
            raise InvalidArgumentError(f"num_books = {num_books}, but it must be positive")
        
        with self._lock:
            picks = [book for book in self._books.values() if book.editor_pick]
            if len(picks) > num_books:
                indices = self._rng.choice(len(picks), size=num_books, replace=False)
                picks = [picks[i] for i in indices]
        
        return [book.to_book() for book in picks]
    
    def buy_books(self, books_to_buy: Iterable[BookCopy]) -> None:
        books_to_buy = list(books_to_buy)
        with self._lock:
            for copy in books_to_buy:
                self._validate_book_copy(copy)
            
            # Every short book records a sale miss before the purchase is refused
            sale_miss = False
            for copy in books_to_buy:
                book = self._books[copy.isbn]
                if book.num_copies < copy.num_copies:
                    self._books[copy.isbn] = replace(book, num_sale_misses=book.num_sale_misses + 1)
                    sale_miss = True
            if sale_miss:
                raise BookStoreError("Book not available: insufficient copies")
            
            for copy in books_to_buy:
                book = self._books[copy.isbn]
                self._books[copy.isbn] = replace(book, num_copies=book.num_copies - copy.num_copies)
    
    def _validate_stock_book(self, book: StockBook) -> None:
        if book.isbn <= 0:
            raise InvalidArgumentError(f"ISBN {book.isbn} is invalid")
        if book.num_copies < 1:
            raise InvalidArgumentError(f"Book {book.isbn}: number of copies {book.num_copies} is invalid")
        if book.price < 0:
            raise InvalidArgumentError(f"Book {book.isbn}: price {book.price} is invalid")
        if book.isbn in self._books:
            raise BookStoreError(f"ISBN {book.isbn} is a duplicate")
    
    def _validate_book_copy(self, copy: BookCopy) -> None:
        if copy.isbn <= 0:
            raise InvalidArgumentError(f"ISBN {copy.isbn} is invalid")
        if copy.num_copies < 1:
            raise InvalidArgumentError(f"Number of copies {copy.num_copies} is invalid")
        if copy.isbn not in self._books:
            raise BookStoreError(f"ISBN {copy.isbn} is not available")
