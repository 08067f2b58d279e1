"""Bookstore capability interfaces and their local and remote bindings."""

from .exceptions import BookStoreError, InvalidArgumentError, OutOfRangeError
from .http_proxy import BookStoreHTTPProxy, StockManagerHTTPProxy
from .interfaces import StockManager, Store
from .local_store import InMemoryBookStore
from .models import Book, BookCopy, StockBook

__all__ = [
    "Book",
    "BookCopy",
    "StockBook",
    "Store",
    "StockManager",
    "InMemoryBookStore",
    "BookStoreHTTPProxy",
    "StockManagerHTTPProxy",
    "BookStoreError",
    "InvalidArgumentError",
    "OutOfRangeError",
]
