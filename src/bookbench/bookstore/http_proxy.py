"""HTTP proxies for running the workload against a remote bookstore server.

Requests are JSON bodies POSTed to ``<address>/<operation>``. The server
answers with ``{"result": ..., "error": null}`` or ``{"error": "<message>"}``.
"""

import logging
from typing import Any, Iterable, List, Optional

import requests

from .exceptions import BookStoreError
from .interfaces import StockManager, Store
from .models import Book, BookCopy, StockBook

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 30.0


class _HTTPProxy:
    """Shared request handling for the bookstore proxies."""
    
    def __init__(self, server_address: str, timeout_s: float = DEFAULT_TIMEOUT_S,
                 session: Optional[requests.Session] = None):
        self.server_address = server_address.rstrip("/")
        self.timeout_s = timeout_s
        self._session = session or requests.Session()
    
    def _post(self, operation: str, payload: Any = None) -> Any:
        url = f"{self.server_address}/{operation}"
        try:
            response = self._session.post(url, json=payload, timeout=self.timeout_s)
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as e:
            raise BookStoreError(f"Request to {url} failed: {e}") from e
        except ValueError as e:
            raise BookStoreError(f"Malformed response from {url}: {e}") from e
        
        if not isinstance(body, dict):
            raise BookStoreError(f"Malformed response from {url}: expected a JSON object, got {type(body).__name__}")
        
        if body.get("error"):
            raise BookStoreError(body["error"])
        return body.get("result")
    
    def stop(self) -> None:
        """Release the pooled connections."""
        self._session.close()
        logger.debug(f"Closed HTTP session for {self.server_address}")


class BookStoreHTTPProxy(_HTTPProxy, Store):
    """Store binding that talks to ``<server_address>``."""
    
    def buy_books(self, books_to_buy: Iterable[BookCopy]) -> None:
        self._post("buybooks", [copy.to_dict() for copy in books_to_buy])
    
    def get_editor_picks(self, num_books: int) -> List[Book]:
        result = self._post("editorpicks", {"num_books": num_books}) or []
        return [
            Book(isbn=int(b["isbn"]), title=b["title"], author=b["author"], price=float(b["price"]))
            for b in result
        ]


class StockManagerHTTPProxy(_HTTPProxy, StockManager):
    """StockManager binding that talks to ``<server_address>`` (usually ``.../stock``)."""
    
    def get_books(self) -> List[StockBook]:
        result = self._post("listbooks") or []
        return [StockBook.from_dict(b) for b in result]
    
    def add_books(self, books: Iterable[StockBook]) -> None:
        self._post("addbooks", [book.to_dict() for book in books])
    
    def add_copies(self, book_copies: Iterable[BookCopy]) -> None:
        self._post("addcopies", [copy.to_dict() for copy in book_copies])
