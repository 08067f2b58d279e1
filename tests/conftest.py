"""Shared stub collaborators for workload tests."""

from typing import Iterable, List, Optional

import pytest

from bookbench.bookstore import Book, BookCopy, BookStoreError, StockBook, StockManager, Store


class StubStore(Store):
    """Store returning a fixed list of editor picks and recording purchases."""
    
    def __init__(self, editor_picks: Optional[List[Book]] = None, fail_buy: bool = False):
        self.editor_picks = editor_picks or []
        self.fail_buy = fail_buy
        self.buy_calls: List[set] = []
        self.editor_pick_calls = 0
    
    def buy_books(self, books_to_buy: Iterable[BookCopy]) -> None:
        self.buy_calls.append(set(books_to_buy))
        if self.fail_buy:
            raise BookStoreError("Book not available: insufficient copies")
    
    def get_editor_picks(self, num_books: int) -> List[Book]:
        self.editor_pick_calls += 1
        return list(self.editor_picks[:num_books])


class StubStockManager(StockManager):
    """StockManager returning a fixed listing and recording every call."""
    
    def __init__(self, books: Optional[List[StockBook]] = None):
        self.books = books or []
        self.add_books_calls: List[set] = []
        self.add_copies_calls: List[set] = []
        self.get_books_calls = 0
    
    def get_books(self) -> List[StockBook]:
        self.get_books_calls += 1
        return list(self.books)
    
    def add_books(self, books: Iterable[StockBook]) -> None:
        self.add_books_calls.append(set(books))
    
    def add_copies(self, book_copies: Iterable[BookCopy]) -> None:
        self.add_copies_calls.append(set(book_copies))


def make_stock_book(isbn: int, num_copies: int = 5, editor_pick: bool = False) -> StockBook:
    return StockBook(
        isbn=isbn,
        title=f"Title {isbn}",
        author=f"Author {isbn}",
        price=10.0,
        num_copies=num_copies,
        editor_pick=editor_pick,
    )


@pytest.fixture
def editor_picks():
    """Five editor picks with ISBNs 1..5."""
    return [make_stock_book(isbn, editor_pick=True).to_book() for isbn in range(1, 6)]


@pytest.fixture
def stub_store(editor_picks):
    return StubStore(editor_picks)


@pytest.fixture
def stub_stock_manager():
    return StubStockManager([make_stock_book(isbn, num_copies=isbn) for isbn in range(1, 11)])
