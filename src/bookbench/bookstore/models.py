"""Data models exchanged with the bookstore."""

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Book:
    """Customer-facing summary of a book."""
    
    isbn: int
    title: str
    author: str
    price: float


@dataclass(frozen=True)
class StockBook:
    """A book as seen by the stock manager, including inventory counters."""
    
    isbn: int
    title: str
    author: str
    price: float
    num_copies: int
    num_sale_misses: int = 0
    num_times_rated: int = 0
    total_rating: int = 0
    editor_pick: bool = False
    
    def to_book(self) -> Book:
        return Book(isbn=self.isbn, title=self.title, author=self.author, price=self.price)
    
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StockBook":
        return cls(
            isbn=int(data["isbn"]),
            title=data["title"],
            author=data["author"],
            price=float(data["price"]),
            num_copies=int(data["num_copies"]),
            num_sale_misses=int(data.get("num_sale_misses", 0)),
            num_times_rated=int(data.get("num_times_rated", 0)),
            total_rating=int(data.get("total_rating", 0)),
            editor_pick=bool(data.get("editor_pick", False)),
        )


@dataclass(frozen=True)
class BookCopy:
    """A request for a number of copies of one ISBN (to buy or to add)."""
    
    isbn: int
    num_copies: int
    
    def to_dict(self) -> Dict[str, Any]:
        return {"isbn": self.isbn, "num_copies": self.num_copies}
