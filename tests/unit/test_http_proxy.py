"""
Unit tests for the HTTP bookstore proxies.
"""

from unittest.mock import MagicMock

import pytest
import requests

from bookbench.bookstore import BookCopy, BookStoreError, BookStoreHTTPProxy, StockManagerHTTPProxy

from conftest import make_stock_book


def make_session(body=None, exc=None):
    session = MagicMock(spec=requests.Session)
    if exc is not None:
        session.post.side_effect = exc
    else:
        response = MagicMock()
        response.json.return_value = body
        session.post.return_value = response
    return session


class TestStockManagerHTTPProxy:
    """Test the stock manager proxy."""
    
    def test_get_books(self):
        book = make_stock_book(12, num_copies=3, editor_pick=True)
        session = make_session({"result": [book.to_dict()], "error": None})
        proxy = StockManagerHTTPProxy("http://localhost:8081/stock/", session=session)
        
        assert proxy.get_books() == [book]
        session.post.assert_called_once_with(
            "http://localhost:8081/stock/listbooks", json=None, timeout=30.0
        )
    
    def test_add_copies_payload(self):
        session = make_session({"result": None})
        proxy = StockManagerHTTPProxy("http://localhost:8081/stock", session=session)
        proxy.add_copies([BookCopy(7, 10)])
        
        _, kwargs = session.post.call_args
        assert kwargs["json"] == [{"isbn": 7, "num_copies": 10}]
    
    def test_server_error(self):
        session = make_session({"error": "ISBN 7 is not available"})
        proxy = StockManagerHTTPProxy("http://localhost:8081/stock", session=session)
        
        with pytest.raises(BookStoreError, match="not available"):
            proxy.add_copies([BookCopy(7, 10)])


class TestBookStoreHTTPProxy:
    """Test the store proxy."""
    
    def test_get_editor_picks(self):
        book = make_stock_book(3).to_book()
        session = make_session({"result": [
            {"isbn": 3, "title": book.title, "author": book.author, "price": book.price}
        ]})
        proxy = BookStoreHTTPProxy("http://localhost:8081", session=session)
        
        assert proxy.get_editor_picks(1) == [book]
        _, kwargs = session.post.call_args
        assert kwargs["json"] == {"num_books": 1}
    
    def test_connection_error(self):
        session = make_session(exc=requests.ConnectionError("refused"))
        proxy = BookStoreHTTPProxy("http://localhost:8081", session=session)
        
        with pytest.raises(BookStoreError, match="failed"):
            proxy.buy_books([BookCopy(1, 1)])
    
    def test_malformed_response(self):
        session = make_session()
        session.post.return_value.json.side_effect = ValueError("no JSON")
        proxy = BookStoreHTTPProxy("http://localhost:8081", session=session)
        
        with pytest.raises(BookStoreError, match="Malformed"):
            proxy.buy_books([])

    @pytest.mark.parametrize("body", [["unexpected"], "text", None])
    def test_non_object_response(self, body):
        proxy = BookStoreHTTPProxy("http://localhost:8081", session=make_session(body=body))

        with pytest.raises(BookStoreError, match="expected a JSON object"):
            proxy.buy_books([BookCopy(1, 1)])

    def test_stop_closes_session(self):
        session = make_session()
        BookStoreHTTPProxy("http://localhost:8081", session=session).stop()
        session.close.assert_called_once()
