"""Exceptions raised by bookstore collaborators and the workload sampler."""


class BookStoreError(Exception):
    """Raised when the bookstore rejects an operation."""
    pass


class InvalidArgumentError(BookStoreError):
    """Raised when an argument violates an operation's precondition."""
    pass


class OutOfRangeError(InvalidArgumentError):
    """Raised when a requested count exceeds the available items."""
    pass
