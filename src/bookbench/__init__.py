"""BookBench: concurrent workload generator for the bookstore service."""

__version__ = "0.1.0"
