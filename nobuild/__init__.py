"""Main package for nobuild."""

__version__ = "0.1.0"
