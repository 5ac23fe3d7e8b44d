"""A lending library with members, a book catalogue, loans, fuzzy search and a console session."""

__version__ = "0.1.0"
__all__ = ["__version__"]