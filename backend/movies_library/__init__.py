"""Movies Library: movie catalog CRUD over a MongoDB document store."""

__version__ = "0.1.0"
__author__ = "Movies Library Team"

__all__ = ["__version__", "__author__"]
