"""myblog: security and persistence core of a personal blog backend."""

__version__ = "0.1.0"
