"""Snippet and collection catalog search: build-time indexing and keyphrase search."""

__version__ = "0.1.0"
