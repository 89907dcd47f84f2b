"""Concrete adapters wiring application ports to built-in implementations."""

from __future__ import annotations

from .hashing import HashEmbeddingAdapter
from .sentence_transformer import SentenceTransformerAdapter
from .storage import FileSystemIndexStorage

__all__ = [
    "FileSystemIndexStorage",
    "HashEmbeddingAdapter",
    "SentenceTransformerAdapter",
]
