"""Projection-sorted semantic index, its search engine and byte layout."""

from semantica.index.codecs import (
    BytesCodec,
    IntCodec,
    JsonCodec,
    ModelCodec,
    StrCodec,
    ValueCodec,
    get_codec,
)
from semantica.index.layout import FormatError, decode_blob, encode_blob
from semantica.index.search import ScanResult, expanding_search
from semantica.index.semantic_index import Entry, IndexOutOfRange, SearchHit, SemanticIndex
from semantica.index.vector import SizeMismatch, as_vector, cosine, default_projection, dot

__all__ = [
    "BytesCodec",
    "Entry",
    "FormatError",
    "IndexOutOfRange",
    "IntCodec",
    "JsonCodec",
    "ModelCodec",
    "ScanResult",
    "SearchHit",
    "SemanticIndex",
    "SizeMismatch",
    "StrCodec",
    "ValueCodec",
    "as_vector",
    "cosine",
    "decode_blob",
    "default_projection",
    "dot",
    "encode_blob",
    "expanding_search",
    "get_codec",
]
