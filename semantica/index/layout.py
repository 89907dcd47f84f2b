"""Binary layout of a serialized semantic index.

```
[0..8)            u64 big-endian: byte offset where the values section begins
[8..offset)       N blocks of D big-endian float32 (embeddings, in content order)
[offset..end)     N records: u64 big-endian length L, then L bytes of value payload
```

Decoding validates the whole blob before returning anything, so callers never
observe a partially reconstructed index.
"""

from __future__ import annotations

import struct
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from semantica.index.codecs import ValueCodec

HEADER = struct.Struct(">Q")
FLOAT_DTYPE = np.dtype(">f4")


class FormatError(ValueError):
    """Raised when a serialized index blob is malformed."""


def encode_blob(
    entries: Iterable[tuple[np.ndarray, Any]],
    codec: ValueCodec[Any],
) -> bytes:
    """Serialize ``(embedding, value)`` pairs into the index layout."""
    output = bytearray(HEADER.size)
    values = bytearray()

    for embedding, value in entries:
        output += np.asarray(embedding, dtype=FLOAT_DTYPE).tobytes()
        payload = codec.encode(value)
        values += HEADER.pack(len(payload))
        values += payload

    # Backfill the header with where the values section starts
    HEADER.pack_into(output, 0, len(output))
    output += values
    return bytes(output)


def decode_blob(
    blob: bytes,
    *,
    dimension: int,
    codec: ValueCodec[Any],
) -> list[tuple[np.ndarray, Any]]:
    """Recover ``(embedding, value)`` pairs from ``blob``.

    Raises:
        FormatError: On an inconsistent header, a truncated record, a wrong
            embedding block size, or trailing garbage.
    """
    data = memoryview(bytes(blob))
    total = len(data)
    if total < HEADER.size:
        raise FormatError(f"Index blob too short for header ({total} bytes)")

    (values_start,) = HEADER.unpack_from(data, 0)
    if values_start < HEADER.size or values_start > total:
        raise FormatError(
            f"Header offset {values_start} outside blob of {total} bytes"
        )

    block = dimension * FLOAT_DTYPE.itemsize
    region = values_start - HEADER.size
    if region % block:
        raise FormatError(
            f"Embedding region of {region} bytes is not a multiple of {block} (D={dimension})"
        )
    count = region // block

    matrix = np.frombuffer(data[HEADER.size:values_start], dtype=FLOAT_DTYPE)
    matrix = matrix.reshape(count, dimension).astype(np.float32)

    records: list[tuple[np.ndarray, Any]] = []
    cursor = values_start
    for row in range(count):
        if cursor + HEADER.size > total:
            raise FormatError(f"Value record {row} length prefix runs past end of blob")
        (length,) = HEADER.unpack_from(data, cursor)
        cursor += HEADER.size
        if cursor + length > total:
            raise FormatError(
                f"Value record {row} declares {length} bytes; only {total - cursor} remain"
            )
        value = codec.decode(bytes(data[cursor:cursor + length]))
        cursor += length
        records.append((matrix[row].copy(), value))

    if cursor != total:
        raise FormatError(f"{total - cursor} trailing bytes after last value record")

    return records
