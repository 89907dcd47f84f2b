"""Byte codecs for values stored in a semantic index."""

from __future__ import annotations

import json
from typing import Any, Generic, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from semantica.index.layout import FormatError

V = TypeVar("V")
M = TypeVar("M", bound=BaseModel)

INT_WIDTH = 8


class ValueCodec(Protocol[V]):
    """Two-way conversion between a value and its canonical bytes."""

    name: str

    def encode(self, value: V) -> bytes:
        ...

    def decode(self, data: bytes) -> V:
        ...


class IntCodec:
    """Signed big-endian integers.

    Encodes to 8 bytes; decodes any payload of 1 to 8 bytes so 32-bit
    records are accepted too.
    """

    name = "int"

    def encode(self, value: int) -> bytes:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"IntCodec expects int; got {type(value).__name__}")
        try:
            return value.to_bytes(INT_WIDTH, "big", signed=True)
        except OverflowError as exc:
            raise ValueError(f"{value} does not fit in {INT_WIDTH * 8} bits") from exc

    def decode(self, data: bytes) -> int:
        if not 1 <= len(data) <= INT_WIDTH:
            raise FormatError(f"Integer payload must be 1-{INT_WIDTH} bytes; got {len(data)}")
        return int.from_bytes(data, "big", signed=True)


class StrCodec:
    name = "str"

    def encode(self, value: str) -> bytes:
        return value.encode("utf-8")

    def decode(self, data: bytes) -> str:
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FormatError(f"Value payload is not valid UTF-8: {exc}") from exc


class BytesCodec:
    name = "bytes"

    def encode(self, value: bytes) -> bytes:
        return bytes(value)

    def decode(self, data: bytes) -> bytes:
        return bytes(data)


class JsonCodec:
    """Compact JSON with sorted keys, UTF-8 encoded."""

    name = "json"

    def encode(self, value: Any) -> bytes:
        return json.dumps(value, separators=(",", ":"), sort_keys=True).encode("utf-8")

    def decode(self, data: bytes) -> Any:
        try:
            return json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise FormatError(f"Value payload is not valid JSON: {exc}") from exc


class ModelCodec(Generic[M]):
    """Pydantic models serialized through their JSON schema."""

    def __init__(self, model_cls: type[M]) -> None:
        self.model_cls = model_cls
        self.name = f"model:{model_cls.__name__}"

    def encode(self, value: M) -> bytes:
        return value.model_dump_json().encode("utf-8")

    def decode(self, data: bytes) -> M:
        try:
            return self.model_cls.model_validate_json(data)
        except ValidationError as exc:
            raise FormatError(f"Value payload is not a valid {self.model_cls.__name__}") from exc


_CODECS: dict[str, type[Any]] = {
    "int": IntCodec,
    "str": StrCodec,
    "bytes": BytesCodec,
    "json": JsonCodec,
}


def get_codec(name: str) -> ValueCodec[Any]:
    """Return a fresh codec instance for ``name``."""
    try:
        return _CODECS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown value codec '{name}'. Choose from: {', '.join(sorted(_CODECS))}"
        ) from None
