"""Minimal CBOR header primitives and the marshalling protocols."""

from __future__ import annotations

from enum import IntEnum
from typing import BinaryIO, Protocol, Tuple, TypeVar, runtime_checkable

CBOR_NULL = b"\xf6"
MAX_HEADER_VALUE = 2**64 - 1

_T = TypeVar("_T")

# Smallest value allowed for each extended length code in canonical form.
_CANONICAL_MINIMUM = {24: 24, 25: 1 << 8, 26: 1 << 16, 27: 1 << 32}


class CborError(ValueError):
    """Raised when CBOR data cannot be encoded or decoded."""


class MajorType(IntEnum):
    """CBOR major types."""

    UNSIGNED_INT = 0
    NEGATIVE_INT = 1
    BYTE_STRING = 2
    TEXT_STRING = 3
    ARRAY = 4
    MAP = 5
    TAG = 6
    OTHER = 7


@runtime_checkable
class Marshaler(Protocol):
    """A value that can write itself as CBOR."""

    def marshal_cbor(self, stream: BinaryIO) -> None:
        """Write the CBOR encoding of this value to ``stream``."""


@runtime_checkable
class Unmarshaler(Protocol):
    """A type that can read an instance of itself from CBOR."""

    @classmethod
    def unmarshal_cbor(cls: type[_T], stream: BinaryIO) -> _T:
        """Read one value of this type from ``stream``."""


def encode_header(major: MajorType | int, value: int) -> bytes:
    """Return the canonical CBOR header for ``major`` carrying ``value``."""
    major = MajorType(major)
    if not 0 <= value <= MAX_HEADER_VALUE:
        raise CborError(f"header value out of range: {value}")
    head = major << 5
    if value < 24:
        return bytes([head | value])
    if value < 1 << 8:
        return bytes([head | 24]) + value.to_bytes(1, "big")
    if value < 1 << 16:
        return bytes([head | 25]) + value.to_bytes(2, "big")
    if value < 1 << 32:
        return bytes([head | 26]) + value.to_bytes(4, "big")
    return bytes([head | 27]) + value.to_bytes(8, "big")


def write_header(stream: BinaryIO, major: MajorType | int, value: int) -> None:
    """Write the canonical CBOR header for ``major`` and ``value`` to ``stream``."""
    stream.write(encode_header(major, value))


def read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read exactly ``size`` bytes, raising ``CborError`` if the stream ends early."""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            raise CborError("unexpected EOF")
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def read_header(stream: BinaryIO) -> Tuple[MajorType, int]:
    """Read one CBOR header and return its major type and value."""
    first = stream.read(1)
    if not first:
        raise CborError("EOF")
    byte = first[0]
    major = MajorType(byte >> 5)
    low = byte & 0x1F
    if low < 24:
        return major, low
    if low not in _CANONICAL_MINIMUM:
        raise CborError(f"invalid header: ({byte:x})")
    value = int.from_bytes(read_exact(stream, 1 << (low - 24)), "big")
    if value < _CANONICAL_MINIMUM[low]:
        raise CborError(
            f"cbor input was not canonical (lval {low} with value < {_CANONICAL_MINIMUM[low]})"
        )
    return major, value