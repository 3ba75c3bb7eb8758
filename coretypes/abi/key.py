"""Adapters that turn addresses and integers into mapping keys."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple

from coretypes.abi.address import AddressLike

_UINT64_MAX = 2**64 - 1
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_MAX_VARINT_LEN = 10


def encode_uvarint(value: int) -> bytes:
    """Encode an unsigned 64-bit integer as a little-endian base-128 varint."""
    if not 0 <= value <= _UINT64_MAX:
        raise ValueError(f"value out of uint64 range: {value}")
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def _encode_varint(value: int) -> bytes:
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"value out of int64 range: {value}")
    zigzag = ((value & _UINT64_MAX) << 1) & _UINT64_MAX
    if value < 0:
        zigzag ^= _UINT64_MAX
    return encode_uvarint(zigzag)


def _decode_uvarint(data: bytes) -> Tuple[int, int]:
    """Return (value, bytes consumed); consumed is 0 if incomplete, negative on overflow."""
    result = 0
    shift = 0
    for index, byte in enumerate(data):
        if index == _MAX_VARINT_LEN:
            return 0, -(index + 1)
        if byte < 0x80:
            if index == _MAX_VARINT_LEN - 1 and byte > 1:
                return 0, -(index + 1)
            return result | (byte << shift), index + 1
        result |= (byte & 0x7F) << shift
        shift += 7
    return 0, 0


def _decode_varint(data: bytes) -> Tuple[int, int]:
    zigzag, consumed = _decode_uvarint(data)
    value = zigzag >> 1
    if zigzag & 1:
        value = -value - 1
    return value, consumed


class Keyer(ABC):
    """Something that can be used as a key in a mapping."""

    @abstractmethod
    def key(self) -> bytes:
        """Return the key bytes."""


@dataclass(frozen=True)
class AddrKey(Keyer):
    """An address used as a key by its full encoding."""

    address: AddressLike

    def key(self) -> bytes:
        return bytes(self.address)


@dataclass(frozen=True)
class IdAddrKey(Keyer):
    """An address used as a key by its payload only."""

    address: AddressLike

    def key(self) -> bytes:
        return bytes(self.address.payload)


@dataclass(frozen=True)
class IntKey(Keyer):
    """A signed 64-bit integer used as a key, zig-zag varint encoded."""

    value: int

    def __post_init__(self) -> None:
        if not _INT64_MIN <= self.value <= _INT64_MAX:
            raise ValueError(f"value out of int64 range: {self.value}")

    def key(self) -> bytes:
        return _encode_varint(self.value)


@dataclass(frozen=True)
class UIntKey(Keyer):
    """An unsigned 64-bit integer used as a key, varint encoded."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= _UINT64_MAX:
            raise ValueError(f"value out of uint64 range: {self.value}")

    def key(self) -> bytes:
        return encode_uvarint(self.value)


def parse_int_key(k: bytes) -> int:
    """Decode a key produced by ``IntKey``."""
    data = bytes(k)
    value, consumed = _decode_varint(data)
    if consumed != len(data):
        raise ValueError("failed to decode varint key")
    return value


def parse_uint_key(k: bytes) -> int:
    """Decode a key produced by ``UIntKey``."""
    data = bytes(k)
    value, consumed = _decode_uvarint(data)
    if consumed != len(data):
        raise ValueError("failed to decode varint key")
    return value