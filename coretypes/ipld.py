"""Byte converters for big integers, token amounts and signatures in IPLD schemas."""

from __future__ import annotations

from coretypes.bigint import Int, from_bytes
from coretypes.crypto import SIGNATURE_MAX_LENGTH, SigType, Signature


def big_int_from_bytes(b: bytes) -> Int:
    """Decode a sign-prefixed big integer; empty input is zero."""
    if not b:
        return Int(0)
    return from_bytes(b)


def big_int_to_bytes(value: Int) -> bytes:
    """Encode a big integer; an unset value encodes as zero."""
    if not isinstance(value, Int):
        raise TypeError("expected big Int value")
    if value.is_nil():
        return Int(0).to_bytes()
    return value.to_bytes()


def token_amount_from_bytes(b: bytes) -> Int:
    """Decode a token amount."""
    return big_int_from_bytes(b)


def token_amount_to_bytes(value: Int) -> bytes:
    """Encode a token amount."""
    return big_int_to_bytes(value)


def signature_from_bytes(b: bytes) -> Signature:
    """Decode a type-byte-prefixed secp256k1 or BLS signature."""
    if len(b) > SIGNATURE_MAX_LENGTH:
        raise ValueError("string too long")
    if not b:
        raise ValueError("string empty")
    if b[0] not in (SigType.SECP256K1, SigType.BLS):
        raise ValueError(f"invalid signature type in cbor input: {b[0]}")
    return Signature(type=SigType(b[0]), data=bytes(b[1:]))


def signature_to_bytes(value: Signature) -> bytes:
    """Encode a signature as its type byte followed by its data."""
    if not isinstance(value, Signature):
        raise TypeError("expected Signature value")
    return bytes([int(value.type) & 0xFF]) + bytes(value.data)