"""Signature types, post-quantum signature bundles and randomness domains."""

from __future__ import annotations

import io
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import IntEnum
from typing import BinaryIO, Callable, Iterator, List, Optional, TypeVar, Union

from coretypes.cbor import (
    CBOR_NULL,
    CborError,
    MajorType,
    read_exact,
    read_header,
    write_header,
)

# Falcon1024 public key + signature + Dilithium5 public key + signature + overhead.
MULTI_PQC_SIG_LEN = 897 + 692 + 1952 + 3293 + 20
SIGNATURE_MAX_LENGTH = 10000

_MAX_BYTE_ARRAY = 2097152
_MAX_SLICE = 8192
_MAX_STRING = 8192

_T = TypeVar("_T")


class SigType(IntEnum):
    """Signature algorithm identifiers."""

    UNKNOWN = 255
    SECP256K1 = 1
    BLS = 2
    DELEGATED = 3
    MULTI_PQC = 4
    FALCON512 = 5
    FALCON1024 = 6
    DILITHIUM3 = 7
    DILITHIUM5 = 8

    def label(self) -> str:
        """Return the canonical lower-case name of this signature type."""
        try:
            return _LABELS[self]
        except KeyError:
            raise ValueError(f"invalid signature type: {int(self)}") from None


_LABELS = {
    SigType.UNKNOWN: "unknown",
    SigType.FALCON512: "falcon512",
    SigType.FALCON1024: "falcon1024",
    SigType.DILITHIUM3: "dilithium3",
    SigType.DILITHIUM5: "dilithium5",
    SigType.SECP256K1: "secp256k1",
    SigType.BLS: "bls",
    SigType.DELEGATED: "delegated",
}

_BY_NAME = {name: sig for sig, name in _LABELS.items() if sig is not SigType.UNKNOWN}

_PQC_TYPES = frozenset(
    {SigType.FALCON512, SigType.FALCON1024, SigType.DILITHIUM3, SigType.DILITHIUM5}
)


def get_type_by_name(name: str) -> SigType:
    """Look up a signature type by name; unknown names give ``SigType.UNKNOWN``."""
    return _BY_NAME.get(name, SigType.UNKNOWN)


class DomainSeparationTag(IntEnum):
    """Domains for randomness generation."""

    TICKET_PRODUCTION = 1
    ELECTION_PROOF_PRODUCTION = 2
    WINNING_POST_CHALLENGE_SEED = 3
    WINDOWED_POST_CHALLENGE_SEED = 4
    SEAL_RANDOMNESS = 5
    INTERACTIVE_SEAL_CHALLENGE_SEED = 6
    WINDOWED_POST_DEADLINE_ASSIGNMENT = 7
    MARKET_DEAL_CRON_SEED = 8
    POST_CHAIN_COMMIT = 9


def _sig_type(value: int) -> Union[SigType, int]:
    value &= 0xFF
    try:
        return SigType(value)
    except ValueError:
        return value


class _Pushback:
    """A reader that yields some already-consumed bytes before the stream."""

    def __init__(self, head: bytes, stream: BinaryIO) -> None:
        self._head = head
        self._stream = stream

    def read(self, size: int = -1) -> bytes:
        if size < 0:
            data = self._head + self._stream.read()
            self._head = b""
            return data
        if not self._head:
            return self._stream.read(size)
        taken, self._head = self._head[:size], self._head[size:]
        if len(taken) < size:
            taken += self._stream.read(size - len(taken))
        return taken


@contextmanager
def _eof_is_unexpected() -> Iterator[None]:
    try:
        yield
    except CborError as exc:
        if str(exc) == "EOF":
            raise CborError("unexpected EOF") from exc
        raise


def _expect_array(major: MajorType, extra: int, fields: int) -> None:
    if major != MajorType.ARRAY:
        raise CborError("cbor input should be of type array")
    if extra != fields:
        raise CborError("cbor input had wrong number of fields")


def _read_sig_type(stream: BinaryIO) -> Union[SigType, int]:
    major, extra = read_header(stream)
    if major != MajorType.UNSIGNED_INT:
        raise CborError("wrong type for uint64 field")
    return _sig_type(extra)


def _read_byte_array(stream: BinaryIO, name: str) -> bytes:
    major, extra = read_header(stream)
    if extra > _MAX_BYTE_ARRAY:
        raise CborError(f"{name}: byte array too large ({extra})")
    if major != MajorType.BYTE_STRING:
        raise CborError("expected byte array")
    return read_exact(stream, extra)


def _read_array_header(stream: BinaryIO, name: str) -> int:
    major, extra = read_header(stream)
    if extra > _MAX_SLICE:
        raise CborError(f"{name}: array too large ({extra})")
    if major != MajorType.ARRAY:
        raise CborError("expected cbor array")
    return extra


def _read_string(stream: BinaryIO, limit: int) -> str:
    major, extra = read_header(stream)
    if major != MajorType.TEXT_STRING:
        raise CborError("expected cbor type 'text string' in input")
    if extra > limit:
        raise CborError("string in input was too long")
    return read_exact(stream, extra).decode("utf-8", errors="surrogateescape")


def _read_nested(reader: Callable[[BinaryIO], _T], stream: BinaryIO, name: str) -> _T:
    try:
        return reader(stream)
    except CborError as exc:
        raise CborError(f"unmarshaling {name}: {exc}") from exc


def _write_byte_array(stream: BinaryIO, data: bytes, name: str) -> None:
    if len(data) > _MAX_BYTE_ARRAY:
        raise CborError(f"Byte array in field {name} was too long")
    write_header(stream, MajorType.BYTE_STRING, len(data))
    stream.write(data)


@dataclass
class SignPqcCertPubkey:
    """A typed public key carried in a certificate."""

    typ: str = ""
    pubkey: bytes = b""

    def marshal_cbor(self, stream: BinaryIO) -> None:
        """Write as a two-element CBOR array."""
        encoded = self.typ.encode("utf-8", errors="surrogateescape")
        if len(encoded) > _MAX_STRING:
            raise CborError("Value in field t.Typ was too long")
        stream.write(b"\x82")
        write_header(stream, MajorType.TEXT_STRING, len(encoded))
        stream.write(encoded)
        _write_byte_array(stream, bytes(self.pubkey), "t.Pubkey")

    @classmethod
    def unmarshal_cbor(cls, stream: BinaryIO) -> SignPqcCertPubkey:
        """Read a value written by ``marshal_cbor``."""
        major, extra = read_header(stream)
        with _eof_is_unexpected():
            _expect_array(major, extra, 2)
            typ = _read_string(stream, _MAX_STRING)
            pubkey = _read_byte_array(stream, "t.Pubkey")
        return cls(typ=typ, pubkey=pubkey)


@dataclass
class SignPQCCert:
    """A certificate listing the post-quantum public keys of a signer."""

    pubkeys: List[SignPqcCertPubkey] = field(default_factory=list)
    version: int = 0

    def marshal_cbor(self, stream: BinaryIO) -> None:
        """Write as a two-element CBOR array."""
        if len(self.pubkeys) > _MAX_SLICE:
            raise CborError("Slice value in field t.Pubkeys was too long")
        if not 0 <= self.version <= 0xFF:
            raise CborError("integer in field t.Version was too large for uint8 field")
        stream.write(b"\x82")
        write_header(stream, MajorType.ARRAY, len(self.pubkeys))
        for pubkey in self.pubkeys:
            pubkey.marshal_cbor(stream)
        write_header(stream, MajorType.UNSIGNED_INT, self.version)

    @classmethod
    def unmarshal_cbor(cls, stream: BinaryIO) -> SignPQCCert:
        """Read a value written by ``marshal_cbor``."""
        major, extra = read_header(stream)
        with _eof_is_unexpected():
            _expect_array(major, extra, 2)
            count = _read_array_header(stream, "t.Pubkeys")
            pubkeys = [
                _read_nested(SignPqcCertPubkey.unmarshal_cbor, stream, "t.Pubkeys[i]")
                for _ in range(count)
            ]
            major, extra = read_header(stream)
            if major != MajorType.UNSIGNED_INT:
                raise CborError("wrong type for uint8 field")
            if extra > 0xFF:
                raise CborError("integer in input was too large for uint8 field")
        return cls(pubkeys=pubkeys, version=extra)


@dataclass
class PqcSignature:
    """One post-quantum signature and its algorithm."""

    type: Union[SigType, int] = SigType.UNKNOWN
    data: bytes = b""

    def marshal_cbor(self, stream: BinaryIO) -> None:
        """Write as a two-element CBOR array."""
        stream.write(b"\x82")
        write_header(stream, MajorType.UNSIGNED_INT, int(self.type))
        _write_byte_array(stream, bytes(self.data), "t.Data")

    @classmethod
    def unmarshal_cbor(cls, stream: BinaryIO) -> PqcSignature:
        """Read a value written by ``marshal_cbor``."""
        major, extra = read_header(stream)
        with _eof_is_unexpected():
            _expect_array(major, extra, 2)
            sig_type = _read_sig_type(stream)
            data = _read_byte_array(stream, "t.Data")
        return cls(type=sig_type, data=data)


@dataclass
class Signature:
    """A classical signature together with post-quantum signatures and a certificate."""

    type: Union[SigType, int] = SigType.UNKNOWN
    data: bytes = b""
    pqc_signatures: List[PqcSignature] = field(default_factory=list)
    pqc_cert: SignPQCCert = field(default_factory=SignPQCCert)

    def set(self, tp: SigType, data: bytes) -> None:
        """Attach a post-quantum signature of type ``tp``."""
        if tp not in _PQC_TYPES:
            raise ValueError("invalid signature SigType")
        self.pqc_signatures.append(PqcSignature(type=SigType(tp), data=data))

    def get(self, tp: SigType) -> bytes:
        """Return the data of the first post-quantum signature of type ``tp``."""
        for signature in self.pqc_signatures:
            if signature.type == tp:
                return signature.data
        raise LookupError(f"find signature with type {int(tp)} not found")

    def equals(self, other: Optional[Signature]) -> bool:
        """Compare the classical type and data only."""
        if other is None:
            return False
        return self.type == other.type and bytes(self.data) == bytes(other.data)

    def serialize(self) -> bytes:
        """Return the CBOR encoding."""
        buffer = io.BytesIO()
        self.marshal_cbor(buffer)
        return buffer.getvalue()

    def chain_length(self) -> int:
        """Return the length of the CBOR encoding."""
        return len(self.serialize())

    def marshal_cbor(self, stream: BinaryIO) -> None:
        """Write as a four-element CBOR array."""
        if len(self.pqc_signatures) > _MAX_SLICE:
            raise CborError("Slice value in field t.PqcSignatures was too long")
        stream.write(b"\x84")
        write_header(stream, MajorType.UNSIGNED_INT, int(self.type))
        _write_byte_array(stream, bytes(self.data), "t.Data")
        write_header(stream, MajorType.ARRAY, len(self.pqc_signatures))
        for signature in self.pqc_signatures:
            signature.marshal_cbor(stream)
        self.pqc_cert.marshal_cbor(stream)

    @classmethod
    def unmarshal_cbor(cls, stream: BinaryIO) -> Signature:
        """Read a value written by ``marshal_cbor``; a null certificate reads as empty."""
        major, extra = read_header(stream)
        with _eof_is_unexpected():
            _expect_array(major, extra, 4)
            sig_type = _read_sig_type(stream)
            data = _read_byte_array(stream, "t.Data")
            count = _read_array_header(stream, "t.PqcSignatures")
            signatures = [
                _read_nested(PqcSignature.unmarshal_cbor, stream, "t.PqcSignatures[i]")
                for _ in range(count)
            ]
            first = stream.read(1)
            if not first:
                raise CborError("EOF")
            cert = SignPQCCert()
            if first != CBOR_NULL:
                cert = _read_nested(
                    SignPQCCert.unmarshal_cbor,
                    _Pushback(first, stream),  # type: ignore[arg-type]
                    "t.SignPQCCert pointer",
                )
        return cls(type=sig_type, data=data, pqc_signatures=signatures, pqc_cert=cert)