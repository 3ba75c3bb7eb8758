"""Byte strings as CBOR, raw pass-through bytes, and the empty value."""

from __future__ import annotations

from typing import BinaryIO, Optional

from coretypes.cbor import CborError, MajorType, read_exact, read_header, write_header

BYTE_ARRAY_MAX_LEN = 2 << 20


class CborBytes(bytes):
    """Bytes that encode as a CBOR byte string."""

    def marshal_cbor(self, stream: BinaryIO) -> None:
        """Write the bytes as a CBOR byte string."""
        if len(self) > BYTE_ARRAY_MAX_LEN:
            raise CborError("byte array was too long")
        write_header(stream, MajorType.BYTE_STRING, len(self))
        stream.write(bytes(self))

    @classmethod
    def unmarshal_cbor(cls, stream: BinaryIO) -> CborBytes:
        """Read a CBOR byte string."""
        major, extra = read_header(stream)
        if extra > BYTE_ARRAY_MAX_LEN:
            raise CborError(f"byte array too large ({extra})")
        if major != MajorType.BYTE_STRING:
            raise CborError("expected byte array")
        return cls(read_exact(stream, extra))


class CborBytesTransparent(bytes):
    """Bytes passed through unchanged; this is not a CBOR encoding.

    Reading consumes the whole stream, so use it only with trusted input.
    """

    def marshal_cbor(self, stream: BinaryIO) -> None:
        """Write the bytes as they are."""
        stream.write(bytes(self))

    @classmethod
    def unmarshal_cbor(cls, stream: BinaryIO) -> CborBytesTransparent:
        """Read everything remaining in the stream."""
        return cls(stream.read())


class EmptyValue:
    """Absence of a value; its serialized form is zero bytes.

    Use ``None`` (``EMPTY``) rather than instances: ``EmptyValue.marshal_cbor(None, s)``
    writes nothing, while marshalling an instance is an error.
    """

    def marshal_cbor(self: Optional[EmptyValue], stream: BinaryIO) -> None:
        """Write nothing for ``None``; reject a real instance."""
        if self is not None:
            raise CborError("cannot marshal empty value, try nil instead")

    @classmethod
    def unmarshal_cbor(cls, stream: BinaryIO) -> Optional[EmptyValue]:
        """Consume the zero bytes of the serialized form and return ``EMPTY``."""
        read_exact(stream, 0)
        return EMPTY


EMPTY: Optional[EmptyValue] = None