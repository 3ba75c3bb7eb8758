"""Piece sizes, with and without Fr32 padding."""

from __future__ import annotations

from dataclasses import dataclass

_UINT64_MAX = 2**64 - 1


class _PieceSize(int):
    def __new__(cls, value: int = 0):
        number = int.__new__(cls, value)
        if not 0 <= number <= _UINT64_MAX:
            raise ValueError(f"{cls.__name__} out of range: {int.__repr__(number)}")
        return number

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int.__repr__(self)})"

    def __str__(self) -> str:
        return int.__repr__(self)


class UnpaddedPieceSize(_PieceSize):
    """Size of a piece in bytes before padding."""

    def padded(self) -> PaddedPieceSize:
        """Return the size after padding."""
        size = int(self)
        return PaddedPieceSize((size + size // 127) & _UINT64_MAX)

    def validate(self) -> None:
        """Raise ``ValueError`` unless the size is 127 times a power of two."""
        size = int(self)
        if size < 127:
            raise ValueError("minimum piece size is 127 bytes")
        trailing_zeros = (size & -size).bit_length() - 1
        if size >> trailing_zeros != 127:
            raise ValueError("unpadded piece size must be a power of 2 multiple of 127")


class PaddedPieceSize(_PieceSize):
    """Size of a piece in bytes after padding."""

    def unpadded(self) -> UnpaddedPieceSize:
        """Return the size before padding."""
        size = int(self)
        return UnpaddedPieceSize(size - size // 128)

    def validate(self) -> None:
        """Raise ``ValueError`` unless the size is a power of two of at least 128."""
        size = int(self)
        if size < 128:
            raise ValueError("minimum padded piece size is 128 bytes")
        if bin(size).count("1") != 1:
            raise ValueError("padded piece size must be a power of 2")


@dataclass(frozen=True)
class PieceInfo:
    """A piece's padded size and the raw bytes of its content identifier."""

    size: PaddedPieceSize
    piece_cid: bytes