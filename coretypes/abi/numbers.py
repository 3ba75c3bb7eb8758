"""Fixed-width identifiers and amounts used throughout the chain."""

from __future__ import annotations

from coretypes.bigint import Int

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1

RANDOMNESS_LENGTH = 32

# Amounts are plain big integers; the aliases document intent only.
TokenAmount = Int
DealWeight = Int  # units: byte-epochs

Multiaddrs = bytes
PeerID = bytes
Randomness = bytes


def _as_int64(value: int) -> int:
    """Reinterpret an unsigned 64-bit value as signed."""
    return value - 2**64 if value > INT64_MAX else value


class _FixedWidthInt(int):
    """An int restricted to a fixed range."""

    _MIN = 0
    _MAX = UINT64_MAX

    def __new__(cls, value: int = 0):
        number = int.__new__(cls, value)
        if not cls._MIN <= number <= cls._MAX:
            raise ValueError(f"{cls.__name__} out of range: {int.__repr__(number)}")
        return number

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int.__repr__(self)})"

    def __str__(self) -> str:
        return int.__repr__(self)


class ActorID(_FixedWidthInt):
    """Sequential number assigned to an actor at creation; embedded in ID addresses."""

    def __str__(self) -> str:
        return str(_as_int64(int(self)))


class MethodNum(_FixedWidthInt):
    """Index of a method in an actor's function table."""

    def __str__(self) -> str:
        return str(_as_int64(int(self)))


class ChainEpoch(_FixedWidthInt):
    """Epoch number of the chain state."""

    _MIN = INT64_MIN
    _MAX = INT64_MAX


class DealID(_FixedWidthInt):
    """Identifier of a storage deal."""


def new_token_amount(t: int) -> Int:
    """Return a token amount holding ``t``."""
    if not INT64_MIN <= t <= INT64_MAX:
        raise ValueError(f"token amount out of int64 range: {t}")
    return Int(t)