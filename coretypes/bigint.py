"""Arbitrary-precision integers with the chain's byte, JSON and CBOR encodings."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import BinaryIO, Optional, Union

from coretypes.cbor import CborError, MajorType, encode_header, read_exact, read_header

BIG_INT_MAX_SERIALIZED_LEN = 128

_DECIMAL = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Int:
    """A big integer; ``Int()`` is the unset (nil) value."""

    value: Optional[int] = None

    def __post_init__(self) -> None:
        if self.value is not None and (
            isinstance(self.value, bool) or not isinstance(self.value, int)
        ):
            raise TypeError(f"Int requires an int value, got {type(self.value).__name__}")

    def _require(self) -> int:
        if self.value is None:
            raise ValueError("operation on nil big int")
        return self.value

    def __str__(self) -> str:
        return "<nil>" if self.value is None else str(self.value)

    def __format__(self, spec: str) -> str:
        if not spec or spec.endswith(("s", "v")):
            text_spec = spec[:-1] + "s" if spec else ""
            return format(str(self), text_spec)
        return format(self._require(), spec)

    def __int__(self) -> int:
        return self._require()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Int):
            return NotImplemented
        return self.less_than(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Int):
            return NotImplemented
        return self.less_than_equal(other)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Int):
            return NotImplemented
        return self.greater_than(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Int):
            return NotImplemented
        return self.greater_than_equal(other)

    def __add__(self, other: Int) -> Int:
        return add(self, other)

    def __sub__(self, other: Int) -> Int:
        return sub(self, other)

    def __mul__(self, other: Int) -> Int:
        return mul(self, other)

    def __neg__(self) -> Int:
        return self.neg()

    def __abs__(self) -> Int:
        return self.abs()

    def copy(self) -> Int:
        """Return an equal Int."""
        return Int(self._require())

    def neg(self) -> Int:
        """Return the negation."""
        return Int(-self._require())

    def abs(self) -> Int:
        """Return the absolute value."""
        if self.greater_than_equal(zero()):
            return self.copy()
        return self.neg()

    def sign(self) -> int:
        """Return -1, 0 or 1 according to the sign."""
        v = self._require()
        return (v > 0) - (v < 0)

    def equals(self, other: Int) -> bool:
        return cmp(self, other) == 0

    def less_than(self, other: Int) -> bool:
        return cmp(self, other) < 0

    def less_than_equal(self, other: Int) -> bool:
        return cmp(self, other) <= 0

    def greater_than(self, other: Int) -> bool:
        return cmp(self, other) > 0

    def greater_than_equal(self, other: Int) -> bool:
        return cmp(self, other) >= 0

    def is_zero(self) -> bool:
        return self._require() == 0

    def is_nil(self) -> bool:
        return self.value is None

    def nil_or_zero(self) -> bool:
        return self.value is None or self.value == 0

    def to_bytes(self) -> bytes:
        """Encode as a sign byte followed by the big-endian magnitude; zero is empty."""
        if self.value is None:
            raise ValueError("failed to convert to bytes, big is nil")
        if self.value == 0:
            return b""
        magnitude = abs(self.value)
        body = magnitude.to_bytes((magnitude.bit_length() + 7) // 8, "big")
        return (b"\x00" if self.value > 0 else b"\x01") + body

    def to_json(self) -> str:
        """Return the JSON text: the decimal value as a string."""
        return json.dumps(str(self.value if self.value is not None else 0))

    def marshal_cbor(self, stream: BinaryIO) -> None:
        """Write the value as a CBOR byte string."""
        encoded = (self if self.value is not None else zero()).to_bytes()
        if len(encoded) > BIG_INT_MAX_SERIALIZED_LEN:
            raise CborError(f"big integer byte array too long ({len(encoded)} bytes)")
        stream.write(encode_header(MajorType.BYTE_STRING, len(encoded)))
        stream.write(encoded)

    @classmethod
    def unmarshal_cbor(cls, stream: BinaryIO) -> Int:
        """Read a value written by ``marshal_cbor``."""
        major, extra = read_header(stream)
        if major != MajorType.BYTE_STRING:
            raise CborError(f"cbor input for fil big int was not a byte string ({major:x})")
        if extra == 0:
            return cls(0)
        if extra > BIG_INT_MAX_SERIALIZED_LEN:
            raise CborError(f"big integer byte array too long ({extra} bytes)")
        return cls(from_bytes(read_exact(stream, extra)).value)


def zero() -> Int:
    return Int(0)


def from_string(s: str) -> Int:
    """Parse a base-10 integer."""
    if not _DECIMAL.fullmatch(s):
        raise ValueError("failed to parse string as a big int")
    return Int(int(s))


def must_from_string(s: str) -> Int:
    """Parse a base-10 integer that is known to be valid."""
    return from_string(s)


def from_json(data: Union[str, bytes]) -> Int:
    """Parse JSON text holding the decimal value as a string."""
    text = data.decode() if isinstance(data, (bytes, bytearray)) else data
    decoded = json.loads(text)
    if not isinstance(decoded, str):
        raise ValueError(
            f"json: cannot unmarshal {type(decoded).__name__} into Go value of type string"
        )
    if not _DECIMAL.fullmatch(decoded):
        raise ValueError(f"failed to parse big string: '{text}'")
    return Int(int(decoded))


def from_bytes(buf: bytes) -> Int:
    """Decode the sign-prefixed form produced by ``Int.to_bytes``."""
    if not buf:
        return Int(0)
    prefix = buf[0]
    if prefix not in (0, 1):
        raise ValueError(f"big int prefix should be either 0 or 1, got {prefix}")
    magnitude = int.from_bytes(buf[1:], "big")
    return Int(-magnitude if prefix == 1 else magnitude)


def positive_from_unsigned_bytes(b: bytes) -> Int:
    """Interpret ``b`` as a big-endian unsigned magnitude."""
    return Int(int.from_bytes(b, "big"))


def add(a: Int, b: Int) -> Int:
    return Int(a._require() + b._require())


def sub(a: Int, b: Int) -> Int:
    return Int(a._require() - b._require())


def mul(a: Int, b: Int) -> Int:
    return Int(a._require() * b._require())


def mod(a: Int, b: Int) -> Int:
    """Euclidean modulus: the result is never negative."""
    return Int(a._require() % abs(b._require()))


def div(a: Int, b: Int) -> Int:
    """Euclidean division, paired with ``mod``."""
    x, y = a._require(), b._require()
    remainder = x % abs(y)
    return Int((x - remainder) // y)


def exp(a: Int, e: Int) -> Int:
    """Return a**e, or 1 when e <= 0."""
    power = e._require()
    base = a._require()
    return Int(1 if power <= 0 else base**power)


def lsh(a: Int, n: int) -> Int:
    if n < 0:
        raise ValueError("shift count must be non-negative")
    return Int(a._require() << n)


def rsh(a: Int, n: int) -> Int:
    if n < 0:
        raise ValueError("shift count must be non-negative")
    return Int(a._require() >> n)


def bit_len(a: Int) -> int:
    """Length in bits of the absolute value."""
    return a._require().bit_length()


def cmp(a: Int, b: Int) -> int:
    x, y = a._require(), b._require()
    return (x > y) - (x < y)


def maximum(x: Int, y: Int) -> Int:
    return x if x.greater_than(y) else y


def minimum(x: Int, y: Int) -> Int:
    return x if x.less_than(y) else y


def total(*args: Int) -> Int:
    result = zero()
    for value in args:
        result = add(result, value)
    return result


def product(*args: Int) -> Int:
    result = Int(1)
    for value in args:
        result = mul(result, value)
    return result


def subtract(num: Int, *args: Int) -> Int:
    result = num
    for value in args:
        result = sub(result, value)
    return result