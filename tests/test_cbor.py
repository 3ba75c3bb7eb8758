import io

import pytest

from coretypes.cbor import (
    CborError,
    MajorType,
    encode_header,
    read_exact,
    read_header,
    write_header,
)

BOUNDARY_VALUES = [0, 1, 23, 24, 255, 256, 65535, 65536, 2**32 - 1, 2**32, 2**64 - 1]


def test_array_headers_match_fixed_prefixes():
    assert encode_header(MajorType.ARRAY, 2) == bytes([130])
    assert encode_header(MajorType.ARRAY, 4) == bytes([132])


def test_empty_byte_string_header():
    assert encode_header(MajorType.BYTE_STRING, 0) == b"@"


@pytest.mark.parametrize("major", list(MajorType))
@pytest.mark.parametrize("value", BOUNDARY_VALUES)
def test_header_round_trip(major, value):
    stream = io.BytesIO(encode_header(major, value))
    assert read_header(stream) == (major, value)
    assert stream.read() == b""


@pytest.mark.parametrize("value", BOUNDARY_VALUES)
def test_write_header_matches_encode(value):
    stream = io.BytesIO()
    write_header(stream, MajorType.TEXT_STRING, value)
    assert stream.getvalue() == encode_header(MajorType.TEXT_STRING, value)


def test_header_lengths_are_monotonic():
    lengths = [len(encode_header(MajorType.UNSIGNED_INT, v)) for v in BOUNDARY_VALUES]
    assert lengths == sorted(lengths)
    assert lengths[0] == 1


def test_read_header_decodes_known_prefix():
    assert read_header(io.BytesIO(bytes([132]))) == (MajorType.ARRAY, 4)


@pytest.mark.parametrize("value", [-1, 2**64])
def test_encode_header_rejects_out_of_range(value):
    with pytest.raises(CborError):
        encode_header(MajorType.UNSIGNED_INT, value)


def test_read_header_rejects_non_canonical():
    with pytest.raises(CborError, match="not canonical"):
        read_header(io.BytesIO(b"\x18\x05"))


def test_read_header_rejects_reserved_length_code():
    with pytest.raises(CborError, match="invalid header"):
        read_header(io.BytesIO(b"\x1c"))


def test_read_header_on_empty_stream():
    with pytest.raises(CborError, match="EOF"):
        read_header(io.BytesIO(b""))


def test_read_header_truncated_value():
    with pytest.raises(CborError, match="unexpected EOF"):
        read_header(io.BytesIO(b"\x19\x01"))


def test_read_exact_returns_requested_bytes():
    stream = io.BytesIO(b"abcdef")
    assert read_exact(stream, 4) == b"abcd"
    assert stream.read() == b"ef"


def test_read_exact_short_stream():
    with pytest.raises(CborError, match="unexpected EOF"):
        read_exact(io.BytesIO(b"7 bytes"), 10)


def test_read_exact_zero_bytes():
    assert read_exact(io.BytesIO(b""), 0) == b""