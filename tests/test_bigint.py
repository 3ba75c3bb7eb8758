import io

import pytest

from coretypes.bigint import (
    BIG_INT_MAX_SERIALIZED_LEN,
    Int,
    add,
    cmp,
    div,
    exp,
    from_bytes,
    from_json,
    from_string,
    lsh,
    maximum,
    minimum,
    mod,
    mul,
    positive_from_unsigned_bytes,
    product,
    sub,
    subtract,
    total,
    zero,
)
from coretypes.cbor import CborError, MajorType, encode_header


@pytest.mark.parametrize(
    "text",
    ["0", "1", "10", "-10", "9999", "12345678901234567891234567890123456789012345678901234567890"],
)
def test_serialization_round_trip(text):
    bi = from_string(text)
    buf = io.BytesIO()
    bi.marshal_cbor(buf)
    buf.seek(0)
    out = Int.unmarshal_cbor(buf)
    assert cmp(out, bi) == 0


def test_nil_marshals_as_zero():
    buf = io.BytesIO()
    Int().marshal_cbor(buf)
    assert buf.getvalue() == b"@"


def test_new_int():
    ta = Int(999)
    tb = Int(999)
    assert ta.equals(tb)
    assert str(ta) == "999"
    td = tb.copy()
    assert td.equals(tb)
    assert td.value == 999


def test_json_round_trip():
    ta = Int(54321)
    res = ta.to_json()
    assert res == '"54321"'
    assert from_json(res) == ta
    assert from_json(res.encode()) == ta


def test_json_garbage_rejected():
    with pytest.raises(ValueError):
        from_json("123garbage")


def test_json_non_decimal_string_rejected():
    with pytest.raises(ValueError, match="failed to parse big string"):
        from_json('"abc"')


def test_nil_json_is_zero():
    assert Int().to_json() == '"0"'


@pytest.mark.parametrize(
    "func, expected",
    [(add, 7000), (sub, 3000), (mul, 10000000), (div, 2), (mod, 1000)],
)
def test_operations(func, expected):
    assert func(Int(5000), Int(2000)) == Int(expected)


def test_comparisons():
    ta, tb, tc = Int(5000), Int(2000), Int(2000)
    assert cmp(ta, tb) == 1
    assert cmp(tb, ta) == -1
    assert cmp(tb, tc) == 0
    assert ta.greater_than(tb)
    assert not ta.less_than(tb)
    assert tb.equals(tc)
    assert Int().is_nil()


def test_euclidean_division():
    assert div(Int(-7), Int(2)) == Int(-4)
    assert mod(Int(-7), Int(2)) == Int(1)
    assert div(Int(7), Int(-2)) == Int(-3)
    assert mod(Int(7), Int(-2)) == Int(1)


def test_division_by_zero():
    with pytest.raises(ZeroDivisionError):
        div(Int(1), Int(0))


def test_exp():
    assert exp(Int(2), Int(10)) == Int(1024)
    assert exp(Int(2), Int(-1)) == Int(1)


def test_max_min():
    assert maximum(Int(3), Int(-3)) == Int(3)
    assert minimum(Int(3), Int(-3)) == Int(-3)
    assert maximum(zero(), zero()) == zero()


def test_copy():
    b1 = Int(1)
    assert b1.copy() == b1
    assert zero().copy() == zero()


def test_sum():
    assert total(Int(1), Int(2), Int(3), Int(4)) == Int(10)
    assert total(Int(20)) == Int(20)


def test_product():
    assert product(Int(1), Int(2), Int(3), Int(4)) == Int(24)
    assert product(Int(20)) == Int(20)


def test_subtract():
    assert subtract(Int(100), Int(20), Int(10), Int(5)) == Int(65)
    assert subtract(Int(20)) == Int(20)


def test_format():
    ta = Int(33333000000)
    assert f"{ta:s}" == "33333000000"
    assert f"{ta}" == "33333000000"
    assert f"{ta:<15d}" == "33333000000    "


def test_positive_from_unsigned_bytes():
    assert positive_from_unsigned_bytes(b"garbage") == Int(29099066505914213)
    raw = (12345).to_bytes(2, "big")
    res = positive_from_unsigned_bytes(raw)
    assert res == Int(12345)
    assert res.sign() == 1


def test_from_string():
    with pytest.raises(ValueError, match="failed to parse string as a big int"):
        from_string("garbage")
    assert from_string("12345") == Int(12345)


@pytest.mark.parametrize("value", [Int(0), Int(-1), Int(1), Int(10**18), lsh(Int(1), 80)])
def test_cbor_happy(value):
    buf = io.BytesIO()
    value.marshal_cbor(buf)
    buf.seek(0)
    assert Int.unmarshal_cbor(buf) == value


def test_cbor_marshal_too_large():
    giant = lsh(Int(1), 8 * (BIG_INT_MAX_SERIALIZED_LEN - 1))
    with pytest.raises(CborError):
        giant.marshal_cbor(io.BytesIO())


def test_cbor_unmarshal_too_large():
    data = encode_header(MajorType.BYTE_STRING, BIG_INT_MAX_SERIALIZED_LEN + 1)
    data += bytes(BIG_INT_MAX_SERIALIZED_LEN + 1)
    with pytest.raises(CborError):
        Int.unmarshal_cbor(io.BytesIO(data))


def test_cbor_unmarshal_wrong_major():
    with pytest.raises(CborError, match="not a byte string"):
        Int.unmarshal_cbor(io.BytesIO(encode_header(MajorType.ARRAY, 1)))


def test_bytes_round_trip():
    for value in [Int(0), Int(5), Int(-300), lsh(Int(1), 100)]:
        assert from_bytes(value.to_bytes()) == value


def test_from_bytes_bad_prefix():
    with pytest.raises(ValueError, match="prefix should be either 0 or 1"):
        from_bytes(b"\x02\x01")


def test_nil_to_bytes_fails():
    with pytest.raises(ValueError):
        Int().to_bytes()


def test_abs_and_neg():
    assert Int(-5).abs() == Int(5)
    assert Int(5).neg() == Int(-5)
    assert Int(0).nil_or_zero()
    assert Int().nil_or_zero()
    assert Int(0).is_zero()