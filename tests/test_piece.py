import pytest

from coretypes.abi.piece import PaddedPieceSize, PieceInfo, UnpaddedPieceSize

PAIRS = [
    (127, 128),
    (1016, 1024),
    (34091302912, 34359738368),
]


@pytest.mark.parametrize("unpadded, padded", PAIRS)
def test_convert(unpadded, padded):
    UnpaddedPieceSize(unpadded).validate()
    PaddedPieceSize(padded).validate()
    assert UnpaddedPieceSize(unpadded).padded() == PaddedPieceSize(padded)
    assert PaddedPieceSize(padded).unpadded() == UnpaddedPieceSize(unpadded)


@pytest.mark.parametrize("unpadded, padded", PAIRS)
def test_swap_and_round_trip(unpadded, padded):
    converted_up = UnpaddedPieceSize(unpadded).padded()
    converted_up.validate()
    converted_down = PaddedPieceSize(padded).unpadded()
    converted_down.validate()

    back_up = UnpaddedPieceSize(unpadded).padded().unpadded()
    back_up.validate()
    back_down = PaddedPieceSize(padded).unpadded().padded()
    back_down.validate()

    assert isinstance(converted_up, PaddedPieceSize)
    assert isinstance(converted_down, UnpaddedPieceSize)
    assert back_up == unpadded
    assert back_down == padded


@pytest.mark.parametrize(
    "size, message",
    [
        (9, "minimum piece size is 127 bytes"),
        (128, "power of 2 multiple of 127"),
        (99453687, "power of 2 multiple of 127"),
        (1016 + 0x1000000, "power of 2 multiple of 127"),
    ],
)
def test_unpadded_unhappy(size, message):
    with pytest.raises(ValueError, match=message):
        UnpaddedPieceSize(size).validate()


@pytest.mark.parametrize(
    "size, message",
    [
        (8, "minimum padded piece size is 128 bytes"),
        (127, "minimum padded piece size is 128 bytes"),
        (99453687, "must be a power of 2"),
        (0xC00, "must be a power of 2"),
        (1025, "must be a power of 2"),
    ],
)
def test_padded_unhappy(size, message):
    with pytest.raises(ValueError, match=message):
        PaddedPieceSize(size).validate()


def test_negative_sizes_are_rejected():
    with pytest.raises(ValueError):
        UnpaddedPieceSize(-1)
    with pytest.raises(ValueError):
        PaddedPieceSize(2**64)


def test_piece_info_holds_size():
    info = PieceInfo(size=PaddedPieceSize(1024), piece_cid=b"\x01\x02")
    assert info.size.unpadded() == 1016
    assert info.piece_cid == b"\x01\x02"
    assert str(info.size) == "1024"