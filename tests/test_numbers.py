import pytest

from coretypes.abi.numbers import (
    ActorID,
    ChainEpoch,
    DealID,
    MethodNum,
    new_token_amount,
)
from coretypes.bigint import Int


def test_actor_id_formats_as_decimal():
    assert str(ActorID(123)) == "123"
    assert f"{ActorID(123)}" == "123"


def test_unsigned_ids_format_as_signed():
    assert str(ActorID(2**64 - 1)) == "-1"
    assert str(MethodNum(2**64 - 1)) == "-1"


def test_chain_epoch_may_be_negative():
    assert str(ChainEpoch(-5)) == "-5"
    assert ChainEpoch(-5) < 0


def test_deal_id_behaves_as_int():
    deal = DealID(7)
    assert deal == 7
    assert str(deal) == "7"
    assert {deal: "x"}[7] == "x"


@pytest.mark.parametrize(
    "cls, value",
    [
        (ActorID, -1),
        (ActorID, 2**64),
        (MethodNum, -1),
        (DealID, 2**64),
        (ChainEpoch, 2**63),
        (ChainEpoch, -(2**63) - 1),
    ],
)
def test_out_of_range_values_are_rejected(cls, value):
    with pytest.raises(ValueError):
        cls(value)


def test_range_limits_are_accepted():
    assert ActorID(2**64 - 1) == 2**64 - 1
    assert ChainEpoch(-(2**63)) == -(2**63)
    assert ChainEpoch(2**63 - 1) == 2**63 - 1


def test_new_token_amount():
    amount = new_token_amount(42)
    assert amount == Int(42)
    assert amount.equals(Int(42))


def test_new_token_amount_rejects_out_of_range():
    with pytest.raises(ValueError):
        new_token_amount(2**63)