import math

import pytest

from peggedsupply.balances import Balance, BridgeRecord, PegType, add_contribution, check_amount, sum_single_balance
from peggedsupply.errors import InvalidAmountError


def test_contributions_accumulate():
    balance = Balance()
    sum_single_balance(balance, "peggedUSD", 10)
    sum_single_balance(balance, PegType.PEGGED_USD, 5.5)
    assert balance == {"peggedUSD": 15.5}
    assert balance.bridges == {}


def test_first_contribution_starts_from_zero():
    balance = add_contribution(Balance(), "peggedEUR", 0)
    assert balance["peggedEUR"] == 0


def test_provenance_records_add_up_per_label():
    balance = Balance()
    sum_single_balance(balance, "peggedUSD", 100, "optics", False, "Celo")
    sum_single_balance(balance, "peggedUSD", 50, "optics", False)
    sum_single_balance(balance, "peggedUSD", 7, "0xabc", True)

    assert balance["peggedUSD"] == 157
    assert balance.bridges["optics"] == BridgeRecord(150, "optics", "Celo", False)
    assert balance.bridges["0xabc"].is_address
    assert balance.bridges["0xabc"].amount == 7


@pytest.mark.parametrize("amount", [float("nan"), float("inf"), "12", None, True])
def test_invalid_amounts_are_rejected(amount):
    balance = Balance()
    with pytest.raises(InvalidAmountError):
        sum_single_balance(balance, "peggedUSD", amount)
    assert balance == {}


def test_unknown_peg_type():
    with pytest.raises(ValueError, match="Unknown peg type"):
        sum_single_balance(Balance(), "peggedYEN", 1)


def test_check_amount_returns_float():
    assert check_amount(3) == 3.0
    assert isinstance(check_amount(3), float)


def test_coerce_plain_mapping():
    balance = Balance.coerce({
        "peggedUSD": 12.0,
        "bridges": {"wormhole": {"amount": 12.0, "bridge_name": "wormhole", "bridged_from_chain": "Ethereum"}},
    })
    assert balance == {"peggedUSD": 12.0}
    assert balance.bridges["wormhole"].bridged_from_chain == "Ethereum"
    assert balance.as_dict()["bridges"]["wormhole"]["amount"] == 12.0


def test_coerce_maps_camel_case_records():
    balance = Balance.coerce({
        "peggedUSD": 7.0,
        "bridges": {
            "0xlockbox": {"amount": 3.0, "bridgeName": "0xlockbox", "bridgedFromChain": "Ethereum", "isAddress": True},
            "axelar": {"amount": 4.0, "bridgedFromChain": "Axelar"},
        },
    })
    assert balance.bridges["0xlockbox"].bridged_from_chain == "Ethereum"
    assert balance.bridges["0xlockbox"].is_address
    assert balance.bridges["axelar"].bridge_name == "axelar"
    assert balance.bridges["axelar"].bridged_from_chain == "Axelar"


@pytest.mark.parametrize("record, message", [
    ({"amount": 1.0, "bridgedFrom": "Axelar"}, "unknown keys: bridgedFrom"),
    ({"bridgeName": "axelar"}, "has no amount"),
    (5.0, "must be a mapping"),
])
def test_coerce_rejects_malformed_records(record, message):
    with pytest.raises(ValueError, match=message):
        Balance.coerce({"peggedUSD": 1.0, "bridges": {"axelar": record}})


def test_copy_does_not_share_records():
    balance = sum_single_balance(Balance(), "peggedUSD", 1, "bridge")
    copied = balance.copy()
    sum_single_balance(copied, "peggedUSD", 1, "bridge")
    assert balance.bridges["bridge"].amount == 1
    assert math.isclose(copied.bridges["bridge"].amount, 2)
