"""
Every registered pegged asset builds a valid adapter.
"""

from unittest.mock import AsyncMock, patch

import pytest

from fakes import FakeChainApi
from peggedsupply.adapters.helper.get_supply import BridgedIn, CustomSource, EscrowedReserve, SupplyInBridge
from peggedsupply.adapters.pegged_assets.registry import available_assets, load_pegged_adapter
from peggedsupply.collection import validate_adapter
from peggedsupply.pegged_config import chain_contracts, known_chains, pegged_metadata


def test_every_asset_has_contracts():
    assert available_assets() == sorted(chain_contracts)


@pytest.mark.parametrize("asset", sorted(pegged_metadata))
def test_adapter_is_valid(asset):
    adapter = load_pegged_adapter(asset)
    validate_adapter(adapter, known_chains)
    peg_type = pegged_metadata[asset]["peg_type"]
    for issuances in adapter.values():
        for source in issuances.values():
            assert source.peg_type.value == peg_type


def test_adapter_is_fresh_each_call():
    first = load_pegged_adapter("glo_dollar")
    second = load_pegged_adapter("glo-dollar")
    assert first is not second
    assert first["ethereum"]["minted"] is not second["ethereum"]["minted"]


def test_unknown_asset():
    with pytest.raises(ValueError, match="Unknown pegged asset"):
        load_pegged_adapter("tether")


def test_celo_euro_bridges_from_celo():
    adapter = load_pegged_adapter("celo_euro")
    source = adapter["ethereum"]["celo"]
    assert isinstance(source, BridgedIn)
    assert source.bridge_name == "optics"
    assert source.bridged_from_chain == "Celo"
    assert set(adapter) == {"celo", "ethereum", "polygon", "solana"}


def test_first_digital_usd_collateral_is_unreleased():
    adapter = load_pegged_adapter("first_digital_usd")
    unreleased = adapter["ethereum"]["unreleased"]
    assert isinstance(unreleased, EscrowedReserve)
    assert unreleased.owners == chain_contracts["first_digital_usd"]["ethereum"]["collateral"]


def test_binance_usd_loopring_reads_ethereum_lockbox():
    adapter = load_pegged_adapter("binance_usd")
    loopring = adapter["loopring"]["ethereum"]
    assert isinstance(loopring, SupplyInBridge)
    assert loopring.chain == "ethereum"
    assert loopring.owner == chain_contracts["binance_usd"]["loopring"]["bridgeOnETH"][0]
    assert "ethereum" not in adapter["ethereum"]


@pytest.mark.asyncio
async def test_binance_usd_bsc_role_is_empty():
    source = load_pegged_adapter("binance_usd")["bsc"]["ethereum"]
    assert isinstance(source, CustomSource)
    assert await source.fetch(FakeChainApi("bsc")) == {}


@pytest.mark.asyncio
async def test_neutrino_reads_waves_asset_details():
    source = load_pegged_adapter("neutrino")["waves"]["minted"]
    api = FakeChainApi("waves")
    api.session = object()
    details = {"quantity": 860_000_000_000_000, "decimals": 6}

    with patch("peggedsupply.adapters.pegged_assets.neutrino.api_get_call", new=AsyncMock(return_value=details)) as get_call:
        balance = await source.fetch(api)

    assert balance == {"peggedUSD": 860_000_000.0}
    assert get_call.await_args.args[0].endswith("/assets/details/DG2xFkPdDwKUoBkzGAhQtLpSGzfXLiCYPEzeKH2Ad24p")


def test_vnx_tezos_reads_decimals_from_chain():
    adapter = load_pegged_adapter("vnx_gold")
    assert adapter["tezos"]["minted"].decimals is None
    assert adapter["ethereum"]["minted"].decimals == 18
    assert "avalanche" not in adapter
