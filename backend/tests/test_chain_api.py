"""
Chain apis with their transport mocked out.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest

from peggedsupply.adapters.chain_api import CosmosChainApi, EVMChainApi, NearChainApi, SolanaChainApi, TezosChainApi
from peggedsupply.adapters.helper.get_supply import NativeIssued

TOKENS = ["0x4F604735c1cF31399C6E711D5962b2B3E0225AD3", "0x6ba75d640bebfe5da1197bb5a2aff3327789b5d3"]


@pytest.mark.asyncio
async def test_evm_total_supplies_batched_through_supply_reader():
    api = EVMChainApi("ethereum", "https://node.example", use_supply_reader=True)
    api.supply_reader.get_total_supplies = AsyncMock(return_value=[1, 2])
    with patch.object(EVMChainApi, "total_supply", new=AsyncMock()) as single:
        assert await api.total_supplies(TOKENS) == [1, 2]
    single.assert_not_awaited()


@pytest.mark.asyncio
async def test_evm_falls_back_to_single_calls():
    api = EVMChainApi("ethereum", "https://node.example", use_supply_reader=True)
    api.supply_reader.get_total_supplies = AsyncMock(side_effect=Exception("execution reverted"))
    with patch.object(EVMChainApi, "total_supply", new=AsyncMock(side_effect=[5, 6])):
        assert await api.total_supplies(TOKENS) == [5, 6]


@pytest.mark.asyncio
async def test_evm_decimals_are_cached():
    api = EVMChainApi("polygon", "https://node.example")
    api.cache.set(api._cache_key(TOKENS[0], "decimals"), 6)
    assert await api.decimals(TOKENS[0]) == 6


@pytest.mark.asyncio
async def test_evm_decimals_batched_through_supply_reader():
    api = EVMChainApi("ethereum", "https://node.example", use_supply_reader=True)
    api.supply_reader.get_decimals = AsyncMock(return_value=[6, 18])
    with patch.object(EVMChainApi, "_contract") as contract:
        assert await api.decimals_many(TOKENS) == [6, 18]
        # served from the cache the second time
        assert await api.decimals_many(TOKENS) == [6, 18]
    contract.assert_not_called()
    api.supply_reader.get_decimals.assert_awaited_once_with(TOKENS, None)
    assert api.cache.get(api._cache_key(TOKENS[1], "decimals")) == 18


@pytest.mark.asyncio
async def test_evm_decimals_batch_only_asks_for_missing():
    api = EVMChainApi("ethereum", "https://node.example", use_supply_reader=True)
    api.cache.set(api._cache_key(TOKENS[0], "decimals"), 6)
    api.supply_reader.get_decimals = AsyncMock(return_value=[8])
    assert await api.decimals_many(TOKENS) == [6, 8]
    api.supply_reader.get_decimals.assert_awaited_once_with([TOKENS[1]], None)


@pytest.mark.asyncio
async def test_evm_decimals_batch_falls_back_to_single_calls():
    api = EVMChainApi("ethereum", "https://node.example", use_supply_reader=True)
    api.supply_reader.get_decimals = AsyncMock(side_effect=Exception("execution reverted"))
    with patch.object(EVMChainApi, "decimals", new=AsyncMock(side_effect=[6, 18])) as single:
        assert await api.decimals_many(TOKENS) == [6, 18]
    assert single.await_count == 2


@pytest.mark.asyncio
async def test_native_issued_reads_decimals_through_supply_reader():
    api = EVMChainApi("ethereum", "https://node.example", use_supply_reader=True)
    api.supply_reader.get_total_supplies = AsyncMock(return_value=[2 * 10**6, 3 * 10**18])
    api.supply_reader.get_decimals = AsyncMock(return_value=[6, 18])
    balance = await NativeIssued(TOKENS).fetch(api)
    assert balance == {"peggedUSD": 5.0}
    api.supply_reader.get_decimals.assert_awaited_once()


@pytest.mark.asyncio
async def test_solana_token_supply():
    api = SolanaChainApi("solana", "https://solana.example")
    answer = {"result": {"value": {"amount": "1500000", "decimals": 6}}}
    with patch("peggedsupply.adapters.chain_api.api_post_call", new=AsyncMock(return_value=answer)) as post:
        assert await api.total_supply("mint") == 1_500_000
        assert await api.decimals("mint") == 6
    assert post.await_count == 1
    assert post.await_args.args[1]["method"] == "getTokenSupply"


@pytest.mark.asyncio
async def test_solana_rpc_error():
    api = SolanaChainApi("solana", "https://solana.example")
    with patch("peggedsupply.adapters.chain_api.api_post_call", new=AsyncMock(return_value={"error": {"code": -32602}})):
        with pytest.raises(RuntimeError, match="getTokenSupply"):
            await api.total_supply("mint")


@pytest.mark.asyncio
async def test_tezos_supply_and_decimals():
    api = TezosChainApi("tezos", "https://api.tzkt.example/v1/")
    tokens = [{"totalSupply": "123000000", "metadata": {"decimals": "6"}}]
    with patch("peggedsupply.adapters.chain_api.api_get_call", new=AsyncMock(return_value=tokens)) as get:
        assert await api.total_supply("KT1abc") == 123_000_000
        assert await api.decimals("KT1abc") == 6
    assert get.await_args.args[0] == "https://api.tzkt.example/v1/tokens?contract=KT1abc&tokenId=0"


@pytest.mark.asyncio
async def test_near_view_call_decodes_bytes():
    api = NearChainApi("near", "https://near.example")
    raw = list(json.dumps("2500000000000000000").encode())
    with patch("peggedsupply.adapters.chain_api.api_post_call", new=AsyncMock(return_value={"result": {"result": raw}})) as post:
        assert await api.total_supply("usn") == 2_500_000_000_000_000_000
    assert post.await_args.args[1]["params"]["method_name"] == "ft_total_supply"


@pytest.mark.asyncio
async def test_cosmos_supply_by_denom():
    api = CosmosChainApi("osmosis", "https://rest.example")
    with patch("peggedsupply.adapters.chain_api.api_get_call", new=AsyncMock(return_value={"amount": {"denom": "ibc/X", "amount": "42"}})) as get:
        assert await api.total_supply("ibc/X") == 42
    assert get.await_args.args[0] == "https://rest.example/osmosis/cosmos/bank/v1beta1/supply/by_denom?denom=ibc/X"


@pytest.mark.asyncio
async def test_unsupported_operation():
    api = CosmosChainApi("osmosis", "https://rest.example")
    with pytest.raises(NotImplementedError):
        await api.balance_of("ibc/X", "osmo1abc")
