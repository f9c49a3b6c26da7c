import asyncio
import json
import logging
import time
from typing import List, Optional, Sequence

import aiohttp
from web3 import AsyncWeb3, AsyncHTTPProvider, Web3
from web3.middleware import ExtraDataToPOAMiddleware

from peggedsupply.misc.adapter_SupplyReader import SupplyReaderAdapter
from peggedsupply.misc.helper_functions import api_get_call, api_post_call, retry_call
from peggedsupply.misc.sdk_cache import SdkCache
from peggedsupply.pegged_config import chain_families, supply_reader_chains

logger = logging.getLogger("pegged_supply.chain_api")

ERC20_ABI = [
    {"constant": True, "inputs": [], "name": "totalSupply", "outputs": [{"name": "", "type": "uint256"}], "type": "function"},
    {"constant": True, "inputs": [], "name": "decimals", "outputs": [{"name": "", "type": "uint8"}], "type": "function"},
    {"constant": True, "inputs": [{"name": "_owner", "type": "address"}], "name": "balanceOf", "outputs": [{"name": "balance", "type": "uint256"}], "type": "function"},
]


class ChainApi:
    """
    Handle bound to one chain, handed to every supply source of that chain.
    Raw amounts are returned as integers in the token's smallest unit.
    Families that cannot serve an operation raise NotImplementedError.
    """

    def __init__(self, chain: str, timestamp: Optional[int] = None, block: Optional[int] = None, cache: Optional[SdkCache] = None):
        self.chain = chain
        self.timestamp = timestamp if timestamp is not None else round(time.time()) - 60
        self.block = block
        self.cache = cache if cache is not None else SdkCache()

    async def total_supply(self, address: str, method: str = "totalSupply") -> int:
        raise NotImplementedError(f"total_supply is not supported on chain {self.chain}")

    async def total_supplies(self, addresses: Sequence[str], method: str = "totalSupply") -> List[int]:
        return list(await asyncio.gather(*[self.total_supply(address, method) for address in addresses]))

    async def decimals(self, address: str) -> int:
        raise NotImplementedError(f"decimals is not supported on chain {self.chain}")

    async def decimals_many(self, addresses: Sequence[str]) -> List[int]:
        return list(await asyncio.gather(*[self.decimals(address) for address in addresses]))

    async def balance_of(self, token: str, owner: str) -> int:
        raise NotImplementedError(f"balance_of is not supported on chain {self.chain}")

    async def balances_of(self, token: str, owners: Sequence[str]) -> List[int]:
        return list(await asyncio.gather(*[self.balance_of(token, owner) for owner in owners]))

    async def close(self):
        pass

    def _cache_key(self, address: str, field: str) -> str:
        return f"{self.chain}:{address.lower()}:{field}"


class HttpChainApi(ChainApi):
    """Chains only reachable through asset specific http apis, sources talk to those directly."""

    def __init__(self, chain: str, **kwargs):
        super().__init__(chain, **kwargs)
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self):
        if self._session is not None and not self._session.closed:
            await self._session.close()


class EVMChainApi(ChainApi):
    """ERC20 reads over web3, batched through the SupplyReader contract when it is deployed."""

    def __init__(self, chain: str, rpc_url: str, use_supply_reader: bool = False, **kwargs):
        super().__init__(chain, **kwargs)
        self.rpc_url = rpc_url
        self.w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url, request_kwargs={"timeout": 30}))

        # Apply middleware for PoA chains if needed
        if chain != 'ethereum':
            self.w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

        self.supply_reader = SupplyReaderAdapter(self.w3) if use_supply_reader else None

    @property
    def block_identifier(self):
        return self.block if self.block is not None else "latest"

    def _contract(self, address: str, method: str = "totalSupply"):
        abi = ERC20_ABI
        if method not in ("totalSupply", "decimals", "balanceOf"):
            abi = ERC20_ABI + [{"constant": True, "inputs": [], "name": method, "outputs": [{"name": "", "type": "uint256"}], "type": "function"}]
        return self.w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

    async def total_supply(self, address: str, method: str = "totalSupply") -> int:
        contract = self._contract(address, method)
        supply_func = getattr(contract.functions, method)
        return await retry_call(supply_func().call, block_identifier=self.block_identifier)

    async def total_supplies(self, addresses: Sequence[str], method: str = "totalSupply") -> List[int]:
        if self.supply_reader is not None and method == "totalSupply":
            try:
                return list(await retry_call(self.supply_reader.get_total_supplies, addresses, self.block))
            except Exception as e:
                logger.warning(f"SupplyReader failed on {self.chain} for {addresses}, falling back to single calls: {e}")
        return await super().total_supplies(addresses, method)

    async def decimals(self, address: str) -> int:
        key = self._cache_key(address, "decimals")
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        decimals = await retry_call(self._contract(address).functions.decimals().call)
        self.cache.set(key, decimals)
        return decimals

    async def decimals_many(self, addresses: Sequence[str]) -> List[int]:
        missing = [address for address in addresses if self.cache.get(self._cache_key(address, "decimals")) is None]
        if self.supply_reader is not None and missing:
            try:
                batched = await retry_call(self.supply_reader.get_decimals, missing, self.block)
                for address, decimals in zip(missing, batched):
                    self.cache.set(self._cache_key(address, "decimals"), int(decimals))
            except Exception as e:
                logger.warning(f"SupplyReader failed on {self.chain} for decimals of {missing}, falling back to single calls: {e}")
        return await super().decimals_many(addresses)

    async def balance_of(self, token: str, owner: str) -> int:
        contract = self._contract(token)
        return await retry_call(
            contract.functions.balanceOf(Web3.to_checksum_address(owner)).call,
            block_identifier=self.block_identifier,
        )

    async def balances_of(self, token: str, owners: Sequence[str]) -> List[int]:
        if self.supply_reader is not None:
            try:
                return list(await retry_call(self.supply_reader.token_balances, owners, token, self.block))
            except Exception as e:
                logger.warning(f"SupplyReader failed on {self.chain} for balances of {token}, falling back to single calls: {e}")
        return await super().balances_of(token, owners)

    async def close(self):
        await self.w3.provider.disconnect()


class SolanaChainApi(HttpChainApi):
    """SPL token reads over the solana json rpc."""

    def __init__(self, chain: str, rpc_url: str, **kwargs):
        super().__init__(chain, **kwargs)
        self.rpc_url = rpc_url

    async def _rpc(self, method: str, params: list):
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}
        result = await api_post_call(self.rpc_url, payload, session=self.session)
        if "error" in result:
            raise RuntimeError(f"Solana RPC error for {method}: {result['error']}")
        return result["result"]

    async def total_supply(self, address: str, method: str = "totalSupply") -> int:
        result = await self._rpc("getTokenSupply", [address])
        value = result["value"]
        self.cache.set(self._cache_key(address, "decimals"), int(value["decimals"]))
        return int(value["amount"])

    async def decimals(self, address: str) -> int:
        key = self._cache_key(address, "decimals")
        if self.cache.get(key) is None:
            await self.total_supply(address)
        return self.cache.get(key)

    async def balance_of(self, token: str, owner: str) -> int:
        result = await self._rpc("getTokenAccountsByOwner", [owner, {"mint": token}, {"encoding": "jsonParsed"}])
        total = 0
        for account in result["value"]:
            total += int(account["account"]["data"]["parsed"]["info"]["tokenAmount"]["amount"])
        return total


class TezosChainApi(HttpChainApi):
    """FA1.2/FA2 token reads through the tzkt indexer."""

    def __init__(self, chain: str, api_url: str, **kwargs):
        super().__init__(chain, **kwargs)
        self.api_url = api_url.rstrip("/")

    async def _token(self, address: str) -> dict:
        tokens = await api_get_call(f"{self.api_url}/tokens?contract={address}&tokenId=0", session=self.session)
        if not tokens:
            raise RuntimeError(f"Token {address} not found on tzkt")
        return tokens[0]

    async def total_supply(self, address: str, method: str = "totalSupply") -> int:
        token = await self._token(address)
        decimals = (token.get("metadata") or {}).get("decimals")
        if decimals is not None:
            self.cache.set(self._cache_key(address, "decimals"), int(decimals))
        return int(token["totalSupply"])

    async def decimals(self, address: str) -> int:
        key = self._cache_key(address, "decimals")
        if self.cache.get(key) is None:
            await self.total_supply(address)
        decimals = self.cache.get(key)
        if decimals is None:
            raise RuntimeError(f"tzkt has no decimals metadata for {address}")
        return decimals


class NearChainApi(HttpChainApi):
    """NEP-141 token reads through view calls on the near rpc."""

    def __init__(self, chain: str, rpc_url: str, **kwargs):
        super().__init__(chain, **kwargs)
        self.rpc_url = rpc_url

    async def view_call(self, account_id: str, method_name: str):
        payload = {
            "jsonrpc": "2.0",
            "id": "dontcare",
            "method": "query",
            "params": {
                "request_type": "call_function",
                "finality": "final",
                "account_id": account_id,
                "method_name": method_name,
                "args_base64": "e30=",  # {}
            },
        }
        result = await api_post_call(self.rpc_url, payload, session=self.session)
        if "error" in result:
            raise RuntimeError(f"Near RPC error for {account_id}.{method_name}: {result['error']}")
        return json.loads(bytes(result["result"]["result"]).decode())

    async def total_supply(self, address: str, method: str = "ft_total_supply") -> int:
        if method == "totalSupply":
            method = "ft_total_supply"
        return int(await self.view_call(address, method))

    async def decimals(self, address: str) -> int:
        key = self._cache_key(address, "decimals")
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        metadata = await self.view_call(address, "ft_metadata")
        self.cache.set(key, int(metadata["decimals"]))
        return int(metadata["decimals"])


class CosmosChainApi(HttpChainApi):
    """Bank module supply reads through the cosmos.directory rest proxy. Denoms carry no decimals."""

    def __init__(self, chain: str, rest_url: str, **kwargs):
        super().__init__(chain, **kwargs)
        self.rest_url = rest_url.rstrip("/")

    async def total_supply(self, address: str, method: str = "totalSupply") -> int:
        url = f"{self.rest_url}/{self.chain}/cosmos/bank/v1beta1/supply/by_denom?denom={address}"
        res = await api_get_call(url, session=self.session)
        return int(res["amount"]["amount"])


def get_chain_api(chain: str, settings, cache: Optional[SdkCache] = None, timestamp: Optional[int] = None) -> ChainApi:
    """Create the chain api matching the family of a chain (see pegged_config.chain_families)."""
    family = chain_families.get(chain, "evm")
    kwargs = {"timestamp": timestamp, "cache": cache}
    if family == "evm":
        return EVMChainApi(chain, settings.get_rpc(chain), use_supply_reader=chain in supply_reader_chains, **kwargs)
    elif family == "solana":
        return SolanaChainApi(chain, settings.solana_rpc, **kwargs)
    elif family == "tezos":
        return TezosChainApi(chain, settings.tzkt_api, **kwargs)
    elif family == "near":
        return NearChainApi(chain, settings.near_rpc, **kwargs)
    elif family == "cosmos":
        return CosmosChainApi(chain, settings.cosmos_rest, **kwargs)
    elif family == "http":
        return HttpChainApi(chain, **kwargs)
    raise ValueError(f"Unknown chain family {family} for chain {chain}")
