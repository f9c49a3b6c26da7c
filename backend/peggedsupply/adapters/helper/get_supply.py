import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Awaitable, Callable, ClassVar, Dict, Optional, Sequence, Tuple, Union

from peggedsupply.adapters.chain_api import ChainApi
from peggedsupply.balances import Balance, PegType, sum_single_balance
from peggedsupply.misc.helper_functions import to_float_amount

logger = logging.getLogger("pegged_supply.sources")


class SourceKind(str, Enum):
    NATIVE_ISSUED = "native_issued"
    ESCROWED_RESERVE = "escrowed_reserve"
    BRIDGED_IN = "bridged_in"
    BRIDGE_MINUS_RESERVE = "bridge_minus_reserve"
    CUSTOM = "custom"


class SupplySource(ABC):
    """
    One way of reading the amount of a pegged asset for one issuance type on one chain.

    `chain` names the chain whose api the source reads from. None means the chain the
    source is registered on, set it to read e.g. an Ethereum lockbox for another chain.
    """
    kind: ClassVar[SourceKind]

    def __init__(self, peg_type: Union[str, PegType] = PegType.PEGGED_USD, chain: Optional[str] = None):
        self.peg_type = PegType.parse(peg_type)
        self.chain = chain

    @abstractmethod
    async def fetch(self, api: ChainApi) -> Balance:
        ...

    def __repr__(self):
        return f"{type(self).__name__}(kind={self.kind.value}, chain={self.chain}, peg_type={self.peg_type.value})"


async def _resolve_decimals(api: ChainApi, addresses: Sequence[str], decimals: Optional[int]):
    if decimals is not None:
        return [decimals] * len(addresses)
    return await api.decimals_many(addresses)


class NativeIssued(SupplySource):
    """Total issued quantity of token(s) on their home chain, attributed to 'minted'."""
    kind = SourceKind.NATIVE_ISSUED

    def __init__(self, addresses: Union[str, Sequence[str]], decimals: Optional[int] = None, peg_type=PegType.PEGGED_USD,
                 method: str = "totalSupply", chain: Optional[str] = None):
        super().__init__(peg_type, chain)
        self.addresses = [addresses] if isinstance(addresses, str) else list(addresses)
        self.decimals = decimals
        self.method = method

    async def fetch(self, api: ChainApi) -> Balance:
        balances = Balance()
        supplies = await api.total_supplies(self.addresses, self.method)
        decimals = await _resolve_decimals(api, self.addresses, self.decimals)
        for supply, token_decimals in zip(supplies, decimals):
            sum_single_balance(balances, self.peg_type, to_float_amount(supply, token_decimals), "issued", False)
        return balances


class EscrowedReserve(SupplySource):
    """Issued token(s) held by known reserve/custody addresses, attributed to 'unreleased'."""
    kind = SourceKind.ESCROWED_RESERVE

    def __init__(self, tokens: Union[str, Sequence[str]], owners: Union[str, Sequence[str]], decimals: Optional[int] = None,
                 peg_type=PegType.PEGGED_USD, chain: Optional[str] = None):
        super().__init__(peg_type, chain)
        self.tokens = [tokens] if isinstance(tokens, str) else list(tokens)
        self.owners = [owners] if isinstance(owners, str) else list(owners)
        self.decimals = decimals

    async def fetch(self, api: ChainApi) -> Balance:
        balances = Balance()
        decimals = await _resolve_decimals(api, self.tokens, self.decimals)
        for token, token_decimals in zip(self.tokens, decimals):
            for reserve in await api.balances_of(token, self.owners):
                sum_single_balance(balances, self.peg_type, to_float_amount(reserve, token_decimals))
        return balances


class BridgedIn(SupplySource):
    """
    Total supply of wrapped/bridged copies on a foreign chain.
    Tracked per address, or merged under `bridge_name` when the addresses mean nothing individually.
    """
    kind = SourceKind.BRIDGED_IN

    def __init__(self, addresses: Union[str, Sequence[str]], decimals: Optional[int] = None, bridge_name: Optional[str] = None,
                 bridged_from_chain: Optional[str] = None, peg_type=PegType.PEGGED_USD, chain: Optional[str] = None):
        super().__init__(peg_type, chain)
        self.addresses = [addresses] if isinstance(addresses, str) else list(addresses)
        self.decimals = decimals
        self.bridge_name = bridge_name
        self.bridged_from_chain = bridged_from_chain

    async def fetch(self, api: ChainApi) -> Balance:
        balances = Balance()
        supplies = await api.total_supplies(self.addresses)
        decimals = await _resolve_decimals(api, self.addresses, self.decimals)
        for address, supply, token_decimals in zip(self.addresses, supplies, decimals):
            amount = to_float_amount(supply, token_decimals)
            if self.bridge_name:
                sum_single_balance(balances, self.peg_type, amount, self.bridge_name, False, self.bridged_from_chain)
            else:
                sum_single_balance(balances, self.peg_type, amount, address, True)
        return balances


class SupplyInBridge(SupplySource):
    """Bridged supply measured as the token balance of a lockbox, usually on Ethereum."""
    kind = SourceKind.BRIDGED_IN

    def __init__(self, token: str, owner: str, decimals: int, peg_type=PegType.PEGGED_USD, chain: Optional[str] = "ethereum"):
        super().__init__(peg_type, chain)
        self.token = token
        self.owner = owner
        self.decimals = decimals

    async def fetch(self, api: ChainApi) -> Balance:
        balances = Balance()
        bridged = await api.balance_of(self.token, self.owner)
        sum_single_balance(balances, self.peg_type, to_float_amount(bridged, self.decimals), self.owner, True)
        return balances


class BridgeMinusReserve(SupplySource):
    """Total supply of a bridge custody token minus what known non circulating reserves hold of it."""
    kind = SourceKind.BRIDGE_MINUS_RESERVE

    def __init__(self, bridge_address: str, reserve_addresses: Sequence[str], decimals: int, bridge_name: Optional[str] = None,
                 bridged_from_chain: Optional[str] = None, peg_type=PegType.PEGGED_USD, chain: Optional[str] = None):
        super().__init__(peg_type, chain)
        self.bridge_address = bridge_address
        self.reserve_addresses = list(reserve_addresses)
        self.decimals = decimals
        self.bridge_name = bridge_name
        self.bridged_from_chain = bridged_from_chain

    async def fetch(self, api: ChainApi) -> Balance:
        balances = Balance()
        total = int(await api.total_supply(self.bridge_address))
        for reserve in await api.balances_of(self.bridge_address, self.reserve_addresses):
            total -= int(reserve)
        amount = to_float_amount(total, self.decimals)
        if self.bridge_name:
            sum_single_balance(balances, self.peg_type, amount, self.bridge_name, False, self.bridged_from_chain)
        else:
            sum_single_balance(balances, self.peg_type, amount, self.bridge_address, True)
        return balances


class CustomSource(SupplySource):
    """Escape hatch for asset specific apis. fetch_fn receives the chain api and returns a Balance or a plain mapping."""
    kind = SourceKind.CUSTOM

    def __init__(self, fetch_fn: Callable[[ChainApi], Awaitable[Union[Balance, dict]]], description: str = "",
                 peg_type=PegType.PEGGED_USD, chain: Optional[str] = None):
        super().__init__(peg_type, chain)
        self.fetch_fn = fetch_fn
        self.description = description or getattr(fetch_fn, "__name__", "custom")

    async def fetch(self, api: ChainApi) -> Balance:
        return await self.fetch_fn(api)

    def __repr__(self):
        return f"CustomSource({self.description}, chain={self.chain})"


# chain -> issuance type -> supply source
PeggedIssuanceAdapter = Dict[str, Dict[str, SupplySource]]
BridgeAndReserveAddressPair = Tuple[str, Sequence[str]]


## ----------------- Builders --------------------

def bridged_supply(chain: str, decimals: int, addresses: Sequence[str], bridge_name: str = None,
                   bridged_from_chain: str = None, peg_type=PegType.PEGGED_USD) -> BridgedIn:
    return BridgedIn(addresses, decimals, bridge_name, bridged_from_chain, peg_type, chain=chain)


def bridged_supply_subtract_reserve(chain: str, decimals: int, bridge_and_reserve_addresses: BridgeAndReserveAddressPair,
                                    bridge_name: str = None, bridged_from_chain: str = None,
                                    peg_type=PegType.PEGGED_USD) -> BridgeMinusReserve:
    bridge_address, reserve_addresses = bridge_and_reserve_addresses
    return BridgeMinusReserve(bridge_address, reserve_addresses, decimals, bridge_name, bridged_from_chain, peg_type, chain=chain)


def supply_in_ethereum_bridge(target: str, owner: str, decimals: int, peg_type=PegType.PEGGED_USD) -> SupplyInBridge:
    return SupplyInBridge(target, owner, decimals, peg_type, chain="ethereum")


def solana_minted_or_bridged(targets: Sequence[str], peg_type=PegType.PEGGED_USD, bridged: bool = False) -> SupplySource:
    """SPL mints, decimals come from the token supply answer."""
    if bridged:
        return BridgedIn(targets, None, peg_type=peg_type, chain="solana")
    return NativeIssued(targets, None, peg_type=peg_type, chain="solana")


def cosmos_supply(chain: str, tokens: Sequence[str], decimals: int, bridged_from_chain: str,
                  peg_type=PegType.PEGGED_USD) -> CustomSource:
    """Bank supply of ibc denoms, every denom keeps its own provenance record."""
    async def _cosmos_supply(api: ChainApi) -> Balance:
        balances = Balance()
        for token in tokens:
            supply = await api.total_supply(token)
            sum_single_balance(balances, peg_type, to_float_amount(supply, decimals), token, False, bridged_from_chain)
        return balances

    return CustomSource(_cosmos_supply, f"{chain} bank supply of {', '.join(tokens)}", peg_type, chain=chain)


def osmosis_supply(tokens: Sequence[str], decimals: int, bridged_from_chain: str, peg_type=PegType.PEGGED_USD) -> CustomSource:
    return cosmos_supply("osmosis", tokens, decimals, bridged_from_chain, peg_type)


def kujira_supply(tokens: Sequence[str], decimals: int, bridged_from_chain: str, peg_type=PegType.PEGGED_USD) -> CustomSource:
    return cosmos_supply("kujira", tokens, decimals, bridged_from_chain, peg_type)


def add_chain_exports(chain_contracts: dict, adapter: PeggedIssuanceAdapter = None, decimals: int = 18,
                      peg_type: Union[str, PegType] = None) -> PeggedIssuanceAdapter:
    """
    Build an adapter from a plain chain_contracts config. Roles already present in `adapter` are kept.

    Understood keys: issued, unreleased/reserves, bridgedFromETH, pegType, bridgeOnETH (ignored).
    """
    adapter = adapter if adapter is not None else {}
    for chain, chain_config in chain_contracts.items():
        chain_exports = adapter.setdefault(chain, {})
        chain_peg_type = peg_type or chain_config.get("pegType") or PegType.PEGGED_USD

        for key in chain_config:
            if key in ("bridgeOnETH", "pegType"):
                continue
            elif key == "issued":
                if "minted" not in chain_exports:
                    chain_exports["minted"] = NativeIssued(chain_config["issued"], None, chain_peg_type)
            elif key in ("unreleased", "reserves"):
                if "unreleased" not in chain_exports:
                    issued = chain_config.get("issued")
                    if not issued:
                        logger.warning(f"Ignored: {key} without issued contract in {chain} config for add_chain_exports")
                        continue
                    issued = [issued] if isinstance(issued, str) else issued
                    owners = chain_config.get("unreleased") or chain_config.get("reserves")
                    chain_exports["unreleased"] = EscrowedReserve(issued, owners, None, chain_peg_type)
            elif key == "bridgedFromETH":
                bridged_from_eth = chain_config["bridgedFromETH"]
                if isinstance(bridged_from_eth, str):
                    bridged_from_eth = [bridged_from_eth]
                if "ethereum" not in chain_exports:
                    chain_exports["ethereum"] = bridged_supply(chain, decimals, bridged_from_eth, peg_type=chain_peg_type)
            else:
                logger.info(f"Ignored: Unknown key {key} in {chain} config for add_chain_exports")
    return adapter
