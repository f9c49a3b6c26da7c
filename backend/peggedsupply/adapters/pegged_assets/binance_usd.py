from peggedsupply.adapters.chain_api import ChainApi
from peggedsupply.adapters.helper.get_supply import (
    BridgedIn, CustomSource, NativeIssued, PeggedIssuanceAdapter,
    bridged_supply, osmosis_supply, solana_minted_or_bridged, supply_in_ethereum_bridge,
)
from peggedsupply.balances import Balance
from peggedsupply.pegged_config import chain_contracts, pegged_metadata

ASSET = "binance_usd"


async def _nothing_bridged(api: ChainApi) -> Balance:
    return Balance()


def build_adapter() -> PeggedIssuanceAdapter:
    """
    BUSD is issued on ethereum only. Binance-peg BUSD on bsc is backed off chain and
    reported as an empty bridge role.
    """
    contracts = chain_contracts[ASSET]
    peg_type = pegged_metadata[ASSET]["peg_type"]
    decimals = pegged_metadata[ASSET]["decimals"]
    issued = contracts["ethereum"]["issued"]

    adapter = {
        "ethereum": {"minted": NativeIssued(issued, decimals, peg_type)},
        "bsc": {"ethereum": CustomSource(_nothing_bridged, "binance-peg, not tracked", peg_type)},
        "solana": {"ethereum": solana_minted_or_bridged(contracts["solana"]["bridgedFromETH"], peg_type, bridged=True)},
        "loopring": {"ethereum": supply_in_ethereum_bridge(issued[0], contracts["loopring"]["bridgeOnETH"][0], decimals, peg_type)},
        # rainbow bridge, tracked per address
        "near": {"ethereum": BridgedIn(contracts["near"]["bridgedFromETH"], decimals, peg_type=peg_type)},
        "osmosis": {"ethereum": osmosis_supply(contracts["osmosis"]["bridgedFromETH"], decimals, "Axelar", peg_type)},
    }
    for chain in ("avalanche", "iotex", "ethereumclassic", "thundercore", "era"):
        adapter[chain] = {"ethereum": bridged_supply(chain, decimals, contracts[chain]["bridgedFromETH"], peg_type=peg_type)}
    return adapter
