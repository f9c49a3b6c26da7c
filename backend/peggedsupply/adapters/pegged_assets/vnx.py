from peggedsupply.adapters.helper.get_supply import NativeIssued, PeggedIssuanceAdapter, solana_minted_or_bridged
from peggedsupply.pegged_config import chain_contracts, pegged_metadata


def build_vnx_adapter(asset: str) -> PeggedIssuanceAdapter:
    """
    VNX tokens are issued natively on every chain they live on.
    Solana and tezos read decimals from the chain, evm chains use the configured decimals.
    """
    peg_type = pegged_metadata[asset]["peg_type"]
    decimals = pegged_metadata[asset]["decimals"]

    adapter = {}
    for chain, contracts in chain_contracts[asset].items():
        if chain == "solana":
            adapter[chain] = {"minted": solana_minted_or_bridged(contracts["issued"], peg_type)}
        elif chain == "tezos":
            adapter[chain] = {"minted": NativeIssued(contracts["issued"][0], None, peg_type)}
        else:
            adapter[chain] = {"minted": NativeIssued(contracts["issued"], decimals, peg_type)}
    return adapter
