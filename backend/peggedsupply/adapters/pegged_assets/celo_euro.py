from peggedsupply.adapters.helper.get_supply import (
    NativeIssued, PeggedIssuanceAdapter, bridged_supply, solana_minted_or_bridged,
)
from peggedsupply.pegged_config import chain_contracts, pegged_metadata

ASSET = "celo_euro"


def build_adapter() -> PeggedIssuanceAdapter:
    contracts = chain_contracts[ASSET]
    peg_type = pegged_metadata[ASSET]["peg_type"]
    decimals = pegged_metadata[ASSET]["decimals"]
    return {
        "celo": {"minted": NativeIssued(contracts["celo"]["issued"], decimals, peg_type)},
        "ethereum": {
            "celo": bridged_supply("ethereum", decimals, contracts["ethereum"]["bridgedFromCelo"], "optics", "Celo", peg_type),
        },
        "polygon": {
            "celo": bridged_supply("polygon", decimals, contracts["polygon"]["bridgedFromCelo"], "optics", "Celo", peg_type),
        },
        "solana": {
            "celo": solana_minted_or_bridged(contracts["solana"]["bridgedFromCelo"], peg_type, bridged=True),
        },
    }
