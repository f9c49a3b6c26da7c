from peggedsupply.adapters.helper.get_supply import NativeIssued, PeggedIssuanceAdapter
from peggedsupply.pegged_config import chain_contracts, pegged_metadata

ASSET = "worldwide_usd"


def build_adapter() -> PeggedIssuanceAdapter:
    contracts = chain_contracts[ASSET]
    peg_type = pegged_metadata[ASSET]["peg_type"]
    decimals = pegged_metadata[ASSET]["decimals"]
    return {
        "ethereum": {"minted": NativeIssued(contracts["ethereum"]["issued"], decimals, peg_type)},
        "polygon": {"minted": NativeIssued(contracts["polygon"]["issued"], decimals, peg_type)},
    }
