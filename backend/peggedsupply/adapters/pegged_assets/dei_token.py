from peggedsupply.adapters.helper.get_supply import NativeIssued, PeggedIssuanceAdapter
from peggedsupply.pegged_config import chain_contracts, pegged_metadata

ASSET = "dei_token"


def build_adapter() -> PeggedIssuanceAdapter:
    """
    Only the fantom issuance is tracked. The bridged DEI contracts on ethereum, polygon, bsc and metis
    have no holders, add them as 'fantom' roles once they do.
    """
    contracts = chain_contracts[ASSET]
    return {
        "fantom": {
            "minted": NativeIssued(contracts["fantom"]["issued"], pegged_metadata[ASSET]["decimals"], pegged_metadata[ASSET]["peg_type"]),
        },
    }
