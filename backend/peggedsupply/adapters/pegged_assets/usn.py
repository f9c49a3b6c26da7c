from peggedsupply.adapters.helper.get_supply import NativeIssued, PeggedIssuanceAdapter, bridged_supply
from peggedsupply.pegged_config import chain_contracts, pegged_metadata

ASSET = "usn"


def build_adapter() -> PeggedIssuanceAdapter:
    contracts = chain_contracts[ASSET]
    peg_type = pegged_metadata[ASSET]["peg_type"]
    decimals = pegged_metadata[ASSET]["decimals"]
    return {
        "near": {"minted": NativeIssued(contracts["near"]["issued"], decimals, peg_type, method="ft_total_supply")},
        "aurora": {"near": bridged_supply("aurora", decimals, contracts["aurora"]["bridgedFromNear"], peg_type=peg_type)},
    }
