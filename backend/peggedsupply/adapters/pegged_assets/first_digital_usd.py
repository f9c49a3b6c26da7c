from peggedsupply.adapters.helper.get_supply import EscrowedReserve, NativeIssued, PeggedIssuanceAdapter
from peggedsupply.pegged_config import chain_contracts, pegged_metadata

ASSET = "first_digital_usd"


def build_adapter() -> PeggedIssuanceAdapter:
    contracts = chain_contracts[ASSET]
    peg_type = pegged_metadata[ASSET]["peg_type"]
    decimals = pegged_metadata[ASSET]["decimals"]
    ethereum = contracts["ethereum"]
    return {
        "ethereum": {
            "minted": NativeIssued(ethereum["issued"], decimals, peg_type),
            # FDUSD held as collateral for the binance-peg token on bsc, counted on bsc already
            "unreleased": EscrowedReserve(ethereum["issued"], ethereum["collateral"], decimals, peg_type),
        },
        "bsc": {"minted": NativeIssued(contracts["bsc"]["issued"], decimals, peg_type)},
    }
