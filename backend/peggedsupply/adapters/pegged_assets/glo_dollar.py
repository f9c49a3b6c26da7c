from peggedsupply.adapters.helper.get_supply import PeggedIssuanceAdapter, add_chain_exports
from peggedsupply.pegged_config import chain_contracts, pegged_metadata


def build_adapter() -> PeggedIssuanceAdapter:
    # natively issued on every chain, no bridges
    return add_chain_exports(chain_contracts["glo_dollar"], peg_type=pegged_metadata["glo_dollar"]["peg_type"])
