from peggedsupply.adapters.helper.get_supply import PeggedIssuanceAdapter
from peggedsupply.adapters.pegged_assets.vnx import build_vnx_adapter


def build_adapter() -> PeggedIssuanceAdapter:
    return build_vnx_adapter("vnx_euro")
