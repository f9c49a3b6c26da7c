import logging

from peggedsupply.adapters.chain_api import ChainApi
from peggedsupply.adapters.helper.get_supply import CustomSource, PeggedIssuanceAdapter, bridged_supply
from peggedsupply.balances import Balance, sum_single_balance
from peggedsupply.misc.helper_functions import api_get_call, to_float_amount
from peggedsupply.pegged_config import chain_contracts, pegged_metadata

ASSET = "neutrino"
WAVES_NODE = "https://nodes.wavesnodes.com"

logger = logging.getLogger("pegged_supply.neutrino")


def waves_minted(asset_id: str, peg_type) -> CustomSource:
    # Subtracting USDN in the reserve wallet from total USDN minted gives more than their
    # own circulating figure, the asset details quantity is used as is.
    async def _waves_minted(api: ChainApi) -> Balance:
        balances = Balance()
        data = await api_get_call(f"{WAVES_NODE}/assets/details/{asset_id}", session=api.session)
        logger.debug(f"Waves asset {asset_id}: quantity {data['quantity']}, decimals {data['decimals']}")
        sum_single_balance(balances, peg_type, to_float_amount(int(data["quantity"]), int(data["decimals"])), "issued", False)
        return balances

    return CustomSource(_waves_minted, f"waves asset details of {asset_id}", peg_type)


def build_adapter() -> PeggedIssuanceAdapter:
    contracts = chain_contracts[ASSET]
    peg_type = pegged_metadata[ASSET]["peg_type"]
    decimals = pegged_metadata[ASSET]["decimals"]

    adapter = {"waves": {"minted": waves_minted(contracts["waves"]["issued"][0], peg_type)}}
    for chain in ("ethereum", "polygon", "bsc"):
        adapter[chain] = {"waves": bridged_supply(chain, decimals, contracts[chain]["bridgedFromWaves"], peg_type=peg_type)}
    return adapter
