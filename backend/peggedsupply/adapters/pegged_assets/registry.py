import importlib
import logging
from typing import List

from peggedsupply.adapters.helper.get_supply import PeggedIssuanceAdapter
from peggedsupply.pegged_config import pegged_metadata

logger = logging.getLogger("pegged_supply.registry")


def available_assets() -> List[str]:
    return sorted(pegged_metadata.keys())


def load_pegged_adapter(name: str) -> PeggedIssuanceAdapter:
    """Import peggedsupply.adapters.pegged_assets.<name> and build a fresh adapter from it."""
    name = name.replace("-", "_")
    if name not in pegged_metadata:
        raise ValueError(f"Unknown pegged asset '{name}', use one of: {', '.join(available_assets())}")
    module = importlib.import_module(f"peggedsupply.adapters.pegged_assets.{name}")
    logger.info(f"Loaded pegged asset adapter {name}")
    return module.build_adapter()
