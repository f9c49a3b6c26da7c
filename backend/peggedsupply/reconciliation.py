import logging
import math
from typing import Dict, List, Optional

from peggedsupply.balances import (
    CIRCULATING, TOTAL_CIRCULATING, UNRELEASED,
    Balance, BridgeContributionIndex, ChainReport, PegType, PeggedAssetIssuance,
)
from peggedsupply.collection import CollectionResult
from peggedsupply.errors import NegativeCirculatingError, SanityCeilingError, ZeroOrMissingTotalError
from peggedsupply.report import GlobalReport

logger = logging.getLogger("pegged_supply.reconciliation")

MAX_TOTAL_CIRCULATING = 1000e9


def calc_chain_circulating(chain: str, chain_issuances: ChainReport, bridged_from: Optional[List[Balance]], peg_type: str) -> float:
    """
    minted + bridged in - unreleased, minus everything other chains report as bridged from this chain.
    Only reads its own chain report and the (already complete) bridge index.
    """
    circulating = 0.0
    for issuance_type, balance in chain_issuances.items():
        if issuance_type == CIRCULATING:
            continue
        amount = balance.get(peg_type)
        if amount is None:
            continue
        if issuance_type == UNRELEASED:
            circulating -= amount
        else:
            circulating += amount

    for balance in bridged_from or []:
        amount = balance.get(peg_type)
        if amount is None or circulating == 0:
            logger.warning(f"Null balance or 0 circulating on chain {chain}, skipping bridged amount {amount}")
            continue
        circulating -= amount

    if circulating < 0:
        raise NegativeCirculatingError(chain, circulating)
    return circulating


def calc_circulating(pegged_balances: PeggedAssetIssuance, bridged_from_mapping: BridgeContributionIndex, peg_type) -> Dict[str, Balance]:
    """
    Store circulating on every chain report and return the totalCirculating entry
    ({'circulating': ..., 'unreleased': ...}) summed over all real chains.
    """
    peg_type = PegType.parse(peg_type).value

    for origin_chain in bridged_from_mapping:
        if origin_chain not in pegged_balances:
            logger.warning(f"Supply bridged from {origin_chain} is reported, but {origin_chain} has no issuance of its own")

    for chain, chain_issuances in pegged_balances.items():
        if chain == TOTAL_CIRCULATING:
            continue
        circulating = calc_chain_circulating(chain, chain_issuances, bridged_from_mapping.get(chain), peg_type)
        chain_issuances[CIRCULATING] = Balance({peg_type: circulating})
        chain_issuances.setdefault(UNRELEASED, Balance({peg_type: 0}))

    total_circulating = {CIRCULATING: Balance({peg_type: 0}), UNRELEASED: Balance({peg_type: 0})}
    for chain, chain_issuances in pegged_balances.items():
        if chain == TOTAL_CIRCULATING:
            continue
        total_circulating[CIRCULATING][peg_type] += chain_issuances[CIRCULATING].get(peg_type) or 0
        total_circulating[UNRELEASED][peg_type] += chain_issuances[UNRELEASED].get(peg_type) or 0
    return total_circulating


def validate_total_circulating(total, max_total: float = MAX_TOTAL_CIRCULATING) -> float:
    """Last gate before a report is published."""
    if isinstance(total, bool) or not isinstance(total, (int, float)) or math.isnan(total):
        raise ZeroOrMissingTotalError(f"Pegged asset doesn't have total circulating, got {total!r}")
    if total > max_total:
        raise SanityCeilingError(total, max_total)
    if total == 0:
        raise ZeroOrMissingTotalError("Returned 0 total circulating")
    if not math.isfinite(total):
        raise ZeroOrMissingTotalError(f"Total circulating is not finite: {total}")
    return total


def reconcile(collection: CollectionResult, peg_type, max_total: float = MAX_TOTAL_CIRCULATING) -> GlobalReport:
    """Turn collected chain reports into a validated global report. Everything in here is fatal."""
    peg_type = PegType.parse(peg_type).value
    total_circulating = calc_circulating(collection.pegged_balances, collection.bridged_from_mapping, peg_type)
    validate_total_circulating(total_circulating[CIRCULATING].get(peg_type), max_total)

    return GlobalReport(
        peg_type=peg_type,
        chains={chain: issuances for chain, issuances in collection.pegged_balances.items() if chain != TOTAL_CIRCULATING},
        total_circulating=total_circulating,
        failures=collection.failures,
    )
