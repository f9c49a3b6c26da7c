import asyncio
import logging
import math
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from peggedsupply.adapters.chain_api import ChainApi
from peggedsupply.adapters.helper.get_supply import PeggedIssuanceAdapter, SourceKind, SupplySource
from peggedsupply.balances import (
    MINTED, RESERVED_ISSUANCE_TYPES, TOTAL_CIRCULATING, UNRELEASED,
    Balance, BridgeContributionIndex, PegType, PeggedAssetIssuance,
)
from peggedsupply.errors import ConfigurationError, InvalidBalanceError, SourceFailure

logger = logging.getLogger("pegged_supply.collection")

DEFAULT_ISSUANCE_TIMEOUT = 60

# which source kinds may report which issuance types, None means any bridge role
ALLOWED_ISSUANCE_TYPES = {
    SourceKind.NATIVE_ISSUED: (MINTED,),
    SourceKind.ESCROWED_RESERVE: (UNRELEASED,),
    SourceKind.BRIDGED_IN: None,
    SourceKind.BRIDGE_MINUS_RESERVE: None,
}


@dataclass
class IssuanceResult:
    """Outcome of one (chain, issuance type) task: a balance or the error it failed with."""
    chain: str
    issuance_type: str
    balance: Optional[Balance] = None
    error: Optional[BaseException] = None
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class CollectionResult:
    pegged_balances: PeggedAssetIssuance
    bridged_from_mapping: BridgeContributionIndex
    results: List[IssuanceResult] = field(default_factory=list)

    @property
    def failures(self) -> List[IssuanceResult]:
        return [result for result in self.results if not result.ok]


def validate_adapter(adapter: PeggedIssuanceAdapter, known_chains: Optional[List[str]] = None):
    """Fail fast on a malformed adapter before any source runs."""
    if known_chains is not None:
        unknown_chains = [chain for chain in adapter if chain not in known_chains]
        if unknown_chains:
            raise ConfigurationError(f"Unknown chain(s): {', '.join(unknown_chains)}. Add them to known_chains in pegged_config.py")

    for chain, issuances in adapter.items():
        if chain == TOTAL_CIRCULATING:
            raise ConfigurationError(f"'{TOTAL_CIRCULATING}' is reserved and cannot be used as a chain name")
        if not isinstance(issuances, dict):
            raise ConfigurationError(f"Chain {chain} must map issuance types to supply sources, got {type(issuances).__name__}")
        if chain in issuances:
            raise ConfigurationError(f"Chain {chain} has issuance bridged to itself.")

        for issuance_type, source in issuances.items():
            if not isinstance(source, SupplySource):
                raise ConfigurationError(f"{chain}:{issuance_type} is not a supply source, got {type(source).__name__}")
            allowed = ALLOWED_ISSUANCE_TYPES.get(source.kind, ())
            if allowed is None:
                if issuance_type in RESERVED_ISSUANCE_TYPES:
                    raise ConfigurationError(f"{chain}:{issuance_type} uses a {source.kind.value} source, which only reports bridged supply")
            elif allowed and issuance_type not in allowed:
                raise ConfigurationError(f"{chain}:{issuance_type} uses a {source.kind.value} source, which only reports {', '.join(allowed)}")


def _check_balance(chain: str, issuance_type: str, balance, peg_type: str) -> Balance:
    if balance is None:
        raise SourceFailure(chain, issuance_type, f"Could not get pegged balance on chain {chain}")
    if not isinstance(balance, dict):
        raise InvalidBalanceError(chain, issuance_type, f"Source returned {type(balance).__name__} instead of a balance")

    try:
        balance = Balance.coerce(balance)
    except ValueError as e:
        raise InvalidBalanceError(chain, issuance_type, str(e)) from e
    if balance.is_empty():
        return Balance({peg_type: 0})

    value = balance.get(peg_type)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidBalanceError(
            chain, issuance_type,
            f"Pegged balance on chain {chain} is not a number, instead it is {value}. "
            f"Make sure balance is keyed with one of: {', '.join(p.value for p in PegType)}."
        )
    if issuance_type not in RESERVED_ISSUANCE_TYPES and not balance.bridges:
        logger.warning(f"Bridge data not found on chain {chain} for {issuance_type}. Use sum_single_balance with a source label to add bridge data.")
    return balance


def _log_timeout(chain: str, issuance_type: str, timeout: float):
    logger.warning(f"Issuance function for chain {chain} ({issuance_type}) exceeded the timeout limit of {timeout}s")


async def get_pegged_asset(chain: str, issuance_type: str, source: SupplySource, api: ChainApi, peg_type: str,
                           timeout: float = DEFAULT_ISSUANCE_TIMEOUT) -> IssuanceResult:
    """
    Run one supply source. Never raises: the error is captured on the result.
    The timeout only logs a warning, the source is allowed to complete.
    """
    loop = asyncio.get_running_loop()
    timer = loop.call_later(timeout, _log_timeout, chain, issuance_type, timeout)
    start = time.monotonic()
    try:
        balance = await source.fetch(api)
        balance = _check_balance(chain, issuance_type, balance, peg_type)
        return IssuanceResult(chain, issuance_type, balance=balance, elapsed=time.monotonic() - start)
    except Exception as e:
        logger.error(f"Failed on {chain}:{issuance_type} - {type(e).__name__}: {e}")
        return IssuanceResult(chain, issuance_type, error=e, elapsed=time.monotonic() - start)
    finally:
        timer.cancel()


async def collect_issuances(
    adapter: PeggedIssuanceAdapter,
    peg_type,
    api_factory: Callable[[str], ChainApi],
    timeout: float = DEFAULT_ISSUANCE_TIMEOUT,
    known_chains: Optional[List[str]] = None,
) -> CollectionResult:
    """
    Invoke every supply source of an adapter concurrently and assemble chain -> issuance type -> balance.

    Every bridge role balance is also indexed under its role name (the origin chain) so the
    reconciliation can subtract it from the origin chain.
    """
    peg_type = PegType.parse(peg_type).value
    validate_adapter(adapter, known_chains)

    pegged_balances: PeggedAssetIssuance = {chain: {} for chain in adapter}
    apis: Dict[str, ChainApi] = {}

    def get_api(chain: str) -> ChainApi:
        if chain not in apis:
            apis[chain] = api_factory(chain)
        return apis[chain]

    tasks = []
    for chain, issuances in adapter.items():
        # missing minted/unreleased count as an empty balance
        for issuance_type in RESERVED_ISSUANCE_TYPES:
            if issuance_type not in issuances:
                pegged_balances[chain][issuance_type] = Balance({peg_type: 0})

        for issuance_type, source in issuances.items():
            source_chain = source.chain or chain
            try:
                api = get_api(source_chain)
            except Exception as e:
                logger.error(f"Failed on {chain}:{issuance_type} - could not create api for {source_chain}: {e}")
                tasks.append(_failed(chain, issuance_type, e))
                continue
            tasks.append(get_pegged_asset(chain, issuance_type, source, api, peg_type, timeout))

    try:
        results = await asyncio.gather(*tasks)
    finally:
        for api in apis.values():
            try:
                await api.close()
            except Exception as e:
                logger.warning(f"Could not close api for {api.chain}: {e}")

    bridged_from_mapping: BridgeContributionIndex = {}
    for result in results:
        if not result.ok:
            continue
        pegged_balances[result.chain][result.issuance_type] = result.balance
        if result.issuance_type not in RESERVED_ISSUANCE_TYPES:
            bridged_from_mapping.setdefault(result.issuance_type, []).append(result.balance)

    failed = [f"{r.chain}:{r.issuance_type}" for r in results if not r.ok]
    logger.info(f"Collected {len(results) - len(failed)} of {len(results)} issuances" + (f", failed: {', '.join(failed)}" if failed else ""))
    return CollectionResult(pegged_balances, bridged_from_mapping, list(results))


async def _failed(chain: str, issuance_type: str, error: BaseException) -> IssuanceResult:
    return IssuanceResult(chain, issuance_type, error=error)
