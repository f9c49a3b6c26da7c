class PeggedSupplyError(Exception):
    """Base class for everything raised by the pegged supply engine."""


class InvalidAmountError(PeggedSupplyError, ValueError):
    """A raw or converted amount is not a finite number."""


class SourceFailure(PeggedSupplyError):
    """
    A single (chain, issuance_type) supply source raised or returned invalid data.
    Contained by the collection engine: the role is dropped, the run continues.
    """
    def __init__(self, chain: str, issuance_type: str, message: str):
        super().__init__(f"{chain}:{issuance_type} - {message}")
        self.chain = chain
        self.issuance_type = issuance_type


class InvalidBalanceError(SourceFailure):
    """The returned balance has no numeric value under the tracked peg type."""


class ConfigurationError(PeggedSupplyError):
    """Malformed adapter registry (self bridging, unknown chains, wrong source types). Fatal."""


class ReconciliationError(PeggedSupplyError):
    """Base class for fatal errors raised while reconciling circulating supply."""


class NegativeCirculatingError(ReconciliationError):
    def __init__(self, chain: str, circulating: float):
        super().__init__(f"Pegged asset on chain {chain} has negative circulating amount ({circulating})")
        self.chain = chain
        self.circulating = circulating


class ZeroOrMissingTotalError(ReconciliationError):
    """Total circulating is zero, missing or not a number."""


class SanityCeilingError(ReconciliationError):
    def __init__(self, total: float, ceiling: float):
        super().__init__(f"Pegged asset total circulating is over {ceiling / 1e9:,.0f} billion ({total})")
        self.total = total
        self.ceiling = ceiling
