import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Union

from peggedsupply.errors import InvalidAmountError

# issuance types with a fixed meaning, every other key of a chain report is a bridge role
MINTED = "minted"
UNRELEASED = "unreleased"
CIRCULATING = "circulating"
TOTAL_CIRCULATING = "totalCirculating"
RESERVED_ISSUANCE_TYPES = (MINTED, UNRELEASED)


class PegType(str, Enum):
    """Denomination a pegged asset tracks. Exactly one is active per run."""
    PEGGED_USD = "peggedUSD"
    PEGGED_EUR = "peggedEUR"
    PEGGED_GOLD = "peggedGOLD"
    PEGGED_CHF = "peggedCHF"
    PEGGED_VAR = "peggedVAR"

    @classmethod
    def parse(cls, value: Union[str, "PegType"]) -> "PegType":
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown peg type '{value}', use one of: {', '.join(p.value for p in cls)}") from None


@dataclass
class BridgeRecord:
    amount: float
    bridge_name: str
    bridged_from_chain: Optional[str] = None
    is_address: bool = False


class Balance(dict):
    """
    Mapping peg type -> amount, plus bridge provenance records keyed by label.

    The amount stored under a peg type is always the sum of every contribution
    made to it; provenance records are annotations and never replace each other.
    """
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.bridges: Dict[str, BridgeRecord] = {}

    def amount(self, peg_type: Union[str, PegType]) -> Optional[float]:
        return self.get(_peg_key(peg_type))

    def is_empty(self) -> bool:
        return len(self) == 0

    def copy(self) -> "Balance":
        balance = Balance(self)
        balance.bridges = {label: BridgeRecord(**vars(record)) for label, record in self.bridges.items()}
        return balance

    def as_dict(self) -> dict:
        data = dict(self)
        if self.bridges:
            data["bridges"] = {label: vars(record).copy() for label, record in self.bridges.items()}
        return data

    @classmethod
    def coerce(cls, value) -> "Balance":
        """Turn a plain mapping returned by a custom source into a Balance."""
        if isinstance(value, Balance):
            return value
        balance = cls({k: v for k, v in value.items() if k != "bridges"})
        for label, record in (value.get("bridges") or {}).items():
            balance.bridges[label] = record if isinstance(record, BridgeRecord) else _bridge_record(label, record)
        return balance


# camelCase keys as custom sources built from api answers tend to write them
_BRIDGE_RECORD_KEYS = {
    "amount": "amount",
    "bridge_name": "bridge_name",
    "bridgeName": "bridge_name",
    "bridged_from_chain": "bridged_from_chain",
    "bridgedFromChain": "bridged_from_chain",
    "is_address": "is_address",
    "isAddress": "is_address",
}


def _bridge_record(label: str, record: dict) -> BridgeRecord:
    if not isinstance(record, dict):
        raise ValueError(f"Bridge record {label} must be a mapping, got {type(record).__name__}")
    unknown = [key for key in record if key not in _BRIDGE_RECORD_KEYS]
    if unknown:
        raise ValueError(f"Bridge record {label} has unknown keys: {', '.join(unknown)}")
    if "amount" not in record:
        raise ValueError(f"Bridge record {label} has no amount")
    fields = {_BRIDGE_RECORD_KEYS[key]: v for key, v in record.items()}
    fields.setdefault("bridge_name", label)
    return BridgeRecord(**fields)


# chain -> issuance type -> balance
ChainReport = Dict[str, Balance]
PeggedAssetIssuance = Dict[str, ChainReport]
# origin chain -> balances other chains reported as bridged from it
BridgeContributionIndex = Dict[str, List[Balance]]


def _peg_key(peg_type: Union[str, PegType]) -> str:
    return peg_type.value if isinstance(peg_type, PegType) else PegType.parse(peg_type).value


def check_amount(amount) -> float:
    """Accept ints and floats only, never bools, NaN or infinities."""
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise InvalidAmountError(f"Amount must be a number, got {type(amount).__name__}: {amount!r}")
    amount = float(amount)
    if not math.isfinite(amount):
        raise InvalidAmountError(f"Amount must be finite, got {amount}")
    return amount


def sum_single_balance(
    balance: Balance,
    peg_type: Union[str, PegType],
    amount,
    source_label: Optional[str] = None,
    track_individually: bool = False,
    bridged_from_chain: Optional[str] = None,
) -> Balance:
    """
    Add one contribution to a balance.

    :param source_label: address (track_individually=True) or bridge name the amount came from
    :param track_individually: keep one provenance record per address instead of merging under a bridge name
    :param bridged_from_chain: origin chain, kept on the provenance record
    """
    amount = check_amount(amount)
    key = _peg_key(peg_type)
    balance[key] = balance.get(key, 0) + amount

    if source_label is not None:
        record = balance.bridges.get(source_label)
        if record is None:
            balance.bridges[source_label] = BridgeRecord(
                amount=amount,
                bridge_name=source_label,
                bridged_from_chain=bridged_from_chain,
                is_address=track_individually,
            )
        else:
            record.amount += amount
            if record.bridged_from_chain is None:
                record.bridged_from_chain = bridged_from_chain
    return balance


add_contribution = sum_single_balance
