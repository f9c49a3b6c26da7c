from dataclasses import dataclass, field
from typing import Dict, List

import pandas as pd

from peggedsupply.balances import CIRCULATING, TOTAL_CIRCULATING, UNRELEASED, Balance, ChainReport
from peggedsupply.misc.helper_functions import humanize_number


@dataclass
class GlobalReport:
    """
    Reconciled supply of one pegged asset: every chain report (with its circulating amount)
    plus the totals under 'totalCirculating'.
    """
    peg_type: str
    chains: Dict[str, ChainReport]
    total_circulating: Dict[str, Balance]
    failures: List = field(default_factory=list)

    @property
    def total(self) -> float:
        return self.total_circulating[CIRCULATING].get(self.peg_type, 0)

    @property
    def total_unreleased(self) -> float:
        return self.total_circulating[UNRELEASED].get(self.peg_type, 0)

    def circulating(self, chain: str) -> float:
        return self.chains[chain][CIRCULATING].get(self.peg_type, 0)

    def as_dict(self) -> dict:
        data = {
            chain: {issuance_type: balance.as_dict() for issuance_type, balance in issuances.items()}
            for chain, issuances in self.chains.items()
        }
        data[TOTAL_CIRCULATING] = {issuance_type: dict(balance) for issuance_type, balance in self.total_circulating.items()}
        return data

    def to_dataframe(self) -> pd.DataFrame:
        """One row per (chain, issuance type), same shape as the other fact tables."""
        rows = []
        for chain, issuances in self.chains.items():
            for issuance_type, balance in issuances.items():
                rows.append({
                    'origin_key': chain,
                    'issuance_type': issuance_type,
                    'peg_type': self.peg_type,
                    'value': balance.get(self.peg_type),
                })
        df = pd.DataFrame(rows, columns=['origin_key', 'issuance_type', 'peg_type', 'value'])
        return df.set_index(['origin_key', 'issuance_type'])

    def summary_lines(self) -> List[str]:
        lines = [f"Total circulating ({self.peg_type}): {humanize_number(self.total)}"]
        if self.total_unreleased:
            lines.append(f"Total unreleased: {humanize_number(self.total_unreleased)}")
        ranked = sorted(self.chains, key=lambda chain: self.circulating(chain), reverse=True)
        for chain in ranked:
            lines.append(f"{chain.ljust(20)} {humanize_number(self.circulating(chain))}")
            roles = [(issuance_type, balance.get(self.peg_type) or 0) for issuance_type, balance in self.chains[chain].items()
                     if issuance_type != CIRCULATING]
            for issuance_type, amount in sorted(roles, key=lambda role: role[1], reverse=True):
                if amount:
                    lines.append(f"    {issuance_type.ljust(16)} {humanize_number(amount)}")
        for failure in self.failures:
            lines.append(f"FAILED {failure.chain}:{failure.issuance_type} - {failure.error}")
        return lines
