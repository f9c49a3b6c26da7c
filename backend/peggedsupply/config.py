import os
from dataclasses import dataclass, field
from typing import Dict, Optional

from dotenv import load_dotenv

from peggedsupply.pegged_config import default_rpcs

ONE_MONTH = 60 * 60 * 24 * 30


@dataclass(frozen=True)
class Settings:
    """Runtime settings, built once by the entrypoint and passed down explicitly."""
    issuance_timeout: float = 60.0
    max_total_circulating: float = 1000e9
    peg_type: Optional[str] = None
    sdk_cache_file: str = "pegged-assets-cache/sdk-cache.json"
    sdk_cache_max_age: int = ONE_MONTH
    report_dir: str = "pegged-assets-reports"
    discord_webhook: Optional[str] = None
    rpcs: Dict[str, str] = field(default_factory=dict)
    solana_rpc: str = "https://api.mainnet-beta.solana.com"
    tzkt_api: str = "https://api.tzkt.io/v1"
    near_rpc: str = "https://rpc.mainnet.near.org"
    cosmos_rest: str = "https://rest.cosmos.directory"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> 'Settings':
        """Create settings from environment variables (and a .env file if present)."""
        if dotenv:
            load_dotenv()

        # <CHAIN>_RPC overrides the public default, e.g. ETHEREUM_RPC
        rpcs = dict(default_rpcs)
        for chain in default_rpcs:
            override = os.getenv(f"{chain.upper()}_RPC")
            if override:
                rpcs[chain] = override

        return cls(
            issuance_timeout=float(os.getenv("ISSUANCE_TIMEOUT", cls.issuance_timeout)),
            max_total_circulating=float(os.getenv("MAX_TOTAL_CIRCULATING", cls.max_total_circulating)),
            peg_type=os.getenv("PEG_TYPE") or None,
            sdk_cache_file=os.getenv("SDK_CACHE_FILE", cls.sdk_cache_file),
            sdk_cache_max_age=int(os.getenv("SDK_CACHE_MAX_AGE", cls.sdk_cache_max_age)),
            report_dir=os.getenv("REPORT_DIR", cls.report_dir),
            discord_webhook=os.getenv("DISCORD_COMMS"),
            rpcs=rpcs,
            solana_rpc=os.getenv("SOLANA_RPC", cls.solana_rpc),
            tzkt_api=os.getenv("TZKT_API", cls.tzkt_api),
            near_rpc=os.getenv("NEAR_RPC", cls.near_rpc),
            cosmos_rest=os.getenv("COSMOS_REST", cls.cosmos_rest),
        )

    def get_rpc(self, chain: str) -> str:
        rpc = self.rpcs.get(chain) or os.getenv(f"{chain.upper()}_RPC")
        if not rpc:
            raise ValueError(f"No RPC configured for chain {chain}. Set {chain.upper()}_RPC in your environment.")
        return rpc
