import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from peggedsupply.adapters.abstract_adapters import AbstractAdapter
from peggedsupply.adapters.chain_api import ChainApi, get_chain_api
from peggedsupply.adapters.pegged_assets.registry import load_pegged_adapter
from peggedsupply.collection import collect_issuances
from peggedsupply.config import Settings
from peggedsupply.misc.helper_functions import print_extract, print_init, print_load
from peggedsupply.misc.sdk_cache import SdkCache
from peggedsupply.pegged_config import known_chains, pegged_metadata
from peggedsupply.reconciliation import reconcile
from peggedsupply.report import GlobalReport

logger = logging.getLogger("pegged_supply.adapter")


class AdapterPeggedSupply(AbstractAdapter):
    """
    Circulating supply of a single pegged asset across all chains it lives on.

    adapter_params:
        settings (Settings): runtime settings, defaults to Settings.from_env()
        cache (SdkCache): cache for decimals lookups, defaults to an in-memory cache
        api_factory (callable): chain -> ChainApi, defaults to get_chain_api (used by tests to inject fakes)
    db_connector: anything with upsert_table(table_name, df), e.g. CsvReportStore
    """
    def __init__(self, adapter_params: dict, db_connector=None):
        super().__init__("Pegged Supply", adapter_params, db_connector)
        self.settings: Settings = adapter_params.get('settings') or Settings.from_env()
        self.cache: SdkCache = adapter_params.get('cache') or SdkCache()
        self.api_factory: Optional[Callable[[str], ChainApi]] = adapter_params.get('api_factory')
        print_init(self.name, {k: v for k, v in adapter_params.items() if k != 'settings'})

    def _api_factory(self, timestamp: Optional[int]) -> Callable[[str], ChainApi]:
        if self.api_factory is not None:
            return self.api_factory
        return lambda chain: get_chain_api(chain, self.settings, cache=self.cache, timestamp=timestamp)

    async def extract_async(self, load_params: dict) -> GlobalReport:
        """
        load_params:
            asset (str): name of the pegged asset (see pegged_config.pegged_metadata)
            peg_type (str): optional, defaults to settings.peg_type (PEG_TYPE), then the peg type of the asset
            timeout (float): optional, advisory timeout per issuance in seconds
            timestamp (int): optional, unix timestamp passed to the chain apis
        """
        asset = load_params['asset'].replace("-", "_")
        adapter = load_pegged_adapter(asset)
        peg_type = load_params.get('peg_type') or self.settings.peg_type or pegged_metadata[asset]['peg_type']
        timeout = load_params.get('timeout') or self.settings.issuance_timeout

        collection = await collect_issuances(
            adapter,
            peg_type,
            self._api_factory(load_params.get('timestamp')),
            timeout=timeout,
            known_chains=known_chains,
        )
        report = reconcile(collection, peg_type, self.settings.max_total_circulating)
        print_extract(self.name, load_params, (len(report.chains), len(collection.results)))
        return report

    def extract(self, load_params: dict) -> GlobalReport:
        return asyncio.run(self.extract_async(load_params))

    def load(self, report: GlobalReport, asset: str = None, table_name: str = "fact_pegged_supply") -> int:
        df = report.to_dataframe().reset_index()
        df['asset'] = asset.replace('-', '_') if asset is not None else None
        df['date'] = datetime.now(timezone.utc).strftime('%Y-%m-%d')
        df = df.set_index(['asset', 'origin_key', 'issuance_type', 'date'])
        upserted = self.db_connector.upsert_table(table_name, df)
        print_load(self.name, upserted, table_name)
        return upserted
