import logging
import os

import pandas as pd

logger = logging.getLogger("pegged_supply.report_store")


class CsvReportStore:
    """
    Minimal stand in for a db connector: every table is a csv file, upsert replaces rows with the same index.
    """

    def __init__(self, report_dir: str):
        self.report_dir = report_dir

    def _path(self, table_name: str) -> str:
        return os.path.join(self.report_dir, f"{table_name}.csv")

    def get_table(self, table_name: str, index_cols=None) -> pd.DataFrame:
        path = self._path(table_name)
        if not os.path.exists(path):
            return pd.DataFrame()
        df = pd.read_csv(path)
        if index_cols:
            df = df.set_index(index_cols)
        return df

    def upsert_table(self, table_name: str, df: pd.DataFrame) -> int:
        os.makedirs(self.report_dir, exist_ok=True)
        upserted = len(df)
        index_cols = list(df.index.names)
        existing = self.get_table(table_name, index_cols)
        if not existing.empty:
            existing = existing[~existing.index.isin(df.index)]
            df = pd.concat([existing, df])
        df.to_csv(self._path(table_name))
        logger.info(f"Upserted {upserted} rows into {self._path(table_name)}")
        return upserted
