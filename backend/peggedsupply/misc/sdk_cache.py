import json
import logging
import os
import time
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger("pegged_supply.cache")


class SdkCache:
    """
    Small on-disk json cache for values that never change on chain (token decimals).
    The whole cache is dropped once it is older than max_age seconds.
    """

    def __init__(self, path: Optional[str] = None, max_age: int = 60 * 60 * 24 * 30):
        self.path = Path(path) if path else None
        self.max_age = max_age
        self.data = {"startTime": round(time.time())}

    def load(self) -> "SdkCache":
        if self.path is None or not self.path.exists():
            return self
        try:
            current = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read cache file {self.path}, starting with an empty cache: {e}")
            return self

        start_time = current.get("startTime") if isinstance(current, dict) else None
        if not start_time or time.time() - start_time > self.max_age:
            logger.info(f"Cache {self.path} expired, resetting")
            return self
        self.data = current
        return self

    def save(self):
        if self.path is None:
            return
        os.makedirs(self.path.parent, exist_ok=True)
        self.path.write_text(json.dumps(self.data, indent=2, sort_keys=True), encoding="utf-8")

    def get(self, key: str) -> Any:
        return self.data.get(key)

    def set(self, key: str, value: Any):
        self.data[key] = value
