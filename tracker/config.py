"""Settings for the tracker, read from environment variables.

TRACKER_DATA_DIR           directory holding the JSON store (./data)
TRACKER_LOG_LEVEL          log level for the app entry point (INFO)
TRACKER_CURRENCY_SYMBOL    prefix used when formatting amounts (Rp)
TRACKER_WARNING_THRESHOLD  budget percentage that counts as a warning (80)
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    log_level: str
    currency_symbol: str
    warning_threshold: float


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    data_dir = Path(os.getenv("TRACKER_DATA_DIR", "./data")).resolve()
    threshold = os.getenv("TRACKER_WARNING_THRESHOLD", "80")
    try:
        warning_threshold = float(threshold)
    except ValueError:
        raise ValueError(f"TRACKER_WARNING_THRESHOLD must be a number, got {threshold!r}") from None
    return Settings(
        data_dir=data_dir,
        log_level=os.getenv("TRACKER_LOG_LEVEL", "INFO").upper(),
        currency_symbol=os.getenv("TRACKER_CURRENCY_SYMBOL", "Rp"),
        warning_threshold=warning_threshold,
    )
