from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent
PROJECT_DIR = BASE_DIR.parent

DEFAULT_CSV_PATH = PROJECT_DIR / "data" / "fraudTest.csv"
DEFAULT_LOG_DIR = PROJECT_DIR / "logs"


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the fraud detection service.

    Every value can be overridden through a ``FRAUD_*`` environment variable.
    """

    csv_path: Path = DEFAULT_CSV_PATH
    log_dir: Path = DEFAULT_LOG_DIR
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            csv_path=Path(os.environ.get("FRAUD_CSV_PATH", DEFAULT_CSV_PATH)),
            log_dir=Path(os.environ.get("FRAUD_LOG_DIR", DEFAULT_LOG_DIR)),
            log_level=os.environ.get("FRAUD_LOG_LEVEL", "INFO").upper(),
            api_host=os.environ.get("FRAUD_API_HOST", "0.0.0.0"),
            api_port=int(os.environ.get("FRAUD_API_PORT", "8000")),
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()
