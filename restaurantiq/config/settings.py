"""Runtime configuration read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Values the analytics service reads at startup."""

    log_level: str = "INFO"
    currency_symbol: str = "£"
    max_import_rows: int = 500
    max_upload_bytes: int = 2_000_000
    header_match_threshold: int = 85
    upload_rate_limit: int = 20
    upload_rate_window_seconds: int = 60
    trusted_origins: Tuple[str, ...] = ()


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid integer for %s: %r", name, raw)
        return default


def _normalize_origin(value: str) -> str:
    return value.strip().rstrip("/").lower()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build the settings once per process."""

    origins = tuple(
        _normalize_origin(entry)
        for entry in os.getenv("TRUSTED_ORIGINS", "").split(",")
        if entry.strip()
    )
    return Settings(
        log_level=(os.getenv("RESTAURANTIQ_LOG_LEVEL") or "INFO").upper(),
        currency_symbol=os.getenv("RESTAURANTIQ_CURRENCY_SYMBOL") or "£",
        max_import_rows=_int_from_env("RESTAURANTIQ_MAX_IMPORT_ROWS", 500),
        max_upload_bytes=_int_from_env("RESTAURANTIQ_MAX_UPLOAD_BYTES", 2_000_000),
        header_match_threshold=_int_from_env("RESTAURANTIQ_HEADER_MATCH_THRESHOLD", 85),
        upload_rate_limit=_int_from_env("RESTAURANTIQ_UPLOAD_RATE_LIMIT", 20),
        upload_rate_window_seconds=_int_from_env("RESTAURANTIQ_UPLOAD_RATE_WINDOW", 60),
        trusted_origins=origins,
    )


__all__ = ["Settings", "get_settings"]
