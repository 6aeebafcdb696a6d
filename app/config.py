"""
Runtime configuration for the ledger service, read from the environment.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _get_int_env(name: str, default: int) -> int:
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _parse_extensions(raw: str) -> Tuple[str, ...]:
    extensions = []
    for item in raw.split(","):
        ext = item.strip().lower()
        if not ext:
            continue
        extensions.append(ext if ext.startswith(".") else f".{ext}")
    return tuple(extensions)


@dataclass(frozen=True)
class IngestionSettings:
    """
    Upload limits and logging for ledger ingestion.
    """

    max_upload_bytes: int = 5 * 1024 * 1024
    allowed_extensions: Tuple[str, ...] = (".csv", ".txt")
    log_level: str = "INFO"

    @property
    def log_level_value(self) -> int:
        return LOG_LEVELS.get(self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def get_ingestion_settings() -> IngestionSettings:
    """
    Return cached ingestion settings from environment variables.
    """

    extensions = _parse_extensions(_get_str_env("LEDGER_ALLOWED_EXTENSIONS", ".csv,.txt"))
    return IngestionSettings(
        max_upload_bytes=max(1, _get_int_env("LEDGER_MAX_UPLOAD_BYTES", 5 * 1024 * 1024)),
        allowed_extensions=extensions or (".csv", ".txt"),
        log_level=_get_str_env("LEDGER_LOG_LEVEL", "INFO").upper(),
    )
