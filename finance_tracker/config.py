"""Runtime settings for the Finance Tracker.

Values are read from Streamlit secrets first, then the environment (with a
local ``.env`` loaded), then the defaults below.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import streamlit as st
from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///finance_tracker.db"
DEFAULT_OWNER_FILE = Path.home() / ".finance_tracker" / "owner_id"
DEFAULT_CURRENCY = "₹"
DEFAULT_TREND_BUCKETS = 15


@dataclass(frozen=True)
class Settings:
    database_url: str
    owner_id_path: Path
    currency_symbol: str
    trend_buckets: int
    log_level: str


def _setting(name: str, default: str) -> str:
    value = None
    try:
        value = st.secrets.get(name)
    except Exception:
        # No secrets.toml outside a configured Streamlit deployment.
        value = None
    if not value:
        value = os.getenv(name)
    return str(value) if value else default


def load_settings() -> Settings:
    load_dotenv()

    buckets_raw = _setting("FINANCE_TRACKER_TREND_BUCKETS", str(DEFAULT_TREND_BUCKETS))
    try:
        trend_buckets = max(int(buckets_raw), 1)
    except ValueError as exc:
        raise ValueError(f"FINANCE_TRACKER_TREND_BUCKETS must be an integer, got {buckets_raw!r}") from exc

    return Settings(
        database_url=_setting("DATABASE_URL", DEFAULT_DATABASE_URL),
        owner_id_path=Path(_setting("FINANCE_TRACKER_OWNER_FILE", str(DEFAULT_OWNER_FILE))).expanduser(),
        currency_symbol=_setting("FINANCE_TRACKER_CURRENCY", DEFAULT_CURRENCY),
        trend_buckets=trend_buckets,
        log_level=_setting("FINANCE_TRACKER_LOG_LEVEL", "INFO"),
    )
