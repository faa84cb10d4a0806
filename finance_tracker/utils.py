"""Shared utilities for the Finance Tracker project."""

from __future__ import annotations

import dataclasses
from typing import Iterable

import pandas as pd

TRANSACTION_COLUMNS = [
    "id",
    "owner_id",
    "type",
    "amount",
    "description",
    "category",
    "transaction_date",
]


def ensure_dataframe(transactions: Iterable[object] | pd.DataFrame) -> pd.DataFrame:
    """Normalise a transaction payload to a :class:`pandas.DataFrame`.

    Accepts a frame, an iterable of mappings, or an iterable of
    :class:`~finance_tracker.models.Transaction` dataclasses. Empty input still
    yields the standard transaction columns.
    """

    if isinstance(transactions, pd.DataFrame):
        return transactions.copy()

    records = [
        dataclasses.asdict(item) if dataclasses.is_dataclass(item) else dict(item)  # type: ignore[arg-type]
        for item in transactions
    ]
    if not records:
        return pd.DataFrame(columns=TRANSACTION_COLUMNS)
    return pd.DataFrame(records)


def format_currency(value: float, currency: str = "₹", decimals: int = 2) -> str:
    """Return a human-readable currency string."""

    sign = "-" if value < 0 else ""
    return f"{sign}{currency}{abs(value):,.{decimals}f}"


def format_compact_amount(value: float, currency: str = "₹") -> str:
    """Shorten amounts of a thousand or more, e.g. ``₹1.2k``."""

    if value >= 1000:
        return f"{currency}{value / 1000:.1f}k"
    return f"{currency}{value:g}"
