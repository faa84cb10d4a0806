"""Period filtering for transaction lists.

Dates are compared as pure calendar dates. Month and year arithmetic uses
``pandas.DateOffset``, which clamps to the last valid day of the target month
(31 Mar minus one month is 28/29 Feb; 29 Feb minus one year is 28 Feb).
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Literal

import pandas as pd

from . import utils

Period = Literal["daily", "weekly", "monthly", "yearly", "all"]

PERIODS: tuple[str, ...] = ("daily", "weekly", "monthly", "yearly", "all")

PERIOD_LABELS: dict[str, str] = {
    "daily": "TODAY",
    "weekly": "LAST 7 DAYS",
    "monthly": "LAST 30 DAYS",
    "yearly": "LAST 365 DAYS",
    "all": "ALL TIME",
}

PERIOD_OPTIONS: dict[str, str] = {
    "daily": "Daily",
    "weekly": "Weekly",
    "monthly": "Monthly",
    "yearly": "Yearly",
    "all": "All Time",
}


def _as_date(now: date | datetime) -> date:
    if isinstance(now, datetime):
        return now.date()
    return now


def _shift_back(day: date, period: str) -> date | None:
    ts = pd.Timestamp(day)
    if period == "daily":
        return day
    if period == "weekly":
        return day - timedelta(days=7)
    if period == "monthly":
        return (ts - pd.DateOffset(months=1)).date()
    if period == "yearly":
        return (ts - pd.DateOffset(years=1)).date()
    return None


def period_label(period: str) -> str:
    return PERIOD_LABELS.get(period, PERIOD_LABELS["all"])


def period_start(period: str, now: date | datetime) -> date | None:
    """Inclusive lower bound of ``period`` relative to ``now`` (``None`` for all time)."""

    return _shift_back(_as_date(now), period)


def previous_period_bounds(period: str, now: date | datetime) -> tuple[date, date] | None:
    """Return the ``[start, end)`` window immediately preceding the current one.

    The current window runs from ``period_start`` through today inclusive, and
    the previous window has the same number of days. For ``"daily"`` that is
    just yesterday. Unbounded periods have no predecessor.
    """

    today = _as_date(now)
    start = period_start(period, today)
    if start is None:
        return None
    length = today - start + timedelta(days=1)
    return start - length, start


def _date_column(df: pd.DataFrame) -> pd.Series:
    if "transaction_date" not in df:
        return pd.Series(pd.NaT, index=df.index, dtype="datetime64[ns]")
    return pd.to_datetime(df["transaction_date"]).dt.normalize()


def filter_by_period(transactions, period: str, now: date | datetime) -> pd.DataFrame:
    """Narrow ``transactions`` to the window selected by ``period``.

    Returns the matching input rows with their original columns. Unknown
    periods behave like ``"all"`` and return every row unchanged. The input is
    never mutated.
    """

    df = utils.ensure_dataframe(transactions)
    today = _as_date(now)

    if period == "daily":
        return df.loc[_date_column(df) == pd.Timestamp(today)].copy()

    start = period_start(period, today)
    if start is None:
        return df
    return df.loc[_date_column(df) >= pd.Timestamp(start)].copy()


def filter_between(transactions, start: date, end: date) -> pd.DataFrame:
    """Rows with ``start <= transaction_date < end``."""

    df = utils.ensure_dataframe(transactions)
    dates = _date_column(df)
    return df.loc[(dates >= pd.Timestamp(start)) & (dates < pd.Timestamp(end))].copy()
