"""Insights and aggregation helpers for the Finance Tracker."""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import TypedDict

import pandas as pd

from . import features, periods
from .models import TransactionType

DEFAULT_TREND_BUCKETS = 15


class Totals(TypedDict):
    income: float
    expense: float
    balance: float


class CategoryTotal(TypedDict):
    category: str
    total: int


class TrendPoint(TypedDict):
    label: str
    amount: float


class StatisticsPayload(TypedDict):
    type: str
    period: str
    period_label: str
    total: float
    change_pct: float | None
    categories: list[CategoryTotal]
    trend: list[TrendPoint]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _of_type(df: pd.DataFrame, txn_type: str) -> pd.DataFrame:
    return df.loc[df["type"] == txn_type]


def calculate_totals(transactions) -> Totals:
    """Sum income and expense amounts; ``balance`` is their difference."""

    df = features.prepare_transactions(transactions)
    income = float(_of_type(df, "income")["amount"].sum())
    expense = float(_of_type(df, "expense")["amount"].sum())
    return {
        "income": income,
        "expense": expense,
        "balance": income - expense,
    }


def category_breakdown(transactions) -> list[CategoryTotal]:
    """Group by category, largest first.

    Totals are rounded half-up to whole currency units before sorting. Equal
    totals keep the order in which their categories first appear.
    """

    df = features.prepare_transactions(transactions)
    if df.empty:
        return []

    grouped = df.groupby("category", sort=False)["amount"].sum()
    entries: list[CategoryTotal] = [
        {"category": str(name), "total": _round_half_up(float(value))}
        for name, value in grouped.items()
    ]
    return sorted(entries, key=lambda entry: entry["total"], reverse=True)


def trend_series(
    transactions,
    txn_type: TransactionType,
    bucket_count: int = DEFAULT_TREND_BUCKETS,
) -> list[TrendPoint]:
    """Daily totals for one transaction type, oldest first, last ``bucket_count`` days.

    Buckets are keyed by their label (``"5 Jan"``), so the same day and month
    in different years share a bucket. A bucket is placed on the timeline by
    the date of the first transaction that landed in it.
    """

    df = _of_type(features.prepare_transactions(transactions), txn_type)
    if df.empty or bucket_count <= 0:
        return []

    buckets = (
        df.groupby("day_label", sort=False)
        .agg(amount=("amount", "sum"), timestamp=("transaction_date", "first"))
        .sort_values("timestamp", kind="stable")
        .tail(bucket_count)
    )
    return [
        {"label": str(label), "amount": float(row["amount"])}
        for label, row in buckets.iterrows()
    ]


def period_change(
    transactions,
    txn_type: TransactionType,
    period: str,
    now: date | datetime,
) -> float | None:
    """Percentage change of a type's total versus the preceding window of equal length.

    ``None`` when there is no preceding window (all time) or it has no total
    to compare against.
    """

    bounds = periods.previous_period_bounds(period, now)
    if bounds is None:
        return None

    df = features.prepare_transactions(transactions)
    current = float(_of_type(periods.filter_by_period(df, period, now), txn_type)["amount"].sum())
    previous = float(_of_type(periods.filter_between(df, *bounds), txn_type)["amount"].sum())
    if previous == 0:
        return None
    return (current - previous) / previous * 100.0


def calculate_statistics(
    transactions,
    txn_type: TransactionType,
    period: str,
    now: date | datetime,
    bucket_count: int = DEFAULT_TREND_BUCKETS,
) -> StatisticsPayload:
    """Everything the statistics tab shows for one transaction type.

    ``transactions`` is the full ledger; the period filter is applied here so
    the change figure can look at the preceding window.
    """

    df = features.prepare_transactions(transactions)
    current = _of_type(periods.filter_by_period(df, period, now), txn_type)

    return {
        "type": txn_type,
        "period": period,
        "period_label": periods.period_label(period),
        "total": float(current["amount"].sum()),
        "change_pct": period_change(df, txn_type, period, now),
        "categories": category_breakdown(current),
        "trend": trend_series(current, txn_type, bucket_count),
    }
