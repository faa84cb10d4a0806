"""Aggregation helpers: totals, category breakdowns, trends and period change."""

from __future__ import annotations

from datetime import date, timedelta

import pandas as pd
import pytest
from finance_tracker import features, insights, periods, synth
from finance_tracker.models import Transaction

OWNER = "user_insight01"


def _txn(
    day: date,
    amount: float,
    txn_type: str = "expense",
    category: str = "Food",
) -> Transaction:
    return Transaction(
        owner_id=OWNER,
        type=txn_type,  # type: ignore[arg-type]
        amount=amount,
        description="entry",
        category=category,
        transaction_date=day,
    )


def test_example_ledger_totals_and_breakdown(example_ledger) -> None:
    visible = periods.filter_by_period(example_ledger, "all", date(2024, 1, 31))

    assert insights.calculate_totals(visible) == {"income": 5000.0, "expense": 1500.0, "balance": 3500.0}

    expenses = [t for t in example_ledger if t.type == "expense"]
    assert insights.category_breakdown(expenses) == [{"category": "Groceries", "total": 1500}]


def test_totals_of_empty_ledger_are_zero() -> None:
    assert insights.calculate_totals([]) == {"income": 0.0, "expense": 0.0, "balance": 0.0}


def test_balance_is_income_minus_expense_for_synthetic_ledgers() -> None:
    for seed in (1, 2, 3):
        ledger = synth.generate_transactions(90, seed=seed, end_date=date(2024, 4, 30))
        totals = insights.calculate_totals(ledger)
        assert totals["balance"] == pytest.approx(totals["income"] - totals["expense"])
        assert totals["income"] > 0
        assert totals["expense"] > 0


def test_category_breakdown_matches_type_totals() -> None:
    ledger = synth.generate_transactions(120, seed=5, end_date=date(2024, 6, 30))
    for txn_type in ("income", "expense"):
        subset = [t for t in ledger if t.type == txn_type]
        breakdown = insights.category_breakdown(subset)
        type_total = insights.calculate_totals(subset)[txn_type]
        # Each category total is rounded to a whole unit.
        assert sum(entry["total"] for entry in breakdown) == pytest.approx(type_total, abs=0.5 * len(breakdown))


def test_category_breakdown_defaults_missing_category_to_others() -> None:
    ledger = [
        _txn(date(2024, 1, 1), 40.0, category=""),
        _txn(date(2024, 1, 2), 60.0, category="Others"),
        _txn(date(2024, 1, 3), 10.0, category="Food"),
    ]
    frame = features.prepare_transactions(ledger)
    frame.loc[0, "category"] = None

    assert insights.category_breakdown(frame) == [
        {"category": "Others", "total": 100},
        {"category": "Food", "total": 10},
    ]


def test_category_breakdown_rounds_half_up_and_keeps_tie_order() -> None:
    ledger = [
        _txn(date(2024, 1, 1), 12.5, category="Transport"),
        _txn(date(2024, 1, 2), 13.0, category="Shopping"),
        _txn(date(2024, 1, 3), 99.4, category="Rent"),
        _txn(date(2024, 1, 4), 0.49, category="Rent"),
    ]
    assert insights.category_breakdown(ledger) == [
        {"category": "Rent", "total": 100},
        {"category": "Transport", "total": 13},
        {"category": "Shopping", "total": 13},
    ]


def test_trend_series_buckets_by_day_and_keeps_recent() -> None:
    ledger = [
        _txn(date(2024, 1, 20), 5.0),
        _txn(date(2024, 1, 20), 7.5),
        _txn(date(2024, 1, 18), 3.0),
        _txn(date(2024, 1, 18), 100.0, txn_type="income", category="Salary"),
        _txn(date(2024, 1, 5), 1.0),
    ]

    assert insights.trend_series(ledger, "expense") == [
        {"label": "5 Jan", "amount": 1.0},
        {"label": "18 Jan", "amount": 3.0},
        {"label": "20 Jan", "amount": 12.5},
    ]
    assert insights.trend_series(ledger, "expense", bucket_count=2) == [
        {"label": "18 Jan", "amount": 3.0},
        {"label": "20 Jan", "amount": 12.5},
    ]
    assert insights.trend_series(ledger, "income") == [{"label": "18 Jan", "amount": 100.0}]


def test_trend_series_is_bounded_and_chronological() -> None:
    ledger = synth.generate_transactions(90, seed=9, end_date=date(2024, 9, 30))
    trend = insights.trend_series(ledger, "expense", bucket_count=15)
    assert 0 < len(trend) <= 15

    parsed = [pd.to_datetime(f"{point['label']} 2024", format="%d %b %Y") for point in trend]
    assert parsed == sorted(parsed)
    assert parsed[-1] <= pd.Timestamp(2024, 9, 30)


def test_trend_series_merges_same_day_across_years() -> None:
    ledger = [
        _txn(date(2024, 1, 5), 10.0),
        _txn(date(2023, 1, 5), 20.0),
    ]
    assert insights.trend_series(ledger, "expense") == [{"label": "5 Jan", "amount": 30.0}]


def test_period_change_compares_previous_window() -> None:
    today = date(2024, 3, 20)
    ledger = [
        _txn(date(2024, 3, 19), 150.0),  # current week
        _txn(date(2024, 3, 12), 100.0),  # previous week
        _txn(date(2024, 3, 1), 999.0),  # older than both windows
    ]
    assert insights.period_change(ledger, "expense", "weekly", today) == pytest.approx(50.0)
    assert insights.period_change(ledger, "income", "weekly", today) is None
    assert insights.period_change(ledger, "expense", "all", today) is None


def test_period_change_daily_uses_yesterday() -> None:
    today = date(2024, 3, 20)
    ledger = [_txn(today, 30.0), _txn(date(2024, 3, 19), 60.0)]
    assert insights.period_change(ledger, "expense", "daily", today) == pytest.approx(-50.0)


def test_period_change_is_flat_for_constant_spending() -> None:
    today = date(2024, 3, 31)
    ledger = [_txn(today - timedelta(days=offset), 10.0) for offset in range(900)]

    for period in ("daily", "weekly", "monthly", "yearly"):
        assert insights.period_change(ledger, "expense", period, today) == pytest.approx(0.0)


def test_calculate_statistics_payload() -> None:
    today = date(2024, 1, 31)
    ledger = synth.generate_transactions(60, seed=4, end_date=today)
    stats = insights.calculate_statistics(ledger, "expense", "monthly", today)

    visible = periods.filter_by_period(ledger, "monthly", today)
    assert stats["period_label"] == "LAST 30 DAYS"
    assert stats["total"] == pytest.approx(insights.calculate_totals(visible)["expense"])
    assert [entry["total"] for entry in stats["categories"]] == sorted(
        (entry["total"] for entry in stats["categories"]), reverse=True
    )
    assert len(stats["trend"]) <= insights.DEFAULT_TREND_BUCKETS
    assert stats["change_pct"] is None or isinstance(stats["change_pct"], float)
