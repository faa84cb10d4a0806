"""Utility script to print totals and statistics payloads for a synthetic ledger."""

from __future__ import annotations

import argparse
import json
from datetime import date

from finance_tracker import insights, periods, synth


def build_report(period: str, *, days: int, seed: int, today: date) -> dict:
    ledger = synth.generate_transactions(days, seed=seed, end_date=today)
    visible = periods.filter_by_period(ledger, period, today)
    return {
        "period": period,
        "period_label": periods.period_label(period),
        "transactions": len(visible),
        "totals": insights.calculate_totals(visible),
        "expenses": insights.calculate_statistics(ledger, "expense", period, today),
        "income": insights.calculate_statistics(ledger, "income", period, today),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Print statistics for a synthetic ledger as JSON")
    parser.add_argument("--period", choices=periods.PERIODS, default="monthly")
    parser.add_argument("--days", type=int, default=synth.DEFAULT_DAYS)
    parser.add_argument("--seed", type=int, default=synth.DEFAULT_SEED)
    args = parser.parse_args()

    report = build_report(args.period, days=args.days, seed=args.seed, today=date.today())
    print(json.dumps(report, indent=2))


if __name__ == "__main__":
    main()
