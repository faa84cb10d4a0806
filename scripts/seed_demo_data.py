"""Seed a store with a synthetic income/expense history for one owner.

By default the owner is the local identity the Streamlit app uses, so the
dashboard shows the seeded ledger on next load. Existing rows are kept.

Usage: python -m scripts.seed_demo_data --days 90 --seed 7
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from datetime import date

from finance_tracker import config, identity, synth
from finance_tracker.logging_setup import configure_logging, get_logger
from finance_tracker.models import DEFAULT_CATEGORY
from finance_tracker.store import SqlTransactionStore

logger = get_logger("finance_tracker.scripts.seed_demo_data")


def seed(store: SqlTransactionStore, owner_id: str, *, days: int, seed_value: int, end_date: date) -> int:
    transactions = synth.generate_transactions(days, seed=seed_value, owner_id=owner_id, end_date=end_date)
    for transaction in transactions:
        # The store assigns ids; blank synthetic categories get the default.
        store.insert(replace(transaction, id=None, category=transaction.category or DEFAULT_CATEGORY))
    return len(transactions)


def main() -> None:
    settings = config.load_settings()
    parser = argparse.ArgumentParser(description="Insert a synthetic ledger into the transactions store")
    parser.add_argument("--days", type=int, default=synth.DEFAULT_DAYS)
    parser.add_argument("--seed", type=int, default=synth.DEFAULT_SEED)
    parser.add_argument("--owner-id", default=None, help="Defaults to this machine's local identity")
    parser.add_argument("--database-url", default=settings.database_url)
    args = parser.parse_args()

    configure_logging(settings.log_level)

    owner_id = args.owner_id or identity.get_or_create_local_owner_id(settings.owner_id_path)
    store = SqlTransactionStore(args.database_url)
    store.create_schema()

    count = seed(store, owner_id, days=args.days, seed_value=args.seed, end_date=date.today())
    logger.info("Seeded %d transactions for %s", count, owner_id)
    print(f"Inserted {count} transactions for {owner_id}")


if __name__ == "__main__":
    main()
