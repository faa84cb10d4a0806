"""Shared fixtures: a throwaway SQLite store and a small hand-written ledger."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest
from finance_tracker.models import Transaction
from finance_tracker.store import SqlTransactionStore

OWNER = "user_test00001"


@pytest.fixture
def store(tmp_path: Path) -> SqlTransactionStore:
    db = SqlTransactionStore(f"sqlite:///{tmp_path / 'ledger.db'}")
    db.create_schema()
    return db


@pytest.fixture
def example_ledger() -> list[Transaction]:
    return [
        Transaction(
            id="t3",
            owner_id=OWNER,
            type="expense",
            amount=300.0,
            description="Vegetables",
            category="Groceries",
            transaction_date=date(2024, 1, 10),
        ),
        Transaction(
            id="t2",
            owner_id=OWNER,
            type="expense",
            amount=1200.0,
            description="Monthly stock-up",
            category="Groceries",
            transaction_date=date(2024, 1, 3),
        ),
        Transaction(
            id="t1",
            owner_id=OWNER,
            type="income",
            amount=5000.0,
            description="January salary",
            category="Salary",
            transaction_date=date(2024, 1, 1),
        ),
    ]


@pytest.fixture
def owner_id() -> str:
    return OWNER
