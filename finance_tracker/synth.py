"""Synthetic ledger generation.

Produces deterministic, realistic income and expense histories for demos,
seeding a store, and tests. Recurring items (salary, rent, bills) land on
fixed days each month; everyday spending follows a Poisson count per day.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path

import numpy as np
import pandas as pd

from . import utils
from .models import Transaction

DEFAULT_DAYS = 120
DEFAULT_SEED = 7
DEFAULT_OWNER_ID = "user_demo0001"


@dataclass(frozen=True)
class EntryProfile:
    """Static metadata for one kind of ledger entry."""

    description: str
    category: str
    type: str
    amount_range: tuple[float, float]
    day_of_month: int | None = None  # fixed monthly day for recurring entries
    daily_rate: float = 0.0  # expected occurrences per day otherwise


PROFILES: tuple[EntryProfile, ...] = (
    EntryProfile("Monthly salary", "Salary", "income", (58_000.0, 62_000.0), day_of_month=1),
    EntryProfile("Client invoice", "Freelance", "income", (4_000.0, 15_000.0), daily_rate=0.05),
    EntryProfile("Dividend payout", "Investments", "income", (300.0, 2_500.0), daily_rate=0.02),
    EntryProfile("Flat rent", "Rent", "expense", (18_000.0, 18_000.0), day_of_month=5),
    EntryProfile("Electricity bill", "Utilities", "expense", (900.0, 2_400.0), day_of_month=12),
    EntryProfile("Mobile recharge", "Utilities", "expense", (299.0, 599.0), day_of_month=20),
    EntryProfile("Streaming subscription", "Entertainment", "expense", (199.0, 649.0), day_of_month=15),
    EntryProfile("Supermarket run", "Groceries", "expense", (400.0, 3_200.0), daily_rate=0.35),
    EntryProfile("Lunch out", "Food", "expense", (120.0, 650.0), daily_rate=0.6),
    EntryProfile("Cab ride", "Transport", "expense", (90.0, 480.0), daily_rate=0.5),
    EntryProfile("Online order", "Shopping", "expense", (350.0, 5_000.0), daily_rate=0.15),
    EntryProfile("Pharmacy", "Healthcare", "expense", (150.0, 1_800.0), daily_rate=0.05),
    EntryProfile("Course fee", "Education", "expense", (1_000.0, 6_000.0), daily_rate=0.01),
    EntryProfile("Miscellaneous", "", "expense", (50.0, 900.0), daily_rate=0.1),
)


def _stable_id(owner_id: str, day: date, index: int) -> str:
    digest = hashlib.sha1(f"{owner_id}:{day.isoformat()}:{index}".encode("utf-8")).hexdigest()
    return f"syn-{digest[:16]}"


def _entry(profile: EntryProfile, day: date, owner_id: str, rng: np.random.Generator, index: int) -> Transaction:
    low, high = profile.amount_range
    amount = round(float(rng.uniform(low, high)) if high > low else low, 2)
    return Transaction(
        id=_stable_id(owner_id, day, index),
        owner_id=owner_id,
        type=profile.type,  # type: ignore[arg-type]
        amount=amount,
        description=profile.description,
        category=profile.category,
        transaction_date=day,
    )


def generate_transactions(
    days: int = DEFAULT_DAYS,
    *,
    seed: int | None = DEFAULT_SEED,
    owner_id: str = DEFAULT_OWNER_ID,
    end_date: date | None = None,
) -> list[Transaction]:
    """Generate a deterministic ledger covering ``days`` days up to ``end_date``.

    Entries are ordered newest first, matching the store's listing order.
    Blank categories are kept on purpose so consumers exercise the
    ``"Others"`` fallback.
    """

    if days <= 0:
        raise ValueError("days must be positive")

    rng = np.random.default_rng(seed)
    end = end_date or date.today()
    start = end - timedelta(days=days - 1)

    transactions: list[Transaction] = []
    index = 0
    for offset in range(days):
        day = start + timedelta(days=offset)
        for profile in PROFILES:
            if profile.day_of_month is not None:
                count = 1 if day.day == profile.day_of_month else 0
            else:
                count = int(rng.poisson(profile.daily_rate))
            for _ in range(count):
                transactions.append(_entry(profile, day, owner_id, rng, index))
                index += 1

    transactions.sort(key=lambda t: t.transaction_date, reverse=True)
    return transactions


def generate_frame(days: int = DEFAULT_DAYS, *, seed: int | None = DEFAULT_SEED, end_date: date | None = None) -> pd.DataFrame:
    """Return the synthetic ledger as a DataFrame with the standard columns."""

    return utils.ensure_dataframe(generate_transactions(days, seed=seed, end_date=end_date))


def write_synthetic_csv(
    *,
    days: int = DEFAULT_DAYS,
    seed: int | None = DEFAULT_SEED,
    end_date: date | None = None,
    output_dir: str | Path = Path("data"),
) -> Path:
    """Persist a synthetic ledger to ``output_dir/synthetic_transactions.csv``."""

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    dataset = generate_frame(days, seed=seed, end_date=end_date)
    dataset_path = output_path / "synthetic_transactions.csv"
    dataset.to_csv(dataset_path, index=False)
    return dataset_path
