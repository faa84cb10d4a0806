"""Transaction record and shared constants."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Literal, get_args

TransactionType = Literal["income", "expense"]
TRANSACTION_TYPES: tuple[str, ...] = get_args(TransactionType)

DEFAULT_CATEGORY = "Others"

CATEGORIES: tuple[str, ...] = (
    "Salary",
    "Freelance",
    "Investments",
    "Food",
    "Groceries",
    "Rent",
    "Transport",
    "Utilities",
    "Shopping",
    "Entertainment",
    "Healthcare",
    "Education",
    DEFAULT_CATEGORY,
)


@dataclass(frozen=True)
class Transaction:
    """A single income or expense entry owned by one local identity.

    ``amount`` is always a magnitude; the direction comes from ``type``.
    ``id`` stays ``None`` until the store has assigned one.
    """

    owner_id: str
    type: TransactionType
    amount: float
    description: str
    transaction_date: date
    category: str = DEFAULT_CATEGORY
    id: str | None = None

    @property
    def signed_amount(self) -> float:
        return self.amount if self.type == "income" else -self.amount
