"""Per-browser tracker state and the load/save/delete flow.

State is a handful of plain fields. Everything displayed is re-derived from
``transactions`` plus the current selection, and every successful write is
followed by a full reload from the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal

import pandas as pd

from . import periods
from .forms import FormValidationError, TransactionForm, form_from_transaction, validate_form
from .logging_setup import get_logger
from .models import Transaction
from .store import StoreError, TransactionStore

logger = get_logger("finance_tracker.session")

View = Literal["transactions", "statistics"]
StatisticsTab = Literal["expenses", "income"]


@dataclass
class TrackerSession:
    store: TransactionStore
    owner_id: str
    transactions: list[Transaction] = field(default_factory=list)
    filter_period: str = "all"
    active_view: View = "transactions"
    statistics_tab: StatisticsTab = "expenses"
    editing_id: str | None = None
    error: str | None = None

    @property
    def editing(self) -> Transaction | None:
        if self.editing_id is None:
            return None
        return next((t for t in self.transactions if t.id == self.editing_id), None)

    def refresh(self) -> bool:
        """Reload the owner's ledger. On failure the previous list is kept."""

        try:
            self.transactions = self.store.list(self.owner_id)
        except StoreError as exc:
            self.error = str(exc)
            return False
        self.error = None
        if self.editing_id is not None and self.editing is None:
            self.editing_id = None
        return True

    def submit(self, form: TransactionForm, today: date) -> bool:
        """Insert a new transaction, or update the one being edited.

        Returns True once the write is stored, even if the follow-up reload
        fails; the reload error is left in ``error``.
        """

        try:
            transaction = validate_form(form, self.owner_id, today)
        except FormValidationError as exc:
            logger.warning("Rejected transaction form: %s", exc)
            self.error = str(exc)
            return False

        try:
            if self.editing_id is not None:
                self.store.update(
                    self.editing_id,
                    {
                        "type": transaction.type,
                        "amount": transaction.amount,
                        "description": transaction.description,
                        "category": transaction.category,
                        "transaction_date": transaction.transaction_date,
                    },
                    self.owner_id,
                )
            else:
                self.store.insert(transaction)
        except StoreError as exc:
            self.error = str(exc)
            return False

        self.error = None
        self.editing_id = None
        self.refresh()
        return True

    def delete(self, transaction_id: str) -> bool:
        try:
            self.store.delete(transaction_id, self.owner_id)
        except StoreError as exc:
            self.error = str(exc)
            return False

        self.error = None
        if self.editing_id == transaction_id:
            self.editing_id = None
        self.refresh()
        return True

    def start_edit(self, transaction_id: str) -> TransactionForm | None:
        """Select a transaction for editing and return the pre-filled form."""

        self.editing_id = transaction_id
        self.active_view = "transactions"
        target = self.editing
        if target is None:
            self.editing_id = None
            return None
        return form_from_transaction(target)

    def cancel_edit(self) -> None:
        self.editing_id = None
        self.error = None

    def visible_transactions(self, now: date | datetime) -> pd.DataFrame:
        return periods.filter_by_period(self.transactions, self.filter_period, now)
