"""Transaction form input and validation.

Raw widget values are checked here before any store call is attempted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .models import DEFAULT_CATEGORY, TRANSACTION_TYPES, Transaction


class FormValidationError(ValueError):
    """One or more form fields are invalid. ``errors`` maps field name to message."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        super().__init__("; ".join(self.errors.values()))


@dataclass
class TransactionForm:
    type: str = "expense"
    amount: str = ""
    description: str = ""
    category: str = ""
    transaction_date: date | str = field(default_factory=date.today)


def empty_form(today: date) -> TransactionForm:
    return TransactionForm(transaction_date=today)


def form_from_transaction(transaction: Transaction) -> TransactionForm:
    """Pre-fill the form with an existing transaction for editing."""

    return TransactionForm(
        type=transaction.type,
        amount=f"{transaction.amount:.2f}",
        description=transaction.description,
        category=transaction.category,
        transaction_date=transaction.transaction_date,
    )


def _parse_amount(raw: object) -> float:
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation as exc:
        raise ValueError("Amount must be a number") from exc
    if not value.is_finite():
        raise ValueError("Amount must be a number")
    if value <= 0:
        raise ValueError("Amount must be greater than zero")
    try:
        cents = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError("Amount is too large") from exc
    if cents <= 0:
        raise ValueError("Amount must be at least 0.01")
    return float(cents)


def _parse_date(raw: date | str) -> date:
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    try:
        return date.fromisoformat(str(raw).strip())
    except ValueError as exc:
        raise ValueError("Date must be in YYYY-MM-DD format") from exc


def validate_form(form: TransactionForm, owner_id: str, today: date) -> Transaction:
    """Build a :class:`Transaction` from ``form`` or raise :class:`FormValidationError`."""

    errors: dict[str, str] = {}

    if not owner_id:
        errors["owner_id"] = "No local identity is available"

    if form.type not in TRANSACTION_TYPES:
        errors["type"] = "Type must be income or expense"

    amount = 0.0
    try:
        amount = _parse_amount(form.amount)
    except ValueError as exc:
        errors["amount"] = str(exc)

    description = (form.description or "").strip()
    if not description:
        errors["description"] = "Description is required"

    transaction_date = today
    try:
        transaction_date = _parse_date(form.transaction_date)
    except ValueError as exc:
        errors["transaction_date"] = str(exc)
    else:
        if transaction_date > today:
            errors["transaction_date"] = "Date cannot be in the future"

    if errors:
        raise FormValidationError(errors)

    category = (form.category or "").strip() or DEFAULT_CATEGORY
    return Transaction(
        owner_id=owner_id,
        type=form.type,  # type: ignore[arg-type]
        amount=amount,
        description=description,
        category=category,
        transaction_date=transaction_date,
    )
