"""Tracker session: add/edit/delete flow with reloads and error reporting."""

from __future__ import annotations

from datetime import date

import pytest
from finance_tracker.forms import TransactionForm
from finance_tracker.session import TrackerSession
from finance_tracker.store import StoreError

TODAY = date(2024, 1, 31)


def _form(**overrides) -> TransactionForm:
    values = dict(type="expense", amount="250", description="Dinner", category="Food", transaction_date=TODAY)
    values.update(overrides)
    return TransactionForm(**values)


class _FailingStore:
    def __init__(self, inner) -> None:
        self.inner = inner
        self.fail = False
        self.fail_list = False

    def list(self, owner_id):
        if self.fail_list:
            raise StoreError("Could not load transactions: connection refused")
        return self.inner.list(owner_id)

    def insert(self, transaction):
        if self.fail:
            raise StoreError("Could not save transaction: connection refused")
        return self.inner.insert(transaction)

    def update(self, transaction_id, fields, owner_id):
        if self.fail:
            raise StoreError("Could not update transaction: connection refused")
        return self.inner.update(transaction_id, fields, owner_id)

    def delete(self, transaction_id, owner_id):
        if self.fail:
            raise StoreError("Could not delete transaction: connection refused")
        return self.inner.delete(transaction_id, owner_id)


@pytest.fixture
def tracker(store, owner_id) -> TrackerSession:
    session = TrackerSession(store=store, owner_id=owner_id)
    assert session.refresh()
    return session


def test_submit_inserts_and_reloads(tracker) -> None:
    assert tracker.submit(_form(), TODAY)
    assert tracker.submit(_form(type="income", amount="1000", description="Bonus", category=""), TODAY)

    assert tracker.error is None
    assert len(tracker.transactions) == 2
    bonus = next(t for t in tracker.transactions if t.description == "Bonus")
    assert bonus.category == "Others"


def test_invalid_form_never_reaches_store(tracker, store, owner_id) -> None:
    assert not tracker.submit(_form(amount="-3"), TODAY)
    assert tracker.error
    assert store.list(owner_id) == []


def test_edit_updates_target_and_clears_selection(tracker) -> None:
    tracker.submit(_form(), TODAY)
    target = tracker.transactions[0]

    form = tracker.start_edit(target.id)
    assert form is not None and form.amount == "250.00"
    assert tracker.editing == target

    assert tracker.submit(_form(amount="275.5", description="Dinner with tip"), TODAY)
    assert tracker.editing_id is None
    assert len(tracker.transactions) == 1
    assert tracker.transactions[0].id == target.id
    assert tracker.transactions[0].amount == pytest.approx(275.5)


def test_start_edit_of_unknown_id_is_ignored(tracker) -> None:
    assert tracker.start_edit("missing") is None
    assert tracker.editing_id is None


def test_delete_removes_one_and_clears_edit_target(tracker) -> None:
    tracker.submit(_form(description="First"), TODAY)
    tracker.submit(_form(description="Second"), TODAY)
    first = next(t for t in tracker.transactions if t.description == "First")

    tracker.start_edit(first.id)
    assert tracker.delete(first.id)

    assert [t.description for t in tracker.transactions] == ["Second"]
    assert tracker.editing_id is None


def test_store_failure_keeps_state_and_reports_error(store, owner_id) -> None:
    failing = _FailingStore(store)
    tracker = TrackerSession(store=failing, owner_id=owner_id)
    tracker.submit(_form(), TODAY)
    before = list(tracker.transactions)

    failing.fail = True
    assert not tracker.submit(_form(description="Lost"), TODAY)
    assert "connection refused" in tracker.error
    assert not tracker.delete(before[0].id)
    assert tracker.transactions == before

    failing.fail = False
    assert tracker.delete(before[0].id)
    assert tracker.error is None
    assert tracker.transactions == []


def test_stored_write_succeeds_when_reload_fails(store, owner_id) -> None:
    failing = _FailingStore(store)
    tracker = TrackerSession(store=failing, owner_id=owner_id)

    failing.fail_list = True
    assert tracker.submit(_form(description="Saved once"), TODAY)
    assert "Could not load" in tracker.error
    assert tracker.transactions == []

    failing.fail_list = False
    assert tracker.refresh()
    assert tracker.error is None
    assert [t.description for t in tracker.transactions] == ["Saved once"]


def test_visible_transactions_follow_filter_period(tracker) -> None:
    tracker.submit(_form(description="Today"), TODAY)
    tracker.submit(_form(description="Earlier", transaction_date=date(2024, 1, 2)), TODAY)

    tracker.filter_period = "daily"
    assert list(tracker.visible_transactions(TODAY)["description"]) == ["Today"]

    tracker.filter_period = "all"
    assert len(tracker.visible_transactions(TODAY)) == 2
