"""SQLAlchemy-backed transaction store.

Every operation is scoped to one owner id and runs in its own short-lived
session. Failures surface as :class:`StoreError`; nothing is retried.

Usage
-----
store = SqlTransactionStore("sqlite:///finance_tracker.db")
store.create_schema()
store.insert(transaction)
rows = store.list(owner_id)
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Protocol

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Numeric,
    String,
    Text,
    create_engine,
    delete,
    func,
    select,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from .logging_setup import get_logger
from .models import DEFAULT_CATEGORY, Transaction

logger = get_logger("finance_tracker.store")

UPDATABLE_FIELDS = frozenset({"type", "amount", "description", "category", "transaction_date"})


class StoreError(RuntimeError):
    """A store call failed; no changes were applied."""


class TransactionNotFoundError(StoreError):
    """No transaction with the given id exists for the owner."""


class Base(DeclarativeBase):
    pass


class TransactionRow(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_transactions_amount_non_negative"),
        CheckConstraint("type IN ('income', 'expense')", name="ck_transactions_type"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(7), nullable=False)
    amount: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False, default=DEFAULT_CATEGORY)
    transaction_date: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def to_transaction(self) -> Transaction:
        return Transaction(
            id=self.id,
            owner_id=self.user_id,
            type=self.type,  # type: ignore[arg-type]
            amount=float(self.amount),
            description=self.description,
            category=self.category or DEFAULT_CATEGORY,
            transaction_date=self.transaction_date,
        )


class TransactionStore(Protocol):
    """The capability the tracker needs from a persistence backend."""

    def list(self, owner_id: str) -> list[Transaction]: ...

    def insert(self, transaction: Transaction) -> Transaction: ...

    def update(self, transaction_id: str, fields: Mapping[str, Any], owner_id: str) -> Transaction: ...

    def delete(self, transaction_id: str, owner_id: str) -> None: ...


class SqlTransactionStore:
    """Owner-scoped CRUD over the ``transactions`` table."""

    def __init__(self, database_url: str, *, engine: Engine | None = None) -> None:
        if engine is None:
            connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
            engine = create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)
        self.engine = engine
        self._session_maker = sessionmaker(bind=engine, expire_on_commit=False, class_=Session)

    def create_schema(self) -> None:
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as exc:
            logger.error("Creating transactions schema failed: %s", exc)
            raise StoreError(f"Could not prepare the transactions table: {exc}") from exc

    @contextmanager
    def _session_scope(self, action: str) -> Iterator[Session]:
        session = self._session_maker()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Store %s failed: %s", action, exc)
            raise StoreError(f"Could not {action} transaction: {exc}") from exc
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _owned_row(self, session: Session, transaction_id: str, owner_id: str) -> TransactionRow:
        row = session.scalars(
            select(TransactionRow).where(
                TransactionRow.id == transaction_id,
                TransactionRow.user_id == owner_id,
            )
        ).one_or_none()
        if row is None:
            raise TransactionNotFoundError(f"Transaction {transaction_id} not found")
        return row

    def list(self, owner_id: str) -> list[Transaction]:
        """All of the owner's transactions, newest ``transaction_date`` first."""

        with self._session_scope("load") as session:
            rows = session.scalars(
                select(TransactionRow)
                .where(TransactionRow.user_id == owner_id)
                .order_by(TransactionRow.transaction_date.desc(), TransactionRow.created_at.desc())
            ).all()
            transactions = [row.to_transaction() for row in rows]
        logger.debug("Loaded %d transactions for %s", len(transactions), owner_id)
        return transactions

    def insert(self, transaction: Transaction) -> Transaction:
        if not transaction.owner_id:
            raise StoreError("Cannot save a transaction without an owner id")

        with self._session_scope("save") as session:
            row = TransactionRow(
                user_id=transaction.owner_id,
                type=transaction.type,
                amount=transaction.amount,
                description=transaction.description,
                category=transaction.category or DEFAULT_CATEGORY,
                transaction_date=transaction.transaction_date,
            )
            session.add(row)
            session.flush()
            saved = row.to_transaction()
        logger.info("Inserted %s transaction %s", saved.type, saved.id)
        return saved

    def update(self, transaction_id: str, fields: Mapping[str, Any], owner_id: str) -> Transaction:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise StoreError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        with self._session_scope("update") as session:
            row = self._owned_row(session, transaction_id, owner_id)
            for name, value in fields.items():
                setattr(row, name, value)
            if not row.category:
                row.category = DEFAULT_CATEGORY
            session.flush()
            saved = row.to_transaction()
        logger.info("Updated transaction %s", transaction_id)
        return saved

    def delete(self, transaction_id: str, owner_id: str) -> None:
        with self._session_scope("delete") as session:
            result = session.execute(
                delete(TransactionRow).where(
                    TransactionRow.id == transaction_id,
                    TransactionRow.user_id == owner_id,
                )
            )
            if result.rowcount == 0:
                raise TransactionNotFoundError(f"Transaction {transaction_id} not found")
        logger.info("Deleted transaction %s", transaction_id)
