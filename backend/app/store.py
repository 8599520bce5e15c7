# backend/app/store.py
"""
Persistence for transaction records.

The store owns validation of the required fields (title, amount, date,
category), id assignment and timestamps. Database failures are rolled back
and surfaced as StoreError so the API layer only deals with our own errors.
"""
import logging
from datetime import date, datetime, timezone
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.errors import NotFoundError, StoreError, ValidationError
from backend.app.models.transaction_model import Transaction

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "amount", "date", "category")


def _clean_title(value):
    if not isinstance(value, str) or not value:
        raise ValidationError("Path `title` is required.")
    return value


def _clean_amount(value):
    if isinstance(value, bool):
        raise ValidationError(f"Invalid amount: {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid amount: {value!r}")


def _clean_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
        # ISO datetimes ("2024-01-05T10:30:00.000Z") keep the day as written
        text = value[:-1] + "+00:00" if value.endswith("Z") else value
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
    raise ValidationError(f"Invalid date: {value!r}")


def _clean_category(value):
    if not isinstance(value, str) or not value:
        raise ValidationError("Path `category` is required.")
    return value


_CLEANERS = {
    "title": _clean_title,
    "amount": _clean_amount,
    "date": _clean_date,
    "category": _clean_category,
}


def _clean(data: dict) -> dict:
    """Validate the known fields present in ``data``; unknown keys are dropped."""
    cleaned = {}
    for field, cleaner in _CLEANERS.items():
        if field not in data:
            continue
        if data[field] is None:
            raise ValidationError(f"Path `{field}` is required.")
        cleaned[field] = cleaner(data[field])
    return cleaned


class TransactionStore:
    def __init__(self, db: Session):
        self.db = db

    def list(self, descending: bool = True) -> List[Transaction]:
        order = (Transaction.date, Transaction.created_at)
        if descending:
            order = tuple(col.desc() for col in order)
        try:
            return self.db.query(Transaction).order_by(*order).all()
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def get(self, transaction_id: str) -> Transaction:
        try:
            txn = self.db.get(Transaction, transaction_id)
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e
        if txn is None:
            raise NotFoundError("Transaction not found")
        return txn

    def create(self, data: dict) -> Transaction:
        missing = [f for f in REQUIRED_FIELDS if data.get(f) is None]
        if missing:
            raise ValidationError(
                "Transaction validation failed: "
                + ", ".join(f"{f}: Path `{f}` is required." for f in missing)
            )
        txn = Transaction(**_clean(data))
        self._commit(txn)
        logger.info("Created transaction %s", txn.id)
        return txn

    def update(self, transaction_id: str, data: dict) -> Transaction:
        changes = _clean(data)
        txn = self.get(transaction_id)
        for field, value in changes.items():
            setattr(txn, field, value)
        # bump even when nothing changed, like a save would
        txn.updated_at = datetime.now(timezone.utc)
        self._commit(txn)
        logger.info("Updated transaction %s (%s)", txn.id, ", ".join(changes) or "no fields")
        return txn

    def delete(self, transaction_id: str) -> None:
        txn = self.get(transaction_id)
        try:
            self.db.delete(txn)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(str(e)) from e
        logger.info("Deleted transaction %s", transaction_id)

    def _commit(self, txn: Transaction) -> None:
        try:
            self.db.add(txn)
            self.db.commit()
            self.db.refresh(txn)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(str(e)) from e
