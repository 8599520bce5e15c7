# backend/app/models/transaction_model.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Float, Date, DateTime
from backend.app.db import Base


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(String(32), primary_key=True, index=True, default=_new_id)
    title = Column(String, nullable=False)
    amount = Column(Float, nullable=False)  # > 0 income, otherwise expense
    date = Column(Date, nullable=False, index=True)
    category = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
