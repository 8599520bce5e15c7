# backend/app/api/transactions.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.app.db import get_db
from backend.app.schemas import MessageOut, TransactionOut, TransactionPayload
from backend.app.store import TransactionStore

router = APIRouter()


def get_store(db: Session = Depends(get_db)) -> TransactionStore:
    return TransactionStore(db)


@router.get("", response_model=List[TransactionOut])
def list_transactions(store: TransactionStore = Depends(get_store)):
    """All transactions, newest date first."""
    return store.list()


@router.post("", response_model=TransactionOut, status_code=201)
def create_transaction(payload: TransactionPayload, store: TransactionStore = Depends(get_store)):
    return store.create(payload.model_dump(exclude_unset=True))


@router.put("/{transaction_id}", response_model=TransactionOut)
def update_transaction(
    transaction_id: str,
    payload: TransactionPayload,
    store: TransactionStore = Depends(get_store),
):
    # only the fields present in the body are overwritten
    return store.update(transaction_id, payload.model_dump(exclude_unset=True))


@router.delete("/{transaction_id}", response_model=MessageOut)
def delete_transaction(transaction_id: str, store: TransactionStore = Depends(get_store)):
    store.delete(transaction_id)
    return {"message": "Transaction deleted"}
