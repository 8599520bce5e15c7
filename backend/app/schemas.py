# backend/app/schemas.py
import datetime as dt
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# Incoming transaction fields. Every field is optional here: the store decides
# what is required on create, and updates overwrite only what was sent.
class TransactionPayload(BaseModel):
    title: Optional[str] = None
    amount: Optional[float] = None
    # left loose so the store can cut ISO datetimes down to the day
    date: Optional[Union[dt.date, str]] = None
    category: Optional[str] = None


class TransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    amount: float
    date: dt.date
    category: str
    created_at: dt.datetime = Field(serialization_alias="createdAt")
    updated_at: dt.datetime = Field(serialization_alias="updatedAt")


class MessageOut(BaseModel):
    message: str


class InsightsRequest(BaseModel):
    # forwarded verbatim, so no per-item schema
    transactions: List[Any]


class GoalsRequest(BaseModel):
    income: float
    expenses: float


class TextOut(BaseModel):
    text: Optional[str] = None
