import time
from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator


def _now_ms() -> int:
    return int(time.time() * 1000)


class ExpenseCreate(BaseModel):
    item: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    category: str = Field(default="Other")
    date: str = Field(default_factory=lambda: datetime.utcnow().strftime("%Y-%m-%d"))

    @field_validator("date")
    @classmethod
    def date_must_be_iso(cls, value: str) -> str:
        datetime.strptime(value, "%Y-%m-%d")
        return value

    @field_validator("item", "category")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return value.strip()


class ExpenseBatchCreate(BaseModel):
    expenses: List[ExpenseCreate] = Field(..., min_length=1)


class ExpenseInDB(BaseModel):
    user_id: str
    id: str = Field(default_factory=lambda: str(uuid4()))
    item: str
    amount: float
    category: str
    date: str
    createdAt: int = Field(default_factory=_now_ms)


class ExpensePublic(BaseModel):
    id: str
    item: str
    amount: float
    category: str
    date: str
    createdAt: int


class ParseRequest(BaseModel):
    text: str = Field(..., min_length=1)
    reference_date: Optional[str] = None


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1)
