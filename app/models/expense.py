from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from spend_insights_lib import Expense
from spend_insights_lib.constants import EXPENSE_CATEGORIES, PAYMENT_METHODS


class ExpenseIn(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    user_id: str = ""
    amount: Decimal = Field(ge=0)
    category: str
    date: datetime
    payment_method: str
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @field_validator("category")
    @classmethod
    def known_category(cls, value: str) -> str:
        if value not in EXPENSE_CATEGORIES:
            raise ValueError(f"category must be one of: {', '.join(EXPENSE_CATEGORIES)}")
        return value

    @field_validator("payment_method")
    @classmethod
    def known_payment_method(cls, value: str) -> str:
        if value not in PAYMENT_METHODS:
            raise ValueError(f"payment_method must be one of: {', '.join(PAYMENT_METHODS)}")
        return value

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else None

    def to_record(self) -> Expense:
        return Expense(**self.model_dump())
