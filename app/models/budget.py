from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from spend_insights_lib import Budget
from spend_insights_lib.constants import EXPENSE_CATEGORIES

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


class BudgetIn(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    user_id: str = ""
    category: str
    amount: Decimal = Field(ge=0)
    month: str = Field(pattern=MONTH_PATTERN)  # YYYY-MM
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @field_validator("category")
    @classmethod
    def known_category(cls, value: str) -> str:
        if value not in EXPENSE_CATEGORIES:
            raise ValueError(f"category must be one of: {', '.join(EXPENSE_CATEGORIES)}")
        return value

    def to_record(self) -> Budget:
        return Budget(**self.model_dump())
