"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import date as dt_date, datetime
from decimal import Decimal


class ShareInput(BaseModel):
    """A custom share for one member."""
    member_id: int
    amount: Decimal = Field(ge=0, decimal_places=2)


class ExpenseCreate(BaseModel):
    """
    Schema for expense creation.

    Leave `shares` empty for an equal split among `participant_ids`, or among
    all group members when `participant_ids` is empty too.
    """
    name: str = Field(min_length=1, max_length=200)
    amount: Decimal = Field(gt=0, decimal_places=2)
    paid_by: int
    category: Optional[str] = Field(default=None, max_length=50)
    date: Optional[dt_date] = None
    participant_ids: List[int] = []
    shares: List[ShareInput] = []

    @model_validator(mode="after")
    def check_split(self):
        """Equal and custom splits are mutually exclusive."""
        if self.shares and self.participant_ids:
            raise ValueError("Give either participant_ids or shares, not both")
        ids = self.participant_ids or [s.member_id for s in self.shares]
        if len(ids) != len(set(ids)):
            raise ValueError("A member may appear only once in a split")
        return self


class ShareResponse(BaseModel):
    """Schema for expense share response."""
    member_id: int
    display_name: str
    amount: Decimal


class ExpenseResponse(BaseModel):
    """Schema for expense response."""
    id: int
    group_id: int
    name: str
    amount: Decimal
    category: str
    date: dt_date
    paid_by: int
    paid_by_name: str
    shares: List[ShareResponse] = []
    created_at: datetime

    class Config:
        from_attributes = True
