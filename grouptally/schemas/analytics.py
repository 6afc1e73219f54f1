"""
Pydantic schemas for group spending analytics.
"""
from pydantic import BaseModel
from typing import List
from decimal import Decimal


class CategoryTotal(BaseModel):
    """Spending in one category."""
    category: str
    amount: Decimal
    expense_count: int
    percentage_of_total: float  # 0-100


class MonthTotal(BaseModel):
    """Spending in one calendar month."""
    month: str  # YYYY-MM
    amount: Decimal
    expense_count: int


class MemberSpending(BaseModel):
    """What a member paid for and what their shares add up to."""
    member_id: int
    display_name: str
    paid: Decimal
    share: Decimal


class GroupAnalyticsResponse(BaseModel):
    """Schema for group analytics response."""
    group_id: int
    total_expense: Decimal
    expense_count: int
    categories: List[CategoryTotal] = []
    months: List[MonthTotal] = []
    members: List[MemberSpending] = []
