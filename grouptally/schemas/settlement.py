"""
Pydantic schemas for balances and settlements.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from grouptally.models.settlement import SettlementStatus


class BalanceResponse(BaseModel):
    """One member's position, rounded for display."""
    member_id: int
    display_name: str
    paid: Decimal
    owed: Decimal
    balance: Decimal  # Positive: the group owes this member


class GroupBalancesResponse(BaseModel):
    """Schema for group balances response."""
    group_id: int
    total_expense: Decimal
    balances: List[BalanceResponse]


class SettlementResponse(BaseModel):
    """Schema for a stored settlement."""
    id: int
    group_id: int
    from_member_id: int
    from_name: str
    to_member_id: int
    to_name: str
    to_payment_address: Optional[str] = None
    amount: Decimal
    status: SettlementStatus
    created_at: datetime
    settled_at: Optional[datetime] = None


class SettlementPlanResponse(BaseModel):
    """Schema for settle-up response."""
    group_id: int
    message: str
    settlements: List[SettlementResponse]
    summary: str
