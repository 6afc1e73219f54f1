"""
Pydantic schemas for Group and GroupMember entities.
"""
from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from grouptally.models.group import MemberRole


class MemberBase(BaseModel):
    """Base member schema."""
    display_name: str = Field(min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    payment_address: Optional[str] = Field(default=None, max_length=255)


class MemberCreate(MemberBase):
    """Schema for adding a member to a group."""
    role: MemberRole = MemberRole.MEMBER


class MemberUpdate(BaseModel):
    """Schema for member update."""
    display_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    payment_address: Optional[str] = Field(default=None, max_length=255)
    role: Optional[MemberRole] = None


class MemberResponse(MemberBase):
    """Schema for member response."""
    id: int
    group_id: int
    role: MemberRole
    created_at: datetime

    class Config:
        from_attributes = True


class GroupBase(BaseModel):
    """Base group schema."""
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None


class GroupCreate(GroupBase):
    """Schema for group creation; the creator becomes the group admin."""
    creator: MemberBase


class GroupUpdate(BaseModel):
    """Schema for group update."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None


class GroupResponse(GroupBase):
    """Schema for group response."""
    id: int
    created_at: datetime

    class Config:
        from_attributes = True


class GroupDetailResponse(GroupResponse):
    """Schema for detailed group response with members."""
    members: List[MemberResponse] = []
    total_expense: Decimal = Decimal("0.00")
