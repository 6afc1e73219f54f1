"""
Settlement model for transfers that clear group balances.
"""
from sqlalchemy import Column, Numeric, DateTime, Enum as SQLEnum, ForeignKey, Integer
from sqlalchemy.orm import relationship
from grouptally.db.base import BaseModel
import enum


class SettlementStatus(str, enum.Enum):
    """Settlement status enumeration."""
    PENDING = "pending"
    COMPLETED = "completed"


class Settlement(BaseModel):
    """A transfer from a debtor to a creditor within a group."""
    __tablename__ = "settlements"

    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False, index=True)
    from_member_id = Column(Integer, ForeignKey("group_members.id"), nullable=False, index=True)
    to_member_id = Column(Integer, ForeignKey("group_members.id"), nullable=False, index=True)
    amount = Column(Numeric(15, 2), nullable=False)
    status = Column(SQLEnum(SettlementStatus), default=SettlementStatus.PENDING, nullable=False, index=True)
    settled_at = Column(DateTime, nullable=True)

    # Relationships
    group = relationship("Group", back_populates="settlements")
    from_member = relationship("GroupMember", foreign_keys=[from_member_id])
    to_member = relationship("GroupMember", foreign_keys=[to_member_id])
