"""
Expense model for tracking group spending.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from grouptally.db.base import BaseModel


class Expense(BaseModel):
    """Expense model representing a single spending event paid by one member."""
    __tablename__ = "expenses"

    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False, index=True)
    paid_by = Column(Integer, ForeignKey("group_members.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    category = Column(String(50), nullable=False, default="other")
    date = Column(Date, nullable=False, index=True)

    # Relationships
    group = relationship("Group", back_populates="expenses")
    payer = relationship("GroupMember", foreign_keys=[paid_by])
    shares = relationship(
        "ExpenseShare", back_populates="expense",
        cascade="all, delete-orphan", order_by="ExpenseShare.id"
    )


class ExpenseShare(BaseModel):
    """Portion of an expense owed by one member."""
    __tablename__ = "expense_shares"
    __table_args__ = (
        UniqueConstraint("expense_id", "member_id", name="uq_expense_share_member"),
    )

    expense_id = Column(Integer, ForeignKey("expenses.id"), nullable=False, index=True)
    member_id = Column(Integer, ForeignKey("group_members.id"), nullable=False, index=True)
    amount = Column(Numeric(15, 2), nullable=False)

    # Relationships
    expense = relationship("Expense", back_populates="shares")
    member = relationship("GroupMember")
