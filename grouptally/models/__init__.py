"""Models package - Import all models for SQLAlchemy registration."""
from grouptally.models.group import Group, GroupMember, MemberRole
from grouptally.models.expense import Expense, ExpenseShare
from grouptally.models.settlement import Settlement, SettlementStatus

__all__ = [
    "Group",
    "GroupMember",
    "MemberRole",
    "Expense",
    "ExpenseShare",
    "Settlement",
    "SettlementStatus",
]
