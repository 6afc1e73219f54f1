"""
Analytics service: spending totals by category, month and member.

Only expenses count here; settlements move money between members and are
not spending.
"""
import logging
from decimal import Decimal
from typing import Dict, List
from sqlalchemy.orm import Session, selectinload

from grouptally.core.money import round_money, total
from grouptally.models.expense import Expense
from grouptally.models.group import GroupMember
from grouptally.schemas.analytics import (
    CategoryTotal, GroupAnalyticsResponse, MemberSpending, MonthTotal
)
from grouptally.services.category_service import EXPENSE_CATEGORIES
from grouptally.services.group_service import get_group

logger = logging.getLogger(__name__)


def _percentage(part: Decimal, whole: Decimal) -> float:
    return round(float(part / whole * 100), 2) if whole > 0 else 0.0


def category_totals(expenses: List[Expense]) -> List[CategoryTotal]:
    """Spending per category, largest first; ties follow EXPENSE_CATEGORIES order."""
    spending: Dict[str, Decimal] = {}
    counts: Dict[str, int] = {}
    for expense in expenses:
        category = expense.category
        spending[category] = spending.get(category, Decimal(0)) + expense.amount
        counts[category] = counts.get(category, 0) + 1

    grand_total = total(spending.values())
    known = [c for c in EXPENSE_CATEGORIES if c in spending]
    # Categories stored before the list changed go after the known ones
    ordered = known + sorted(c for c in spending if c not in EXPENSE_CATEGORIES)

    items = [
        CategoryTotal(
            category=category,
            amount=round_money(spending[category]),
            expense_count=counts[category],
            percentage_of_total=_percentage(spending[category], grand_total)
        )
        for category in ordered
    ]
    items.sort(key=lambda x: x.amount, reverse=True)
    return items


def monthly_totals(expenses: List[Expense]) -> List[MonthTotal]:
    """Spending per calendar month, oldest first."""
    spending: Dict[str, Decimal] = {}
    counts: Dict[str, int] = {}
    for expense in expenses:
        month = expense.date.strftime("%Y-%m")
        spending[month] = spending.get(month, Decimal(0)) + expense.amount
        counts[month] = counts.get(month, 0) + 1

    return [
        MonthTotal(month=month, amount=round_money(spending[month]), expense_count=counts[month])
        for month in sorted(spending)
    ]


def member_spending(members: List[GroupMember], expenses: List[Expense]) -> List[MemberSpending]:
    """Paid and share totals for every member in join order."""
    paid = {m.id: Decimal(0) for m in members}
    share = {m.id: Decimal(0) for m in members}
    for expense in expenses:
        paid[expense.paid_by] += expense.amount
        for expense_share in expense.shares:
            share[expense_share.member_id] += expense_share.amount

    return [
        MemberSpending(
            member_id=m.id,
            display_name=m.display_name,
            paid=round_money(paid[m.id]),
            share=round_money(share[m.id])
        )
        for m in members
    ]


def get_group_analytics(group_id: int, db: Session) -> GroupAnalyticsResponse:
    """Build the spending breakdown of a group."""
    get_group(group_id, db)
    members = db.query(GroupMember).filter(
        GroupMember.group_id == group_id
    ).order_by(GroupMember.id).all()
    expenses = db.query(Expense).options(
        selectinload(Expense.shares)
    ).filter(
        Expense.group_id == group_id
    ).order_by(Expense.date, Expense.id).all()

    logger.debug(f"Group {group_id}: analytics over {len(expenses)} expenses")
    return GroupAnalyticsResponse(
        group_id=group_id,
        total_expense=round_money(total(e.amount for e in expenses)),
        expense_count=len(expenses),
        categories=category_totals(expenses),
        months=monthly_totals(expenses),
        members=member_spending(members, expenses)
    )
