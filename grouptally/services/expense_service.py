"""
Expense service for expense-related business logic.
"""
import logging
from sqlalchemy.orm import Session, selectinload
from datetime import date
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from grouptally.core.exceptions import ExpenseNotFoundError, InvalidSplitError
from grouptally.core.money import round_money, split_evenly, total
from grouptally.models.group import GroupMember
from grouptally.models.expense import Expense, ExpenseShare
from grouptally.services.category_service import normalize_category
from grouptally.services.group_service import get_group

logger = logging.getLogger(__name__)


def calculate_shares(
    amount: Decimal,
    member_ids: Sequence[int],
    participant_ids: Optional[Sequence[int]] = None,
    custom_shares: Optional[Sequence[Tuple[int, Decimal]]] = None,
) -> List[Tuple[int, Decimal]]:
    """
    Work out (member_id, amount) shares for an expense.

    Custom shares are used as given. Otherwise the amount is split equally
    among `participant_ids`, or among every group member when none are
    selected.
    """
    group_members = set(member_ids)

    if custom_shares:
        shares = [(member_id, round_money(share)) for member_id, share in custom_shares]
    else:
        participants = list(participant_ids) if participant_ids else list(member_ids)
        if not participants:
            raise InvalidSplitError("Expense needs at least one participant")
        shares = list(zip(participants, split_evenly(amount, len(participants))))

    seen = set()
    for member_id, share in shares:
        if member_id not in group_members:
            raise InvalidSplitError(f"Member {member_id} is not in this group")
        if member_id in seen:
            raise InvalidSplitError(f"Member {member_id} appears twice in the split")
        if share < 0:
            raise InvalidSplitError(f"Share for member {member_id} is negative")
        seen.add(member_id)

    return shares


def create_expense_with_shares(
    group_id: int,
    paid_by: int,
    name: str,
    amount: Decimal,
    participant_ids: Optional[Sequence[int]] = None,
    custom_shares: Optional[Sequence[Tuple[int, Decimal]]] = None,
    category: Optional[str] = None,
    expense_date: Optional[date] = None,
    db: Session = None
) -> Expense:
    """Create an expense and its shares."""
    get_group(group_id, db)
    member_ids = [
        m.id for m in db.query(GroupMember.id).filter(
            GroupMember.group_id == group_id
        ).order_by(GroupMember.id).all()
    ]
    if paid_by not in member_ids:
        raise InvalidSplitError(f"Payer {paid_by} is not in this group")

    amount = round_money(amount)
    if amount <= 0:
        raise InvalidSplitError("Expense amount must be positive")
    category = normalize_category(category)
    shares = calculate_shares(amount, member_ids, participant_ids, custom_shares)

    share_total = total(share for _, share in shares)
    if share_total != amount:
        # Allowed; the planner reports it if the books end up unbalanced
        logger.warning(
            f"Shares for '{name}' sum to {share_total}, expense amount is {amount}"
        )

    expense = Expense(
        group_id=group_id,
        paid_by=paid_by,
        name=name,
        amount=amount,
        category=category,
        date=expense_date or date.today()
    )
    db.add(expense)
    db.flush()

    for member_id, share in shares:
        db.add(ExpenseShare(
            expense_id=expense.id,
            member_id=member_id,
            amount=share
        ))

    db.commit()
    db.refresh(expense)

    logger.info(f"Group {group_id}: expense {expense.id} '{name}' {amount} paid by {paid_by}")
    return expense


def list_group_expenses(group_id: int, db: Session) -> List[Expense]:
    """List a group's expenses, newest first."""
    get_group(group_id, db)
    return db.query(Expense).options(
        selectinload(Expense.shares).selectinload(ExpenseShare.member),
        selectinload(Expense.payer)
    ).filter(
        Expense.group_id == group_id
    ).order_by(Expense.date.desc(), Expense.id.desc()).all()


def get_expense(expense_id: int, db: Session) -> Expense:
    """Get an expense or raise ExpenseNotFoundError."""
    expense = db.query(Expense).filter(Expense.id == expense_id).first()
    if not expense:
        raise ExpenseNotFoundError(f"Expense {expense_id} not found")
    return expense


def delete_expense(expense_id: int, db: Session):
    """Delete an expense and its shares."""
    expense = get_expense(expense_id, db)
    db.delete(expense)
    db.commit()
    logger.info(f"Deleted expense {expense_id}")
