"""
Group service for group and membership management.
"""
import logging
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from grouptally.core.exceptions import (
    DuplicateMemberError,
    GroupNotFoundError,
    MemberHasPendingSettlementError,
    MemberInUseError,
    MemberNotFoundError,
)
from grouptally.core.money import round_money
from grouptally.models.group import Group, GroupMember, MemberRole
from grouptally.models.expense import Expense, ExpenseShare
from grouptally.models.settlement import Settlement, SettlementStatus

logger = logging.getLogger(__name__)


def get_group(group_id: int, db: Session) -> Group:
    """Get a group or raise GroupNotFoundError."""
    group = db.query(Group).filter(Group.id == group_id).first()
    if not group:
        raise GroupNotFoundError(f"Group {group_id} not found")
    return group


def list_groups(db: Session) -> List[Group]:
    """List all groups, newest first."""
    return db.query(Group).order_by(Group.id.desc()).all()


def get_group_total_expense(group_id: int, db: Session) -> Decimal:
    """Sum of all expense amounts in a group."""
    result = db.query(func.sum(Expense.amount)).filter(
        Expense.group_id == group_id
    ).scalar()
    return round_money(result) if result is not None else Decimal("0.00")


def create_group(
    name: str,
    creator_name: str,
    description: Optional[str] = None,
    creator_email: Optional[str] = None,
    creator_payment_address: Optional[str] = None,
    db: Session = None
) -> Group:
    """Create a group and add its creator as an admin member."""
    group = Group(name=name, description=description)
    db.add(group)
    db.flush()

    creator = GroupMember(
        group_id=group.id,
        display_name=creator_name,
        email=creator_email,
        payment_address=creator_payment_address,
        role=MemberRole.ADMIN
    )
    db.add(creator)
    db.commit()
    db.refresh(group)

    logger.info(f"Created group {group.id} '{group.name}'")
    return group


def update_group(
    group_id: int,
    name: Optional[str] = None,
    description: Optional[str] = None,
    db: Session = None
) -> Group:
    """Update group name or description."""
    group = get_group(group_id, db)
    if name is not None:
        group.name = name
    if description is not None:
        group.description = description
    db.commit()
    db.refresh(group)
    return group


def delete_group(group_id: int, db: Session):
    """Delete a group with its members, expenses and settlements."""
    group = get_group(group_id, db)
    db.delete(group)
    db.commit()
    logger.info(f"Deleted group {group_id}")


def get_member(member_id: int, db: Session) -> GroupMember:
    """Get a member or raise MemberNotFoundError."""
    member = db.query(GroupMember).filter(GroupMember.id == member_id).first()
    if not member:
        raise MemberNotFoundError(f"Member {member_id} not found")
    return member


def add_member(
    group_id: int,
    display_name: str,
    email: Optional[str] = None,
    payment_address: Optional[str] = None,
    role: MemberRole = MemberRole.MEMBER,
    db: Session = None
) -> GroupMember:
    """Add a member to a group."""
    get_group(group_id, db)

    if email:
        existing = db.query(GroupMember).filter(
            GroupMember.group_id == group_id,
            GroupMember.email == email
        ).first()
        if existing:
            logger.warning(f"Member with email {email} already in group {group_id}")
            raise DuplicateMemberError(f"{email} is already a member of this group")

    member = GroupMember(
        group_id=group_id,
        display_name=display_name,
        email=email,
        payment_address=payment_address,
        role=role
    )
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


def update_member(
    member_id: int,
    display_name: Optional[str] = None,
    payment_address: Optional[str] = None,
    role: Optional[MemberRole] = None,
    db: Session = None
) -> GroupMember:
    """Update a member's display name, payment address or role."""
    member = get_member(member_id, db)
    if display_name is not None:
        member.display_name = display_name
    if payment_address is not None:
        member.payment_address = payment_address
    if role is not None:
        member.role = role
    db.commit()
    db.refresh(member)
    return member


def remove_member(member_id: int, db: Session):
    """
    Remove a member from their group.

    Raises:
        MemberNotFoundError: If the member does not exist
        MemberHasPendingSettlementError: If a pending settlement names the member
        MemberInUseError: If an expense, share or completed settlement names the member
    """
    member = get_member(member_id, db)

    involves_member = or_(
        Settlement.from_member_id == member_id,
        Settlement.to_member_id == member_id
    )
    pending = db.query(Settlement).filter(
        involves_member,
        Settlement.status == SettlementStatus.PENDING
    ).count()
    if pending:
        logger.warning(f"Refusing to remove member {member_id}: {pending} pending settlements")
        raise MemberHasPendingSettlementError(
            f"Member {member_id} has {pending} pending settlements"
        )

    in_use = (
        db.query(Expense).filter(Expense.paid_by == member_id).count()
        + db.query(ExpenseShare).filter(ExpenseShare.member_id == member_id).count()
        + db.query(Settlement).filter(involves_member).count()
    )
    if in_use:
        logger.warning(f"Refusing to remove member {member_id}: referenced by ledger records")
        raise MemberInUseError(f"Member {member_id} still appears in expenses or settlements")

    group_id = member.group_id
    db.delete(member)
    db.commit()
    logger.info(f"Removed member {member_id} from group {group_id}")
