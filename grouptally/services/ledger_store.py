"""
Ledger store: reads group records for the calculator and persists plans.
"""
import logging
from typing import List, Sequence
from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from grouptally.core.exceptions import (
    LedgerValidationError, SettlementNotFoundError, SettlementStateError
)
from grouptally.models.group import GroupMember
from grouptally.models.expense import Expense
from grouptally.models.settlement import Settlement, SettlementStatus
from grouptally.schemas.ledger import ExpenseRecord, MemberRecord, SettlementRecord
from grouptally.services.settlement_planner import Transfer

logger = logging.getLogger(__name__)


def _to_record(record_cls, row):
    """Validate an ORM row into a ledger record."""
    try:
        return record_cls.model_validate(row)
    except ValidationError as e:
        logger.error(f"Invalid {row.__class__.__name__} {row.id}: {e}")
        raise LedgerValidationError(
            f"{row.__class__.__name__} {row.id} failed validation: {e.errors()}"
        ) from e


def list_members(group_id: int, db: Session) -> List[MemberRecord]:
    """Get all members of a group in join order."""
    members = db.query(GroupMember).filter(
        GroupMember.group_id == group_id
    ).order_by(GroupMember.id).all()
    return [_to_record(MemberRecord, m) for m in members]


def list_expenses(group_id: int, db: Session) -> List[ExpenseRecord]:
    """Get all expenses of a group with their shares."""
    expenses = db.query(Expense).options(
        selectinload(Expense.shares)
    ).filter(
        Expense.group_id == group_id
    ).order_by(Expense.id).all()
    return [_to_record(ExpenseRecord, e) for e in expenses]


def list_completed_settlements(group_id: int, db: Session) -> List[SettlementRecord]:
    """Get completed settlements of a group."""
    settlements = db.query(Settlement).filter(
        Settlement.group_id == group_id,
        Settlement.status == SettlementStatus.COMPLETED
    ).order_by(Settlement.id).all()
    return [_to_record(SettlementRecord, s) for s in settlements]


def replace_pending_settlements(
    group_id: int,
    transfers: Sequence[Transfer],
    db: Session
) -> List[Settlement]:
    """Delete the group's pending settlements and store a new plan as pending."""
    removed = db.query(Settlement).filter(
        Settlement.group_id == group_id,
        Settlement.status == SettlementStatus.PENDING
    ).delete(synchronize_session=False)

    settlements = []
    for transfer in transfers:
        settlement = Settlement(
            group_id=group_id,
            from_member_id=transfer.from_member_id,
            to_member_id=transfer.to_member_id,
            amount=transfer.amount,
            status=SettlementStatus.PENDING
        )
        db.add(settlement)
        settlements.append(settlement)

    db.commit()
    for settlement in settlements:
        db.refresh(settlement)

    logger.info(
        f"Group {group_id}: replaced {removed} pending settlements with {len(settlements)}"
    )
    return settlements


def complete_settlement(settlement_id: int, db: Session) -> Settlement:
    """
    Mark a pending settlement as completed.

    The status check is part of the UPDATE so two concurrent confirmations
    cannot both succeed.
    """
    updated = db.query(Settlement).filter(
        Settlement.id == settlement_id,
        Settlement.status == SettlementStatus.PENDING
    ).update(
        {Settlement.status: SettlementStatus.COMPLETED, Settlement.settled_at: func.now()},
        synchronize_session=False
    )
    db.commit()

    settlement = db.query(Settlement).filter(Settlement.id == settlement_id).first()
    if not settlement:
        raise SettlementNotFoundError(f"Settlement {settlement_id} not found")
    if not updated:
        logger.warning(f"Settlement {settlement_id} is already {settlement.status.value}")
        raise SettlementStateError(
            f"Settlement {settlement_id} is {settlement.status.value}, not pending"
        )

    db.refresh(settlement)
    logger.info(f"Settlement {settlement_id} completed: {settlement.amount}")
    return settlement
