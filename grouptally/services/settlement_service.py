"""
Settlement service for automated fair settlement calculation.
"""
import logging
from sqlalchemy.orm import Session, selectinload
from typing import Dict, List, Optional
from decimal import Decimal

from grouptally.core.money import round_money
from grouptally.models.settlement import Settlement, SettlementStatus
from grouptally.services import ledger_store
from grouptally.services.balance_calculator import MemberBalance, compute_balances
from grouptally.services.group_service import get_group, get_group_total_expense
from grouptally.services.settlement_planner import Transfer, plan_settlements

logger = logging.getLogger(__name__)


class SettlementPlan:
    """Outcome of one settle-up run."""
    def __init__(
        self,
        group_id: int,
        balances: List[MemberBalance],
        settlements: List[Settlement],
        total_expense: Decimal,
        summary: str
    ):
        self.group_id = group_id
        self.balances = balances
        self.settlements = settlements
        self.total_expense = total_expense
        self.summary = summary

    @property
    def is_settled(self) -> bool:
        return not self.settlements


def calculate_group_balances(group_id: int, db: Session) -> List[MemberBalance]:
    """
    Calculate every member's balance from the group's ledger.

    Pending settlements are not part of the ledger; only completed ones
    count as payments.
    """
    get_group(group_id, db)
    members = ledger_store.list_members(group_id, db)
    expenses = ledger_store.list_expenses(group_id, db)
    completed = ledger_store.list_completed_settlements(group_id, db)
    return compute_balances(members, expenses, completed)


def build_summary(
    balances: List[MemberBalance],
    transfers: List[Transfer],
    total_expense: Decimal
) -> str:
    """Create a plain-text summary of balances and transfers."""
    names: Dict = {b.member_id: b.display_name or str(b.member_id) for b in balances}

    summary_lines = []
    summary_lines.append(f"Total expenses: {round_money(total_expense)}")
    summary_lines.append(f"Members: {len(balances)}")
    summary_lines.append("\nNet balances:")
    for b in balances:
        summary_lines.append(f"  {names[b.member_id]}: {round_money(b.balance):+}")
    summary_lines.append("\nTransfers:")
    if not transfers:
        summary_lines.append("  All balances are already settled")
    for t in transfers:
        summary_lines.append(
            f"  {names[t.from_member_id]} -> {names[t.to_member_id]}: {t.amount}"
        )
    return "\n".join(summary_lines)


def settle_up(group_id: int, db: Session) -> SettlementPlan:
    """
    Recalculate the group's settlement plan and store it as pending.

    Previous pending settlements are discarded first so a plan is never
    counted twice. Errors from the calculator or planner propagate and leave
    the stored settlements untouched.
    """
    balances = calculate_group_balances(group_id, db)
    transfers = plan_settlements(balances)

    settlements = ledger_store.replace_pending_settlements(group_id, transfers, db)
    total_expense = get_group_total_expense(group_id, db)
    summary = build_summary(balances, transfers, total_expense)

    logger.info(f"Group {group_id}: settle-up produced {len(settlements)} transfers")
    return SettlementPlan(group_id, balances, settlements, total_expense, summary)


def list_settlements(
    group_id: int,
    status: Optional[SettlementStatus] = None,
    db: Session = None
) -> List[Settlement]:
    """List a group's settlements, optionally filtered by status."""
    get_group(group_id, db)
    query = db.query(Settlement).options(
        selectinload(Settlement.from_member),
        selectinload(Settlement.to_member)
    ).filter(Settlement.group_id == group_id)
    if status is not None:
        query = query.filter(Settlement.status == status)
    return query.order_by(Settlement.id).all()


def confirm_settlement(settlement_id: int, db: Session) -> Settlement:
    """Record that a pending settlement was paid."""
    return ledger_store.complete_settlement(settlement_id, db)
