"""
Balance calculator for group ledgers.

Balances are always derived from the ledger records (expenses, shares and
completed settlements) and are never stored.
"""
import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from grouptally.core.exceptions import LedgerValidationError, ReferentialIntegrityError
from grouptally.models.settlement import SettlementStatus
from grouptally.schemas.ledger import ExpenseRecord, MemberId, MemberRecord, SettlementRecord

logger = logging.getLogger(__name__)


class MemberBalance:
    """Net position of one member: positive means the group owes them."""

    def __init__(
        self,
        member_id: MemberId,
        paid: Decimal = Decimal(0),
        owed: Decimal = Decimal(0),
        display_name: Optional[str] = None,
    ):
        self.member_id = member_id
        self.paid = paid
        self.owed = owed
        self.display_name = display_name

    @property
    def balance(self) -> Decimal:
        return self.paid - self.owed

    def __repr__(self) -> str:
        return (
            f"MemberBalance(member_id={self.member_id!r}, paid={self.paid}, "
            f"owed={self.owed}, balance={self.balance})"
        )


def compute_balances(
    members: Sequence[MemberRecord],
    expenses: Iterable[ExpenseRecord],
    completed_settlements: Iterable[SettlementRecord] = (),
) -> List[MemberBalance]:
    """
    Compute paid, owed and net balance for every member.

    An expense credits its full amount to the payer and debits each share to
    the share's member. A completed settlement counts as a payment by the
    debtor and a receipt by the creditor. Results follow the order of
    `members`.

    Raises:
        LedgerValidationError: If `members` is empty
        ReferentialIntegrityError: If any record names a member not in `members`
    """
    if not members:
        raise LedgerValidationError("Cannot compute balances without members")

    balances: Dict[MemberId, MemberBalance] = {}
    for member in members:
        if member.id in balances:
            raise LedgerValidationError(f"Member {member.id!r} listed twice")
        balances[member.id] = MemberBalance(member.id, display_name=member.display_name)

    def lookup(member_id: MemberId, source: str) -> MemberBalance:
        try:
            return balances[member_id]
        except KeyError:
            logger.error(f"{source} references unknown member {member_id!r}")
            raise ReferentialIntegrityError(member_id, source) from None

    for expense in expenses:
        payer = lookup(expense.paid_by, f"Expense {expense.id}")
        payer.paid += expense.amount
        for share in expense.shares:
            lookup(share.member_id, f"Share of expense {expense.id}").owed += share.amount

    for settlement in completed_settlements:
        if settlement.status != SettlementStatus.COMPLETED:
            logger.debug(f"Ignoring {settlement.status.value} settlement {settlement.id}")
            continue
        source = f"Settlement {settlement.id}"
        debtor = lookup(settlement.from_member_id, source)
        creditor = lookup(settlement.to_member_id, source)
        debtor.paid += settlement.amount
        creditor.owed += settlement.amount

    return list(balances.values())
