"""
Settlement planner: turns member balances into a list of transfers.
"""
import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from grouptally.core.config import settings
from grouptally.core.exceptions import BalanceInconsistencyError
from grouptally.core.money import round_money, total
from grouptally.schemas.ledger import MemberId
from grouptally.services.balance_calculator import MemberBalance

logger = logging.getLogger(__name__)


class Transfer:
    """Represents a single transfer between members."""
    def __init__(self, from_member_id: MemberId, to_member_id: MemberId, amount: Decimal):
        self.from_member_id = from_member_id
        self.to_member_id = to_member_id
        self.amount = amount

    def as_tuple(self):
        return (self.from_member_id, self.to_member_id, self.amount)

    def __eq__(self, other):
        if not isinstance(other, Transfer):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __hash__(self):
        return hash(self.as_tuple())

    def __repr__(self) -> str:
        return f"Transfer({self.from_member_id!r} -> {self.to_member_id!r}: {self.amount})"


def _absorb_residue(
    holders: List[list],
    counterparts: List[list],
    tolerance: Decimal,
    holders_pay: bool,
) -> List[Transfer]:
    """
    Clear what the exhausted side could not take.

    Leftover amounts come from cent remainders spread over members that sit
    within `tolerance` of zero. Each counterpart takes at most its own
    remainder plus `tolerance`, so nobody ends further than `tolerance` from
    zero.
    """
    transfers = []
    for holder in holders:
        for counterpart in counterparts:
            if holder[1] <= tolerance:
                break
            if counterpart[1] <= 0:
                continue
            amount = min(holder[1], counterpart[1] + tolerance)
            holder[1] -= amount
            counterpart[1] -= amount
            if holders_pay:
                transfers.append(Transfer(holder[0], counterpart[0], round_money(amount)))
            else:
                transfers.append(Transfer(counterpart[0], holder[0], round_money(amount)))
    return transfers


def plan_settlements(
    balances: Sequence[MemberBalance],
    tolerance: Optional[Decimal] = None,
) -> List[Transfer]:
    """
    Minimize the number of transfers needed to settle debts.

    Uses the greedy largest-first algorithm: the biggest debtor pays the
    biggest creditor as much as either can take, then whichever side reached
    zero moves on. Members whose balance is within `tolerance` of zero are
    already settled. Ties keep the input order so output is deterministic.

    If one side runs out while the other still holds more than `tolerance`
    (cent remainders left on settled members), the rest is collected from
    or paid to those settled members.

    Raises:
        BalanceInconsistencyError: If the balances do not net to zero within
            `tolerance`
    """
    if tolerance is None:
        tolerance = settings.SETTLEMENT_TOLERANCE

    if len(balances) < 2:
        logger.debug("Fewer than two members, nothing to settle")
        return []

    net = total(b.balance for b in balances)
    if abs(net) > tolerance:
        debtor_total = total(-b.balance for b in balances if b.balance < 0)
        creditor_total = total(b.balance for b in balances if b.balance > 0)
        logger.error(
            f"Balance mismatch: debtors owe {debtor_total}, creditors are owed {creditor_total}"
        )
        raise BalanceInconsistencyError(debtor_total, creditor_total)

    # Work on copies of the amounts; debts are stored as positive numbers
    debtors = [[b.member_id, -b.balance] for b in balances if b.balance < -tolerance]
    creditors = [[b.member_id, b.balance] for b in balances if b.balance > tolerance]
    settled_debtors = [[b.member_id, -b.balance] for b in balances if -tolerance <= b.balance < 0]
    settled_creditors = [[b.member_id, b.balance] for b in balances if 0 < b.balance <= tolerance]

    for side in (debtors, creditors, settled_debtors, settled_creditors):
        side.sort(key=lambda x: x[1], reverse=True)

    transfers = []
    debt_idx = 0
    cred_idx = 0

    while debt_idx < len(debtors) and cred_idx < len(creditors):
        debtor = debtors[debt_idx]
        creditor = creditors[cred_idx]

        # Transfer the minimum of what's owed and what's needed
        amount = min(debtor[1], creditor[1])
        if amount > tolerance:
            transfers.append(Transfer(debtor[0], creditor[0], round_money(amount)))

        debtor[1] -= amount
        creditor[1] -= amount

        if debtor[1] <= tolerance:
            debt_idx += 1
        if creditor[1] <= tolerance:
            cred_idx += 1

    if debt_idx < len(debtors):
        transfers.extend(_absorb_residue(
            debtors[debt_idx:], settled_creditors + creditors, tolerance, holders_pay=True
        ))
    elif cred_idx < len(creditors):
        transfers.extend(_absorb_residue(
            creditors[cred_idx:], settled_debtors + debtors, tolerance, holders_pay=False
        ))

    logger.debug(f"Planned {len(transfers)} transfers for {len(balances)} members")
    return transfers
