"""
Tests for the balance calculator.
"""
import pytest
from decimal import Decimal

from grouptally.core.exceptions import LedgerValidationError, ReferentialIntegrityError
from grouptally.models.settlement import SettlementStatus
from grouptally.schemas.ledger import ExpenseRecord, MemberRecord, SettlementRecord, ShareRecord
from grouptally.services.balance_calculator import compute_balances


def members(*ids):
    return [MemberRecord(id=i, display_name=i) for i in ids]


def expense(expense_id, payer, amount, shares):
    return ExpenseRecord(
        id=expense_id,
        paid_by=payer,
        amount=Decimal(amount),
        shares=[ShareRecord(member_id=m, amount=Decimal(a)) for m, a in shares.items()]
    )


def by_member(balances):
    return {b.member_id: b for b in balances}


def test_equal_split_among_three():
    """A pays 90 split equally: A is owed 60, B and C owe 30 each."""
    result = by_member(compute_balances(
        members("A", "B", "C"),
        [expense(1, "A", "90", {"A": "30", "B": "30", "C": "30"})]
    ))

    assert result["A"].paid == Decimal("90")
    assert result["A"].owed == Decimal("30")
    assert result["A"].balance == Decimal("60")
    assert result["B"].balance == Decimal("-30")
    assert result["C"].balance == Decimal("-30")


def test_completed_settlement_counts_as_payment():
    """A completed B->A settlement raises B's paid and A's owed."""
    result = by_member(compute_balances(
        members("A", "B", "C"),
        [expense(1, "A", "90", {"A": "30", "B": "30", "C": "30"})],
        [SettlementRecord(id=7, from_member_id="B", to_member_id="A", amount=Decimal("30"))]
    ))

    assert result["B"].paid == Decimal("30")
    assert result["B"].balance == Decimal("0")
    assert result["A"].owed == Decimal("60")
    assert result["A"].balance == Decimal("30")
    assert result["C"].balance == Decimal("-30")


def test_pending_settlement_is_ignored():
    result = by_member(compute_balances(
        members("A", "B"),
        [expense(1, "A", "100", {"A": "50", "B": "50"})],
        [SettlementRecord(
            id=3, from_member_id="B", to_member_id="A",
            amount=Decimal("50"), status=SettlementStatus.PENDING
        )]
    ))

    assert result["A"].balance == Decimal("50")
    assert result["B"].balance == Decimal("-50")


def test_no_expenses_gives_zero_balances():
    result = compute_balances(members("A", "B"), [])
    assert [b.balance for b in result] == [Decimal(0), Decimal(0)]


def test_results_follow_member_order():
    result = compute_balances(
        members("C", "A", "B"),
        [expense(1, "A", "10", {"B": "10"})]
    )
    assert [b.member_id for b in result] == ["C", "A", "B"]
    assert result[0].display_name == "C"


def test_small_shares_do_not_drift():
    """A thousand one-cent shares add up exactly."""
    expenses = [expense(i, "A", "0.01", {"B": "0.01"}) for i in range(1000)]
    result = by_member(compute_balances(members("A", "B"), expenses))
    assert result["A"].balance == Decimal("10.00")
    assert result["B"].balance == Decimal("-10.00")


def test_share_sum_mismatch_is_not_validated():
    """Shares worth more than the expense still compute."""
    result = by_member(compute_balances(
        members("A", "B", "C"),
        [expense(1, "A", "90", {"A": "40", "B": "40", "C": "40"})]
    ))
    assert result["A"].balance == Decimal("50")
    assert sum(b.balance for b in result.values()) == Decimal("-30")


def test_paid_equals_owed_across_group():
    ledger = [
        expense(1, "A", "90", {"A": "30", "B": "30", "C": "30"}),
        expense(2, "B", "45.50", {"A": "22.75", "C": "22.75"}),
        expense(3, "C", "12.01", {"A": "4.01", "B": "4", "C": "4"}),
    ]
    settlements = [SettlementRecord(from_member_id="C", to_member_id="A", amount=Decimal("5"))]
    result = compute_balances(members("A", "B", "C"), ledger, settlements)

    assert sum(b.paid for b in result) == sum(b.owed for b in result)


def test_empty_member_list_rejected():
    with pytest.raises(LedgerValidationError):
        compute_balances([], [])


def test_duplicate_member_rejected():
    with pytest.raises(LedgerValidationError):
        compute_balances(members("A", "A"), [])


def test_unknown_payer():
    with pytest.raises(ReferentialIntegrityError) as exc_info:
        compute_balances(members("A", "B"), [expense(9, "Z", "10", {"A": "10"})])
    assert exc_info.value.member_id == "Z"
    assert "Expense 9" in exc_info.value.source


def test_unknown_share_member():
    with pytest.raises(ReferentialIntegrityError) as exc_info:
        compute_balances(members("A", "B"), [expense(4, "A", "10", {"A": "5", "Q": "5"})])
    assert exc_info.value.member_id == "Q"
    assert "Share" in exc_info.value.source


def test_unknown_settlement_member():
    with pytest.raises(ReferentialIntegrityError) as exc_info:
        compute_balances(
            members("A", "B"),
            [],
            [SettlementRecord(id=2, from_member_id="B", to_member_id="X", amount=Decimal("1"))]
        )
    assert exc_info.value.member_id == "X"
    assert exc_info.value.source == "Settlement 2"


def test_ledger_records_validate_on_ingest():
    with pytest.raises(ValueError):
        ExpenseRecord(id=1, paid_by="A", amount=Decimal("0"), shares=[])
    with pytest.raises(ValueError):
        ShareRecord(member_id="A", amount=Decimal("-1"))
    with pytest.raises(ValueError):
        ExpenseRecord(
            id=1, paid_by="A", amount=Decimal("10"),
            shares=[ShareRecord(member_id="A", amount=Decimal("5")),
                    ShareRecord(member_id="A", amount=Decimal("5"))]
        )
    with pytest.raises(ValueError):
        SettlementRecord(from_member_id="A", to_member_id="B", amount=Decimal("0"))
