"""
Domain-specific exceptions for GroupTally.

These exceptions represent business rule violations and should be
caught at the API boundary and converted to appropriate HTTP responses.
"""
from decimal import Decimal


class GroupTallyError(Exception):
    """Base exception for all GroupTally errors."""
    pass


class LedgerValidationError(GroupTallyError):
    """Raised when ledger input is malformed (e.g. no members)."""
    pass


class ReferentialIntegrityError(GroupTallyError):
    """Raised when a record references a member id that is not in the group."""

    def __init__(self, member_id, source: str):
        self.member_id = member_id
        self.source = source
        super().__init__(f"{source} references unknown member {member_id!r}")


class BalanceInconsistencyError(GroupTallyError):
    """Raised when debtor and creditor totals disagree beyond tolerance."""

    def __init__(self, debtor_total: Decimal, creditor_total: Decimal):
        self.debtor_total = debtor_total
        self.creditor_total = creditor_total
        super().__init__(
            f"Books do not balance: debtors owe {debtor_total}, "
            f"creditors are owed {creditor_total}"
        )


class GroupNotFoundError(GroupTallyError):
    """Raised when a group does not exist."""
    pass


class MemberNotFoundError(GroupTallyError):
    """Raised when a member does not exist."""
    pass


class ExpenseNotFoundError(GroupTallyError):
    """Raised when an expense does not exist."""
    pass


class SettlementNotFoundError(GroupTallyError):
    """Raised when a settlement does not exist."""
    pass


class DuplicateMemberError(GroupTallyError):
    """Raised when a member with the same email is already in the group."""
    pass


class MemberHasPendingSettlementError(GroupTallyError):
    """Raised when removing a member that a pending settlement still references."""
    pass


class SettlementStateError(GroupTallyError):
    """Raised on an invalid settlement status transition."""
    pass


class InvalidSplitError(GroupTallyError):
    """Raised when an expense split is not usable for the group."""
    pass


class MemberInUseError(GroupTallyError):
    """Raised when removing a member that expenses or settlements still reference."""
    pass


class InvalidCategoryError(GroupTallyError):
    """Raised when an expense category is not one of the known categories."""
    pass
