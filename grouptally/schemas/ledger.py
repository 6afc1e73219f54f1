"""
Validated ledger records consumed by the balance calculator.

Rows coming out of the store are converted into these records before any
computation happens, so the calculator only ever sees well-formed data.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional, Union
from decimal import Decimal
from grouptally.models.settlement import SettlementStatus

RecordId = Union[int, str]
MemberId = RecordId


class MemberRecord(BaseModel):
    """A group member as seen by the calculator."""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: RecordId
    display_name: str
    payment_address: Optional[str] = None


class ShareRecord(BaseModel):
    """Amount one member owes for one expense."""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    member_id: MemberId
    amount: Decimal = Field(ge=0)


class ExpenseRecord(BaseModel):
    """An expense with its shares."""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: RecordId
    paid_by: MemberId
    amount: Decimal = Field(gt=0)
    shares: List[ShareRecord] = Field(min_length=1)

    @field_validator("shares")
    @classmethod
    def unique_share_members(cls, v):
        """Each member appears at most once per expense."""
        seen = set()
        for share in v:
            if share.member_id in seen:
                raise ValueError(f"duplicate share for member {share.member_id!r}")
            seen.add(share.member_id)
        return v


class SettlementRecord(BaseModel):
    """A recorded transfer between two members."""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: Optional[RecordId] = None
    from_member_id: MemberId
    to_member_id: MemberId
    amount: Decimal = Field(gt=0)
    status: SettlementStatus = SettlementStatus.COMPLETED
