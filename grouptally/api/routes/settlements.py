"""
Balance and settlement routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from grouptally.core.money import round_money
from grouptally.db.session import get_db
from grouptally.models.settlement import Settlement, SettlementStatus
from grouptally.schemas.settlement import (
    BalanceResponse, GroupBalancesResponse, SettlementResponse, SettlementPlanResponse
)
from grouptally.services import settlement_service
from grouptally.services.group_service import get_group_total_expense

router = APIRouter(tags=["settlement"])


def build_settlement_response(settlement: Settlement) -> SettlementResponse:
    """Build settlement response with member names."""
    return SettlementResponse(
        id=settlement.id,
        group_id=settlement.group_id,
        from_member_id=settlement.from_member_id,
        from_name=settlement.from_member.display_name,
        to_member_id=settlement.to_member_id,
        to_name=settlement.to_member.display_name,
        to_payment_address=settlement.to_member.payment_address,
        amount=settlement.amount,
        status=settlement.status,
        created_at=settlement.created_at,
        settled_at=settlement.settled_at
    )


@router.get("/groups/{group_id}/balances", response_model=GroupBalancesResponse)
async def get_balances(group_id: int, db: Session = Depends(get_db)):
    """Get every member's paid, owed and net balance."""
    balances = settlement_service.calculate_group_balances(group_id, db)
    return GroupBalancesResponse(
        group_id=group_id,
        total_expense=get_group_total_expense(group_id, db),
        balances=[
            BalanceResponse(
                member_id=b.member_id,
                display_name=b.display_name,
                paid=round_money(b.paid),
                owed=round_money(b.owed),
                balance=round_money(b.balance)
            )
            for b in balances
        ]
    )


@router.post("/groups/{group_id}/settle-up", response_model=SettlementPlanResponse)
async def settle_up(group_id: int, db: Session = Depends(get_db)):
    """Recalculate who owes whom and replace the pending settlements."""
    plan = settlement_service.settle_up(group_id, db)
    if plan.is_settled:
        message = "All balances are already settled"
    else:
        message = "Settlement calculated successfully"
    return SettlementPlanResponse(
        group_id=group_id,
        message=message,
        settlements=[build_settlement_response(s) for s in plan.settlements],
        summary=plan.summary
    )


@router.get("/groups/{group_id}/settlements", response_model=List[SettlementResponse])
async def list_settlements(
    group_id: int,
    status: Optional[SettlementStatus] = None,
    db: Session = Depends(get_db)
):
    """List settlements of a group, optionally by status."""
    settlements = settlement_service.list_settlements(group_id, status, db)
    return [build_settlement_response(s) for s in settlements]


@router.post("/settlements/{settlement_id}/complete", response_model=SettlementResponse)
async def complete_settlement(settlement_id: int, db: Session = Depends(get_db)):
    """Confirm that a pending settlement was paid."""
    settlement = settlement_service.confirm_settlement(settlement_id, db)
    return build_settlement_response(settlement)
