"""
Expense management routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from grouptally.db.session import get_db
from grouptally.models.expense import Expense
from grouptally.schemas.expense import ExpenseCreate, ExpenseResponse, ShareResponse
from grouptally.services import expense_service

router = APIRouter(tags=["expenses"])


def build_expense_response(expense: Expense) -> ExpenseResponse:
    """Build expense response with payer and member names."""
    return ExpenseResponse(
        id=expense.id,
        group_id=expense.group_id,
        name=expense.name,
        amount=expense.amount,
        category=expense.category,
        date=expense.date,
        paid_by=expense.paid_by,
        paid_by_name=expense.payer.display_name,
        shares=[
            ShareResponse(
                member_id=share.member_id,
                display_name=share.member.display_name,
                amount=share.amount
            )
            for share in expense.shares
        ],
        created_at=expense.created_at
    )


@router.post(
    "/groups/{group_id}/expenses",
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_expense(
    group_id: int,
    expense_data: ExpenseCreate,
    db: Session = Depends(get_db)
):
    """Create an expense split equally or by custom shares."""
    expense = expense_service.create_expense_with_shares(
        group_id=group_id,
        paid_by=expense_data.paid_by,
        name=expense_data.name,
        amount=expense_data.amount,
        participant_ids=expense_data.participant_ids,
        custom_shares=[(s.member_id, s.amount) for s in expense_data.shares],
        category=expense_data.category,
        expense_date=expense_data.date,
        db=db
    )
    return build_expense_response(expense)


@router.get("/groups/{group_id}/expenses", response_model=List[ExpenseResponse])
async def list_expenses(group_id: int, db: Session = Depends(get_db)):
    """List a group's expenses, newest first."""
    expenses = expense_service.list_group_expenses(group_id, db)
    return [build_expense_response(e) for e in expenses]


@router.get("/expenses/{expense_id}", response_model=ExpenseResponse)
async def get_expense(expense_id: int, db: Session = Depends(get_db)):
    """Get a single expense."""
    return build_expense_response(expense_service.get_expense(expense_id, db))


@router.delete("/expenses/{expense_id}")
async def delete_expense(expense_id: int, db: Session = Depends(get_db)):
    """Delete an expense and its shares."""
    expense_service.delete_expense(expense_id, db)
    return {"message": "Expense deleted successfully"}
