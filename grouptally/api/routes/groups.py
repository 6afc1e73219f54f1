"""
Group and membership routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from grouptally.db.session import get_db
from grouptally.schemas.group import (
    GroupCreate, GroupUpdate, GroupResponse, GroupDetailResponse,
    MemberCreate, MemberUpdate, MemberResponse
)
from grouptally.services import group_service

router = APIRouter(tags=["groups"])


def build_group_detail(group, db: Session) -> GroupDetailResponse:
    """Build detailed group response with members and total expense."""
    return GroupDetailResponse(
        id=group.id,
        name=group.name,
        description=group.description,
        created_at=group.created_at,
        members=[MemberResponse.model_validate(m) for m in group.members],
        total_expense=group_service.get_group_total_expense(group.id, db)
    )


@router.post("/groups", response_model=GroupDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_group(
    group_data: GroupCreate,
    db: Session = Depends(get_db)
):
    """Create a new group with its creator as admin."""
    group = group_service.create_group(
        name=group_data.name,
        description=group_data.description,
        creator_name=group_data.creator.display_name,
        creator_email=group_data.creator.email,
        creator_payment_address=group_data.creator.payment_address,
        db=db
    )
    return build_group_detail(group, db)


@router.get("/groups", response_model=List[GroupResponse])
async def list_groups(db: Session = Depends(get_db)):
    """List all groups."""
    return group_service.list_groups(db)


@router.get("/groups/{group_id}", response_model=GroupDetailResponse)
async def get_group(group_id: int, db: Session = Depends(get_db)):
    """Get group details."""
    group = group_service.get_group(group_id, db)
    return build_group_detail(group, db)


@router.patch("/groups/{group_id}", response_model=GroupResponse)
async def update_group(
    group_id: int,
    group_data: GroupUpdate,
    db: Session = Depends(get_db)
):
    """Update group name or description."""
    return group_service.update_group(
        group_id,
        name=group_data.name,
        description=group_data.description,
        db=db
    )


@router.delete("/groups/{group_id}")
async def delete_group(group_id: int, db: Session = Depends(get_db)):
    """Delete a group and everything recorded in it."""
    group_service.delete_group(group_id, db)
    return {"message": "Group deleted successfully"}


@router.post(
    "/groups/{group_id}/members",
    response_model=MemberResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_member(
    group_id: int,
    member_data: MemberCreate,
    db: Session = Depends(get_db)
):
    """Add a member to a group."""
    return group_service.add_member(
        group_id,
        display_name=member_data.display_name,
        email=member_data.email,
        payment_address=member_data.payment_address,
        role=member_data.role,
        db=db
    )


@router.patch("/members/{member_id}", response_model=MemberResponse)
async def update_member(
    member_id: int,
    member_data: MemberUpdate,
    db: Session = Depends(get_db)
):
    """Update a member."""
    return group_service.update_member(
        member_id,
        display_name=member_data.display_name,
        payment_address=member_data.payment_address,
        role=member_data.role,
        db=db
    )


@router.delete("/members/{member_id}")
async def remove_member(member_id: int, db: Session = Depends(get_db)):
    """Remove a member who has no outstanding ledger entries."""
    group_service.remove_member(member_id, db)
    return {"message": "Member removed successfully"}
