"""
Group analytics and category routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from grouptally.db.session import get_db
from grouptally.schemas.analytics import GroupAnalyticsResponse
from grouptally.services import analytics_service, category_service

router = APIRouter(tags=["analytics"])


@router.get("/groups/{group_id}/analytics", response_model=GroupAnalyticsResponse)
async def get_group_analytics(group_id: int, db: Session = Depends(get_db)):
    """Get spending totals by category, month and member."""
    return analytics_service.get_group_analytics(group_id, db)


@router.get("/categories", response_model=List[str])
async def list_categories():
    """List the expense categories an expense may use."""
    return category_service.get_available_categories()
