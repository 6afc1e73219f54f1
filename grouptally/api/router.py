"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from grouptally.api.routes import groups, expenses, settlements, analytics

api_router = APIRouter()

# Include all route modules
api_router.include_router(groups.router)
api_router.include_router(expenses.router)
api_router.include_router(settlements.router)
api_router.include_router(analytics.router)
