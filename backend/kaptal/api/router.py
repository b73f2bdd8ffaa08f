"""
Main API router.
"""

from fastapi import APIRouter
from kaptal.api import (
    ai,
    categories,
    category_budgets,
    goals,
    income_rules,
    savings_goals,
    stats,
    transactions,
)

api_router = APIRouter()

api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(category_budgets.router)
api_router.include_router(transactions.router)
api_router.include_router(income_rules.router)
api_router.include_router(savings_goals.router)
api_router.include_router(goals.router)
api_router.include_router(stats.router)
api_router.include_router(ai.router)
