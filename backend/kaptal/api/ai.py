"""
AI summary endpoint.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from kaptal.dependencies import get_db, get_current_user_id
from kaptal.schemas.ai import SummaryRequest, SummaryResponse
from kaptal.schemas.common import ApiResponse
from kaptal.services import ai_service
from kaptal.services.periods import resolve_period

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/summary", response_model=ApiResponse[SummaryResponse])
async def monthly_summary(
    payload: SummaryRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """AI-written analysis of the month's income, rules and goals."""
    month, year = resolve_period(payload.month, payload.year)
    result = await ai_service.generate_monthly_summary(db, user_id, month, year)
    return ApiResponse(data=result)
