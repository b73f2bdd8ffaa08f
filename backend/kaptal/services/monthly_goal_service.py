"""Service for the overall monthly spending goal."""

import logging
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy.orm import Session

from kaptal.exceptions import NotFoundError
from kaptal.models.monthly_goal import MonthlyGoal
from kaptal.services.periods import usage_percentage
from kaptal.services.stats_service import get_month_totals

logger = logging.getLogger(__name__)


def get_goal(db: Session, user_id: str, month: int, year: int):
    return db.query(MonthlyGoal).filter(
        MonthlyGoal.user_id == user_id,
        MonthlyGoal.month == month,
        MonthlyGoal.year == year,
    ).first()


def get_goal_status(db: Session, user_id: str, month: int, year: int) -> Dict[str, Any]:
    """
    The month's goal against every expense of the month. Without a goal,
    remaining and percentage are None while spent is still reported.
    """
    goal = get_goal(db, user_id, month, year)
    spent = get_month_totals(db, user_id, month, year)["expenses"]

    remaining = None
    percentage = None
    if goal:
        amount = Decimal(goal.amount)
        remaining = amount - spent
        percentage = usage_percentage(spent, amount)

    return {
        "goal": goal,
        "spent": spent,
        "remaining": remaining,
        "percentage": percentage,
        "month": month,
        "year": year,
    }


def set_goal(db: Session, user_id: str, month: int, year: int, amount: Decimal) -> MonthlyGoal:
    goal = get_goal(db, user_id, month, year)
    if goal:
        goal.amount = amount
    else:
        goal = MonthlyGoal(user_id=user_id, month=month, year=year, amount=amount)
        db.add(goal)

    db.commit()
    db.refresh(goal)
    logger.info("Monthly goal set to %s for %02d/%d", amount, month, year)
    return goal


def delete_goal(db: Session, user_id: str, month: int, year: int) -> None:
    goal = get_goal(db, user_id, month, year)
    if not goal:
        raise NotFoundError("Meta mensal não encontrada")

    db.delete(goal)
    db.commit()
