"""Service for savings goals and their deposits."""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from kaptal.exceptions import NotFoundError
from kaptal.models.savings_goal import SavingsGoal, SavingsDeposit
from kaptal.services.deletion_policies import delete_goal_cascading
from kaptal.services.periods import HUNDRED

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
RECENT_DEPOSITS = 5
BEHIND_MARGIN = Decimal("10")


def get_owned_goal(db: Session, user_id: str, goal_id: str) -> SavingsGoal:
    goal = db.query(SavingsGoal).filter(
        SavingsGoal.id == goal_id,
        SavingsGoal.user_id == user_id,
    ).first()
    if not goal:
        raise NotFoundError("Meta não encontrada")
    return goal


def months_between(start: date, end: date) -> int:
    return (end.year - start.year) * 12 + (end.month - start.month)


def goal_progress(goal: SavingsGoal, today: Optional[date] = None) -> Dict[str, Any]:
    """Progress figures and on-track status of a goal as of `today`."""
    today = today or date.today()
    target = Decimal(goal.target_amount)
    current = Decimal(goal.current_amount)
    progress = current / target * HUNDRED if target > 0 else ZERO
    remaining = target - current
    months_remaining = max(1, months_between(today, goal.deadline))
    monthly_required = remaining / months_remaining if remaining > 0 else ZERO

    created = goal.created_at.date() if goal.created_at else today
    planned_days = (goal.deadline - created).days
    if planned_days > 0:
        expected = Decimal((today - created).days) / Decimal(planned_days) * HUNDRED
    else:
        expected = HUNDRED

    if goal.is_completed:
        status = "completed"
    elif goal.deadline < today:
        status = "overdue"
    elif progress < expected - BEHIND_MARGIN:
        status = "behind"
    else:
        status = "on_track"

    return {
        "progress": min(HUNDRED, progress),
        "remaining": remaining,
        "months_remaining": months_remaining,
        "monthly_required": monthly_required,
        "status": status,
    }


def list_goals(db: Session, user_id: str) -> List[Tuple[SavingsGoal, Dict[str, Any]]]:
    goals = db.query(SavingsGoal).filter(
        SavingsGoal.user_id == user_id
    ).order_by(SavingsGoal.created_at.desc()).all()
    return [(goal, goal_progress(goal)) for goal in goals]


def create_goal(db: Session, user_id: str, data: Dict[str, Any]) -> SavingsGoal:
    goal = SavingsGoal(
        user_id=user_id,
        name=data["name"],
        target_amount=data["target_amount"],
        deadline=data["deadline"],
        icon=data.get("icon") or "🎯",
        color=data.get("color") or "#6366f1",
    )
    db.add(goal)
    db.commit()
    db.refresh(goal)
    return goal


def update_goal(db: Session, user_id: str, goal_id: str, changes: Dict[str, Any]) -> SavingsGoal:
    goal = get_owned_goal(db, user_id, goal_id)
    for field_name, value in changes.items():
        if value is not None:
            setattr(goal, field_name, value)
    db.commit()
    db.refresh(goal)
    return goal


def delete_goal(db: Session, user_id: str, goal_id: str) -> None:
    goal = get_owned_goal(db, user_id, goal_id)
    delete_goal_cascading(db, goal)
    db.commit()


def _apply_delta(db: Session, goal: SavingsGoal, delta: Decimal) -> None:
    """Move current_amount by delta in SQL and recompute completion. No commit."""
    db.query(SavingsGoal).filter(SavingsGoal.id == goal.id).update(
        {SavingsGoal.current_amount: SavingsGoal.current_amount + delta},
        synchronize_session=False,
    )
    db.refresh(goal)
    goal.is_completed = Decimal(goal.current_amount) >= Decimal(goal.target_amount)


def make_deposit(
    db: Session,
    user_id: str,
    goal_id: str,
    amount: Decimal,
    note: Optional[str] = None,
    when: Optional[datetime] = None,
) -> Tuple[SavingsDeposit, SavingsGoal]:
    """
    Record a deposit and raise the goal's running total in one transaction,
    marking the goal completed once the target is reached.
    """
    goal = get_owned_goal(db, user_id, goal_id)

    try:
        deposit = SavingsDeposit(
            goal_id=goal.id,
            amount=amount,
            note=note,
            date=when or datetime.utcnow(),
        )
        db.add(deposit)
        db.flush()
        _apply_delta(db, goal, amount)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Deposit into goal %s failed", goal_id)
        raise

    db.refresh(deposit)
    db.refresh(goal)
    logger.info("Deposit of %s into goal %s (completed=%s)", amount, goal.id, goal.is_completed)
    return deposit, goal


def list_deposits(db: Session, user_id: str, goal_id: str) -> List[SavingsDeposit]:
    goal = get_owned_goal(db, user_id, goal_id)
    return db.query(SavingsDeposit).filter(
        SavingsDeposit.goal_id == goal.id
    ).order_by(SavingsDeposit.date.desc()).all()


def delete_deposit(db: Session, user_id: str, goal_id: str, deposit_id: str) -> SavingsGoal:
    """Remove a deposit and lower the goal's running total in one transaction."""
    goal = get_owned_goal(db, user_id, goal_id)
    deposit = db.query(SavingsDeposit).filter(
        SavingsDeposit.id == deposit_id,
        SavingsDeposit.goal_id == goal.id,
    ).first()
    if not deposit:
        raise NotFoundError("Depósito não encontrado")

    try:
        amount = Decimal(deposit.amount)
        db.delete(deposit)
        db.flush()
        _apply_delta(db, goal, -amount)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(goal)
    return goal
