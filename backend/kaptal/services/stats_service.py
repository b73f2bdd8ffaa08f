"""
Read-only spending statistics: month totals, category breakdown, history and
insights derived from them.
"""

from datetime import date, datetime
from decimal import Decimal, ROUND_FLOOR
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from kaptal.models.category import Category
from kaptal.models.transaction import Transaction, TransactionType
from kaptal.services.periods import month_window, round2, shift_month

ZERO = Decimal("0")
RECENT_TRANSACTIONS = 5
STREAK_MONTHS = 12

UNCATEGORIZED_NAME = "Sem categoria"
UNCATEGORIZED_ICON = "📦"
UNCATEGORIZED_COLOR = "#9ca3af"


def get_totals_between(db: Session, user_id: str, start: datetime, end: datetime) -> Dict[str, Decimal]:
    rows = db.query(
        Transaction.type,
        func.sum(Transaction.amount),
    ).filter(
        Transaction.user_id == user_id,
        Transaction.date >= start,
        Transaction.date <= end,
    ).group_by(Transaction.type).all()

    sums = {txn_type: Decimal(total or 0) for txn_type, total in rows}
    income = sums.get(TransactionType.INCOME, ZERO)
    expenses = sums.get(TransactionType.EXPENSE, ZERO)
    return {"income": income, "expenses": expenses, "balance": income - expenses}


def get_month_totals(db: Session, user_id: str, month: int, year: int) -> Dict[str, Decimal]:
    """Income, expenses and balance of a month."""
    start, end = month_window(month, year)
    return get_totals_between(db, user_id, start, end)


def get_overview(db: Session, user_id: str, today: Optional[date] = None) -> Dict[str, Any]:
    today = today or date.today()
    start, end = month_window(today.month, today.year)
    totals = get_totals_between(db, user_id, start, end)

    recent = db.query(Transaction).filter(
        Transaction.user_id == user_id
    ).order_by(Transaction.date.desc()).limit(RECENT_TRANSACTIONS).all()

    return {
        "income": totals["income"],
        "expense": totals["expenses"],
        "balance": totals["balance"],
        "recent_transactions": recent,
        "period": {"start": start, "end": end},
    }


def get_category_stats(
    db: Session,
    user_id: str,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Expense totals per category between start and end, largest first.
    Either bound left out defaults to the current month's.
    """
    today = today or date.today()
    month_start, month_end = month_window(today.month, today.year)
    start = start or month_start
    end = end or month_end

    total_col = func.sum(Transaction.amount)
    rows = db.query(
        Transaction.category_id,
        total_col,
    ).filter(
        Transaction.user_id == user_id,
        Transaction.type == TransactionType.EXPENSE,
        Transaction.date >= start,
        Transaction.date <= end,
    ).group_by(Transaction.category_id).order_by(total_col.desc()).all()

    category_ids = [category_id for category_id, _ in rows if category_id]
    categories = {}
    if category_ids:
        categories = {
            c.id: c
            for c in db.query(Category).options(
                joinedload(Category.parent)
            ).filter(Category.id.in_(category_ids)).all()
        }

    stats = []
    for category_id, total in rows:
        category = categories.get(category_id)
        stats.append({
            "category_id": category_id,
            "category_name": category.name if category else UNCATEGORIZED_NAME,
            "category_icon": category.icon if category else UNCATEGORIZED_ICON,
            "category_color": category.color if category else UNCATEGORIZED_COLOR,
            "parent_id": category.parent_id if category else None,
            "parent_name": category.parent.name if category and category.parent else None,
            "total": Decimal(total or 0),
        })

    return {
        "stats": stats,
        "total": sum((s["total"] for s in stats), ZERO),
        "period": {"start": start, "end": end},
    }


def get_monthly_history(db: Session, user_id: str, months: int = 6, today: Optional[date] = None) -> List[Dict[str, Any]]:
    """Income and expense of the last `months` months, oldest first."""
    today = today or date.today()
    history = []
    for offset in range(months - 1, -1, -1):
        month, year = shift_month(today.month, today.year, -offset)
        totals = get_month_totals(db, user_id, month, year)
        history.append({
            "month": month,
            "year": year,
            "income": totals["income"],
            "expense": totals["expenses"],
        })
    return history


def savings_streak(history: List[Dict[str, Decimal]]) -> Dict[str, Any]:
    """
    Streaks over completed months. `history` runs newest first and its first
    entry is the month in progress, which never counts.
    """
    saved = [m["income"] > 0 and m["expense"] <= m["income"] for m in history[1:]]

    current = 0
    for month_saved in saved:
        if not month_saved:
            break
        current += 1

    best = run = 0
    for month_saved in saved:
        run = run + 1 if month_saved else 0
        best = max(best, run)

    if not history[1:] or history[1]["income"] == 0:
        last_month_result = "pending"
    elif saved[0]:
        last_month_result = "success"
    else:
        last_month_result = "fail"

    return {"current": current, "best": max(best, current), "last_month_result": last_month_result}


def get_insights(db: Session, user_id: str, today: Optional[date] = None) -> Dict[str, Any]:
    """Burn rate, month-end projection and savings streak as of `today`."""
    today = today or date.today()
    _, month_end = month_window(today.month, today.year)
    days_remaining = month_end.day - today.day

    totals = get_month_totals(db, user_id, today.month, today.year)
    expense = totals["expenses"]
    balance = totals["balance"]
    daily_average = expense / today.day

    if daily_average > 0 and balance > 0:
        days_until_broke = int((balance / daily_average).to_integral_value(rounding=ROUND_FLOOR))
    elif balance <= 0:
        days_until_broke = 0
    else:
        days_until_broke = None

    history = list(reversed(get_monthly_history(db, user_id, STREAK_MONTHS, today)))

    return {
        "balance": balance,
        "daily_average": round2(daily_average),
        "days_until_broke": days_until_broke,
        "end_of_month_projection": {
            "projected": round2(expense + daily_average * days_remaining),
            "current": expense,
            "days_remaining": days_remaining,
        },
        "savings_streak": savings_streak(history),
    }
