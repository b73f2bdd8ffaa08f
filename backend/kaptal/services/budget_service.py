"""Service for monthly category budgets."""

import logging
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from kaptal.exceptions import NotFoundError
from kaptal.models.category import Category
from kaptal.models.category_budget import CategoryBudget
from kaptal.models.transaction import Transaction, TransactionType
from kaptal.services.periods import month_window, usage_percentage

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def get_spending_by_category(db: Session, user_id: str, month: int, year: int) -> Dict[str, Decimal]:
    """Sum of the month's expenses per category, uncategorized rows excluded."""
    start, end = month_window(month, year)

    rows = db.query(
        Transaction.category_id,
        func.sum(Transaction.amount),
    ).filter(
        Transaction.user_id == user_id,
        Transaction.type == TransactionType.EXPENSE,
        Transaction.date >= start,
        Transaction.date <= end,
        Transaction.category_id.isnot(None),
    ).group_by(Transaction.category_id).all()

    return {category_id: Decimal(total or 0) for category_id, total in rows}


def compute_category_budgets(db: Session, user_id: str, month: int, year: int) -> Dict[str, Any]:
    """
    Budget vs. spending for every category that has a budget in the month.

    Categories without a budget row are left out. A budget of zero reports a
    percentage of zero whatever was spent.
    """
    budgets = db.query(CategoryBudget).options(
        joinedload(CategoryBudget.category)
    ).filter(
        CategoryBudget.user_id == user_id,
        CategoryBudget.month == month,
        CategoryBudget.year == year,
    ).order_by(CategoryBudget.created_at).all()

    spending = get_spending_by_category(db, user_id, month, year)

    total_budget = ZERO
    total_spent = ZERO
    lines = []
    for budget in budgets:
        amount = Decimal(budget.amount)
        spent = spending.get(budget.category_id, ZERO)
        total_budget += amount
        total_spent += spent

        lines.append({
            "id": budget.id,
            "category_id": budget.category_id,
            "category_name": budget.category.name,
            "category_icon": budget.category.icon,
            "category_color": budget.category.color,
            "budget": amount,
            "spent": spent,
            "remaining": amount - spent,
            "percentage": usage_percentage(spent, amount),
        })

    return {
        "budgets": lines,
        "totals": {
            "total_budget": total_budget,
            "total_spent": total_spent,
            "percentage": usage_percentage(total_spent, total_budget),
            "savings": total_budget - total_spent,
        },
        "month": month,
        "year": year,
    }


def set_category_budget(
    db: Session,
    user_id: str,
    category_id: str,
    month: int,
    year: int,
    amount: Decimal,
) -> CategoryBudget:
    """Create or replace the budget keyed by (user, category, month, year)."""
    category = db.query(Category).filter(
        Category.id == category_id,
        Category.user_id == user_id,
    ).first()
    if not category:
        raise NotFoundError("Categoria não encontrada")

    budget = db.query(CategoryBudget).filter(
        CategoryBudget.user_id == user_id,
        CategoryBudget.category_id == category_id,
        CategoryBudget.month == month,
        CategoryBudget.year == year,
    ).first()

    if budget:
        budget.amount = amount
    else:
        budget = CategoryBudget(
            user_id=user_id,
            category_id=category_id,
            month=month,
            year=year,
            amount=amount,
        )
        db.add(budget)

    db.commit()
    db.refresh(budget)
    logger.info("Budget for category %s set to %s in %02d/%d", category_id, amount, month, year)
    return budget


def delete_category_budget(db: Session, user_id: str, category_id: str, month: int, year: int) -> None:
    budget = db.query(CategoryBudget).filter(
        CategoryBudget.user_id == user_id,
        CategoryBudget.category_id == category_id,
        CategoryBudget.month == month,
        CategoryBudget.year == year,
    ).first()
    if not budget:
        raise NotFoundError("Orçamento não encontrado")

    db.delete(budget)
    db.commit()
