"""
Database models package.
"""

from kaptal.models.category import Category
from kaptal.models.category_budget import CategoryBudget
from kaptal.models.income_rule import IncomeRule, RuleItem
from kaptal.models.monthly_goal import MonthlyGoal
from kaptal.models.savings_goal import SavingsGoal, SavingsDeposit
from kaptal.models.transaction import Transaction, TransactionType

__all__ = [
    "Category",
    "CategoryBudget",
    "IncomeRule",
    "RuleItem",
    "MonthlyGoal",
    "SavingsGoal",
    "SavingsDeposit",
    "Transaction",
    "TransactionType",
]
