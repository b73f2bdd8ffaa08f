"""
Pydantic schemas package.
"""

from kaptal.schemas.common import ApiResponse, CamelModel, MessageResponse
from kaptal.schemas.category import (
    CategoryBase,
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
)
from kaptal.schemas.category_budget import (
    CategoryBudgetSet,
    CategoryBudgetResponse,
    CategoryBudgetLine,
    CategoryBudgetTotals,
    CategoryBudgetSummary,
)
from kaptal.schemas.income_rule import (
    IncomeRuleCreate,
    IncomeRuleUpdate,
    IncomeRuleResponse,
    IncomeRuleSpending,
    IncomeRuleSummary,
    RuleItemCreate,
    RuleItemUpdate,
    RuleItemResponse,
    RuleItemSpending,
    CopyRulesRequest,
    ResetRulesRequest,
    SpendingDetail,
)
from kaptal.schemas.monthly_goal import MonthlyGoalSet, MonthlyGoalResponse, MonthlyGoalStatus
from kaptal.schemas.savings_goal import (
    SavingsGoalCreate,
    SavingsGoalUpdate,
    SavingsGoalResponse,
    SavingsGoalProgress,
    DepositCreate,
    DepositResponse,
    DepositResult,
)
from kaptal.schemas.transaction import (
    TransactionBase,
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    TransactionListResponse,
    Pagination,
)

__all__ = [
    "ApiResponse",
    "CamelModel",
    "MessageResponse",
    "CategoryBase",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryBudgetSet",
    "CategoryBudgetResponse",
    "CategoryBudgetLine",
    "CategoryBudgetTotals",
    "CategoryBudgetSummary",
    "IncomeRuleCreate",
    "IncomeRuleUpdate",
    "IncomeRuleResponse",
    "IncomeRuleSpending",
    "IncomeRuleSummary",
    "RuleItemCreate",
    "RuleItemUpdate",
    "RuleItemResponse",
    "RuleItemSpending",
    "CopyRulesRequest",
    "ResetRulesRequest",
    "SpendingDetail",
    "MonthlyGoalSet",
    "MonthlyGoalResponse",
    "MonthlyGoalStatus",
    "SavingsGoalCreate",
    "SavingsGoalUpdate",
    "SavingsGoalResponse",
    "SavingsGoalProgress",
    "DepositCreate",
    "DepositResponse",
    "DepositResult",
    "TransactionBase",
    "TransactionCreate",
    "TransactionUpdate",
    "TransactionResponse",
    "TransactionListResponse",
    "Pagination",
]
