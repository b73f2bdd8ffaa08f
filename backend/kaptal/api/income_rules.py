"""
Income rule API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from kaptal.dependencies import get_db, get_current_user_id
from kaptal.schemas.common import ApiResponse, MessageResponse
from kaptal.schemas.income_rule import (
    CopyRulesRequest,
    IncomeRuleCreate,
    IncomeRuleResponse,
    IncomeRuleSummary,
    IncomeRuleUpdate,
    ResetRulesRequest,
    RuleItemCreate,
    RuleItemResponse,
    RuleItemUpdate,
    SpendingDetail,
)
from kaptal.schemas.transaction import TransactionResponse
from kaptal.services import income_rule_service
from kaptal.services.periods import resolve_period

router = APIRouter(prefix="/income-rules", tags=["income-rules"])


def _rule_list(rules) -> List[IncomeRuleResponse]:
    return [IncomeRuleResponse.model_validate(rule) for rule in rules]


def _spending_detail(detail) -> SpendingDetail:
    detail["transactions"] = [TransactionResponse.model_validate(t) for t in detail["transactions"]]
    return SpendingDetail.model_validate(detail)


@router.get("", response_model=ApiResponse[IncomeRuleSummary])
def get_income_rules(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=2020, le=2100),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Rules of the month with spending. When the month has no rules the most
    recent earlier month is shown and `usingFallback` is true.
    """
    month, year = resolve_period(month, year)
    summary = income_rule_service.compute_income_rules(db, user_id, month, year)
    return ApiResponse(data=summary)


@router.post("", response_model=ApiResponse[IncomeRuleResponse], status_code=201)
def create_income_rule(
    payload: IncomeRuleCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    rule = income_rule_service.create_rule(db, user_id, payload.model_dump())
    return ApiResponse(data=IncomeRuleResponse.model_validate(rule))


@router.post("/copy", response_model=ApiResponse[List[IncomeRuleResponse]], status_code=201)
def copy_income_rules(
    payload: CopyRulesRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Copy every rule and item of one month into an empty month."""
    rules = income_rule_service.copy_from_month(
        db,
        user_id,
        payload.from_month,
        payload.from_year,
        payload.to_month,
        payload.to_year,
        payload.base_income,
    )
    return ApiResponse(data=_rule_list(rules), message="Regras copiadas com sucesso")


@router.post("/reset", response_model=ApiResponse[List[IncomeRuleResponse]])
def reset_income_rules(
    payload: ResetRulesRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Replace the month's rules with the default distribution."""
    rules = income_rule_service.reset_to_defaults(
        db, user_id, payload.month, payload.year, payload.base_income
    )
    return ApiResponse(data=_rule_list(rules), message="Regras restauradas para o padrão")


@router.put("/{rule_id}", response_model=ApiResponse[IncomeRuleResponse])
def update_income_rule(
    rule_id: str,
    payload: IncomeRuleUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    rule = income_rule_service.update_rule(
        db, user_id, rule_id, payload.model_dump(exclude_unset=True)
    )
    return ApiResponse(data=IncomeRuleResponse.model_validate(rule))


@router.delete("/{rule_id}", response_model=MessageResponse)
def delete_income_rule(
    rule_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    income_rule_service.delete_rule(db, user_id, rule_id)
    return MessageResponse(message="Regra excluída com sucesso")


@router.get("/{rule_id}/spending", response_model=ApiResponse[SpendingDetail])
def get_rule_spending(
    rule_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return ApiResponse(data=_spending_detail(income_rule_service.get_rule_spending(db, user_id, rule_id)))


@router.post("/{rule_id}/items", response_model=ApiResponse[RuleItemResponse], status_code=201)
def add_rule_item(
    rule_id: str,
    payload: RuleItemCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    item = income_rule_service.add_item(db, user_id, rule_id, payload.model_dump())
    return ApiResponse(data=RuleItemResponse.model_validate(item))


@router.put("/{rule_id}/items/{item_id}", response_model=ApiResponse[RuleItemResponse])
def update_rule_item(
    rule_id: str,
    item_id: str,
    payload: RuleItemUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    item = income_rule_service.update_item(
        db, user_id, rule_id, item_id, payload.model_dump(exclude_unset=True)
    )
    return ApiResponse(data=RuleItemResponse.model_validate(item))


@router.delete("/{rule_id}/items/{item_id}", response_model=MessageResponse)
def delete_rule_item(
    rule_id: str,
    item_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    income_rule_service.delete_item(db, user_id, rule_id, item_id)
    return MessageResponse(message="Item excluído com sucesso")


@router.get("/{rule_id}/items/{item_id}/spending", response_model=ApiResponse[SpendingDetail])
def get_item_spending(
    rule_id: str,
    item_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return ApiResponse(data=_spending_detail(
        income_rule_service.get_item_spending(db, user_id, rule_id, item_id)
    ))
