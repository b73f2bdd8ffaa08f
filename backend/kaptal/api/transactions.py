"""
Transaction API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime

from kaptal.dependencies import get_db, get_current_user_id
from kaptal.exceptions import InvalidRequestError, NotFoundError
from kaptal.models import Category, IncomeRule, RuleItem
from kaptal.models.transaction import Transaction, TransactionType
from kaptal.schemas.common import ApiResponse, MessageResponse
from kaptal.schemas.transaction import (
    Pagination,
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
    TransactionListResponse,
)

router = APIRouter(prefix="/transactions", tags=["transactions"])


def validate_tags(
    db: Session,
    user_id: str,
    category_id: Optional[str] = None,
    income_rule_id: Optional[str] = None,
    rule_item_id: Optional[str] = None,
) -> None:
    """Every referenced category, rule and item must belong to the user."""
    if category_id:
        exists = db.query(Category.id).filter(
            Category.id == category_id,
            Category.user_id == user_id,
        ).first()
        if not exists:
            raise InvalidRequestError("Categoria não encontrada")

    if income_rule_id:
        exists = db.query(IncomeRule.id).filter(
            IncomeRule.id == income_rule_id,
            IncomeRule.user_id == user_id,
        ).first()
        if not exists:
            raise InvalidRequestError("Regra de orçamento não encontrada")

    if rule_item_id:
        exists = db.query(RuleItem.id).join(IncomeRule).filter(
            RuleItem.id == rule_item_id,
            IncomeRule.user_id == user_id,
        ).first()
        if not exists:
            raise InvalidRequestError("Subitem de orçamento não encontrado")


def get_owned_transaction(db: Session, user_id: str, transaction_id: str) -> Transaction:
    transaction = db.query(Transaction).filter(
        Transaction.id == transaction_id,
        Transaction.user_id == user_id,
    ).first()
    if not transaction:
        raise NotFoundError("Transação não encontrada")
    return transaction


@router.get("", response_model=ApiResponse[TransactionListResponse])
def list_transactions(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    category_id: Optional[str] = Query(None, alias="categoryId"),
    income_rule_id: Optional[str] = Query(None, alias="incomeRuleId"),
    type: Optional[TransactionType] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """List transactions with filtering and pagination"""
    query = db.query(Transaction).filter(Transaction.user_id == user_id)

    if start_date:
        query = query.filter(Transaction.date >= start_date)
    if end_date:
        query = query.filter(Transaction.date <= end_date)
    if category_id:
        query = query.filter(Transaction.category_id == category_id)
    if income_rule_id:
        query = query.filter(Transaction.income_rule_id == income_rule_id)
    if type:
        query = query.filter(Transaction.type == type)

    total = query.count()

    query = query.order_by(Transaction.date.desc())
    query = query.offset((page - 1) * limit).limit(limit)

    transactions = query.all()
    total_pages = (total + limit - 1) // limit

    return ApiResponse(data=TransactionListResponse(
        items=[TransactionResponse.model_validate(t) for t in transactions],
        pagination=Pagination(page=page, limit=limit, total=total, total_pages=total_pages),
    ))


@router.post("", response_model=ApiResponse[TransactionResponse], status_code=201)
def create_transaction(
    payload: TransactionCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Create a transaction"""
    validate_tags(db, user_id, payload.category_id, payload.income_rule_id, payload.rule_item_id)

    data = payload.model_dump()
    if data["date"] is None:
        data["date"] = datetime.utcnow()

    transaction = Transaction(user_id=user_id, **data)
    db.add(transaction)
    db.commit()
    db.refresh(transaction)
    return ApiResponse(data=TransactionResponse.model_validate(transaction))


@router.get("/{transaction_id}", response_model=ApiResponse[TransactionResponse])
def get_transaction(
    transaction_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Get a single transaction"""
    transaction = get_owned_transaction(db, user_id, transaction_id)
    return ApiResponse(data=TransactionResponse.model_validate(transaction))


@router.put("/{transaction_id}", response_model=ApiResponse[TransactionResponse])
def update_transaction(
    transaction_id: str,
    update: TransactionUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Update the fields present in the request"""
    transaction = get_owned_transaction(db, user_id, transaction_id)

    update_data = update.model_dump(exclude_unset=True)
    validate_tags(
        db,
        user_id,
        update_data.get("category_id"),
        update_data.get("income_rule_id"),
        update_data.get("rule_item_id"),
    )

    # Tags may be cleared with an explicit null; required columns may not
    nullable = {"category_id", "income_rule_id", "rule_item_id"}
    for field, value in update_data.items():
        if value is not None or field in nullable:
            setattr(transaction, field, value)

    db.commit()
    db.refresh(transaction)

    return ApiResponse(data=TransactionResponse.model_validate(transaction))


@router.delete("/{transaction_id}", response_model=MessageResponse)
def delete_transaction(
    transaction_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Delete a transaction"""
    transaction = get_owned_transaction(db, user_id, transaction_id)
    db.delete(transaction)
    db.commit()
    return MessageResponse(message="Transação deletada")
