"""
Category API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from kaptal.dependencies import get_db, get_current_user_id
from kaptal.exceptions import InvalidRequestError, NotFoundError
from kaptal.models import Category
from kaptal.schemas.common import ApiResponse, MessageResponse
from kaptal.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
)
from kaptal.services.deletion_policies import delete_category_nullifying

router = APIRouter()


def get_owned_category(db: Session, user_id: str, category_id: str) -> Category:
    category = db.query(Category).filter(
        Category.id == category_id,
        Category.user_id == user_id,
    ).first()
    if not category:
        raise NotFoundError("Categoria não encontrada")
    return category


def validate_parent(db: Session, user_id: str, parent_id: Optional[str], category_id: Optional[str] = None) -> None:
    """Parents must belong to the user and be top-level (one nesting level)."""
    if not parent_id:
        return
    if parent_id == category_id:
        raise InvalidRequestError("Uma categoria não pode ser pai de si mesma")

    parent = db.query(Category).filter(
        Category.id == parent_id,
        Category.user_id == user_id,
    ).first()
    if not parent:
        raise InvalidRequestError("Categoria pai não encontrada")
    if parent.parent_id is not None:
        raise InvalidRequestError("Subcategorias não podem ter subcategorias")


@router.get("", response_model=ApiResponse[List[CategoryResponse]])
def list_categories(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """List top-level categories with their subcategories."""
    roots = db.query(Category).filter(
        Category.user_id == user_id,
        Category.parent_id.is_(None),
    ).order_by(Category.name).all()

    return ApiResponse(data=[CategoryResponse.model_validate(cat) for cat in roots])


@router.get("/all", response_model=ApiResponse[List[CategoryResponse]])
def list_all_categories(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """List every category as a flat list."""
    categories = db.query(Category).filter(
        Category.user_id == user_id
    ).order_by(Category.name).all()

    return ApiResponse(data=[
        CategoryResponse.model_validate(cat).model_copy(update={"children": []})
        for cat in categories
    ])


@router.post("", response_model=ApiResponse[CategoryResponse], status_code=201)
def create_category(
    category: CategoryCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Create a new category."""
    validate_parent(db, user_id, category.parent_id)

    db_category = Category(
        user_id=user_id,
        name=category.name,
        parent_id=category.parent_id,
        color=category.color,
        icon=category.icon,
    )
    db.add(db_category)
    db.commit()
    db.refresh(db_category)
    return ApiResponse(data=CategoryResponse.model_validate(db_category))


@router.get("/{category_id}", response_model=ApiResponse[CategoryResponse])
def get_category(
    category_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Get a specific category."""
    category = get_owned_category(db, user_id, category_id)
    return ApiResponse(data=CategoryResponse.model_validate(category))


@router.put("/{category_id}", response_model=ApiResponse[CategoryResponse])
def update_category(
    category_id: str,
    category_update: CategoryUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Update a category."""
    category = get_owned_category(db, user_id, category_id)

    changes = category_update.model_dump(exclude_unset=True)
    if "parent_id" in changes:
        validate_parent(db, user_id, changes["parent_id"], category.id)
        if changes["parent_id"] and category.children:
            raise InvalidRequestError("Categorias com subcategorias não podem virar subcategoria")

    # parent_id may be cleared with null; the other fields are never nulled
    for field, value in changes.items():
        if value is not None or field == "parent_id":
            setattr(category, field, value)

    db.commit()
    db.refresh(category)
    return ApiResponse(data=CategoryResponse.model_validate(category))


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Delete a category; its transactions are kept without a category."""
    category = get_owned_category(db, user_id, category_id)
    delete_category_nullifying(db, category)
    db.commit()
    return MessageResponse(message="Categoria deletada")
