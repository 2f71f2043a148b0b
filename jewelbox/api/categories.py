"""
Expense category API routes
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from jewelbox.dependencies import get_current_user, get_db
from jewelbox.schemas.catalog import CategoryCreate, CategoryResponse, CategoryUpdate
from jewelbox.services import catalog_service

router = APIRouter()


@router.get("", response_model=List[CategoryResponse])
def list_categories(
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    return catalog_service.list_categories(db)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category: CategoryCreate,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    return catalog_service.create_category(db, category)


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(
    category_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    return catalog_service.get_category(db, category_id)


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: UUID,
    category: CategoryUpdate,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    return catalog_service.update_category(db, category_id, category)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    """409 while any expense still uses the category."""
    catalog_service.delete_category(db, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
