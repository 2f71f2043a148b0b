"""
Items API routes (catalog of piece kinds: ring, chain, bangle ...)
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jewelbox.dependencies import get_current_user, get_db
from jewelbox.schemas.catalog import ItemCreate, ItemResponse, ItemUpdate
from jewelbox.services import catalog_service

router = APIRouter()


@router.get("", response_model=List[ItemResponse])
def list_items(
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    """All items ordered by name."""
    return catalog_service.list_items(db)


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    item: ItemCreate,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    return catalog_service.create_item(db, item, user_id=user_id)


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    return catalog_service.get_item(db, item_id)


@router.put("/{item_id}", response_model=ItemResponse)
def update_item(
    item_id: UUID,
    item: ItemUpdate,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    """Only fields present in the body change."""
    return catalog_service.update_item(db, item_id, item)
