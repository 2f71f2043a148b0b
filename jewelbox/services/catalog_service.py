"""
Catalog service - items and expense categories
"""
from __future__ import annotations

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from jewelbox.exceptions import ConflictError, NotFoundError, ValidationError
from jewelbox.models import Category, Expense, Item
from jewelbox.schemas.catalog import CategoryCreate, CategoryUpdate, ItemCreate, ItemUpdate
from jewelbox.services.transaction import read_guard, write_transaction

logger = logging.getLogger(__name__)


def _clean_name(value: Optional[str], label: str) -> str:
    name = (value or "").strip()
    if not name:
        raise ValidationError(f"{label} name is required", field="name")
    return name


def _clean_abbreviation(value: Optional[str]) -> Optional[str]:
    abbr = (value or "").strip()
    return abbr.upper() or None


# --- Items -------------------------------------------------------------------

def create_item(db: Session, data: ItemCreate, user_id: Optional[UUID] = None) -> Item:
    item = Item(
        name=_clean_name(data.name, "Item"),
        abbreviation=_clean_abbreviation(data.abbreviation),
        user_id=user_id,
    )
    with write_transaction(db, "Create item"):
        db.add(item)
    db.refresh(item)
    logger.info("Item created: %s (%s)", item.name, item.abbreviation or "-")
    return item


def update_item(db: Session, item_id: UUID, data: ItemUpdate) -> Item:
    item = get_item(db, item_id)
    fields = data.model_fields_set
    with write_transaction(db, "Update item"):
        if "name" in fields:
            item.name = _clean_name(data.name, "Item")
        if "abbreviation" in fields:
            item.abbreviation = _clean_abbreviation(data.abbreviation)
    db.refresh(item)
    return item


@read_guard("Get item")
def get_item(db: Session, item_id: UUID) -> Item:
    item = db.query(Item).filter(Item.id == item_id).first()
    if not item:
        raise NotFoundError(f"Item {item_id} not found")
    return item


@read_guard("List items")
def list_items(db: Session) -> List[Item]:
    return db.query(Item).order_by(Item.name.asc()).all()


# --- Categories --------------------------------------------------------------

@read_guard("Check category name")
def _ensure_unique_category(db: Session, name: str, exclude_id: Optional[UUID] = None) -> None:
    q = db.query(Category.id).filter(func.lower(Category.name) == name.lower())
    if exclude_id:
        q = q.filter(Category.id != exclude_id)
    if q.first():
        raise ValidationError(f"Category '{name}' already exists", field="name")


def create_category(db: Session, data: CategoryCreate) -> Category:
    name = _clean_name(data.name, "Category")
    _ensure_unique_category(db, name)
    category = Category(name=name)
    with write_transaction(db, "Create category"):
        db.add(category)
    db.refresh(category)
    return category


def update_category(db: Session, category_id: UUID, data: CategoryUpdate) -> Category:
    category = get_category(db, category_id)
    if "name" in data.model_fields_set:
        name = _clean_name(data.name, "Category")
        _ensure_unique_category(db, name, exclude_id=category.id)
        with write_transaction(db, "Update category"):
            category.name = name
        db.refresh(category)
    return category


@read_guard("Get category")
def get_category(db: Session, category_id: UUID) -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise NotFoundError(f"Category {category_id} not found")
    return category


@read_guard("List categories")
def list_categories(db: Session) -> List[Category]:
    return db.query(Category).order_by(Category.name.asc()).all()


@read_guard("Count category expenses")
def _expense_count(db: Session, category_id: UUID) -> int:
    return db.query(func.count(Expense.id)).filter(Expense.category_id == category_id).scalar() or 0


def delete_category(db: Session, category_id: UUID) -> None:
    """
    Restrict delete: a category still used by an expense cannot be removed.
    Raises ConflictError in that case.
    """
    category = get_category(db, category_id)
    in_use = _expense_count(db, category.id)
    if in_use:
        raise ConflictError(
            f"Category '{category.name}' is used by {in_use} expense(s); reassign them before deleting"
        )
    name = category.name
    with write_transaction(db, "Delete category", "Category is in use"):
        db.delete(category)
    logger.info("Category deleted: %s", name)
