"""
Expense service - CRUD and dashboard period totals
"""
from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from jewelbox.exceptions import NotFoundError, ValidationError
from jewelbox.models import Category, Expense
from jewelbox.schemas.expense import ExpenseCreate, ExpenseUpdate
from jewelbox.services.transaction import read_guard, write_transaction
from jewelbox.utils.numbers import parse_decimal, round_money

logger = logging.getLogger(__name__)

# Dashboard windows, in days back from the reference date (0 = that day only)
SUMMARY_WINDOWS = {
    "today": 0,
    "week": 7,
    "month": 30,
    "three_months": 90,
}


def _clean_amount(value) -> Decimal:
    amount = parse_decimal(value)
    if amount is not None:
        amount = round_money(amount)
    if amount is None or amount <= 0:
        raise ValidationError("Please enter a valid amount", field="amount")
    return amount


def _clean_description(value: Optional[str]) -> str:
    description = (value or "").strip()
    if not description:
        raise ValidationError("Description is required", field="description")
    return description


@read_guard("Check category")
def _check_category(db: Session, category_id: Optional[UUID]) -> None:
    if category_id and not db.query(Category.id).filter(Category.id == category_id).first():
        raise ValidationError(f"Category {category_id} not found", field="category_id")


def create_expense(db: Session, data: ExpenseCreate, user_id: Optional[UUID] = None) -> Expense:
    expense = Expense(
        description=_clean_description(data.description),
        amount=_clean_amount(data.amount),
        category_id=data.category_id,
        expense_date=data.expense_date or date.today(),
        user_id=user_id,
    )
    _check_category(db, data.category_id)
    with write_transaction(db, "Create expense"):
        db.add(expense)
    return get_expense(db, expense.id)


def update_expense(db: Session, expense_id: UUID, data: ExpenseUpdate) -> Expense:
    expense = get_expense(db, expense_id)
    fields = data.model_fields_set
    changes = {}
    if "description" in fields:
        changes["description"] = _clean_description(data.description)
    if "amount" in fields:
        changes["amount"] = _clean_amount(data.amount)
    if "category_id" in fields:
        _check_category(db, data.category_id)
        changes["category_id"] = data.category_id
    if "expense_date" in fields and data.expense_date is not None:
        changes["expense_date"] = data.expense_date
    with write_transaction(db, "Update expense"):
        for name, value in changes.items():
            setattr(expense, name, value)
    db.refresh(expense)
    return expense


@read_guard("Get expense")
def get_expense(db: Session, expense_id: UUID) -> Expense:
    expense = (
        db.query(Expense)
        .options(joinedload(Expense.category))
        .filter(Expense.id == expense_id)
        .first()
    )
    if not expense:
        raise NotFoundError(f"Expense {expense_id} not found")
    return expense


@read_guard("List expenses")
def list_expenses(
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    category_id: Optional[UUID] = None,
) -> List[Expense]:
    """Newest first, optionally within [start_date, end_date] and one category."""
    q = db.query(Expense).options(joinedload(Expense.category))
    if start_date:
        q = q.filter(Expense.expense_date >= start_date)
    if end_date:
        q = q.filter(Expense.expense_date <= end_date)
    if category_id:
        q = q.filter(Expense.category_id == category_id)
    return q.order_by(Expense.expense_date.desc(), Expense.created_at.desc()).all()


def delete_expense(db: Session, expense_id: UUID) -> None:
    expense = get_expense(db, expense_id)
    with write_transaction(db, "Delete expense"):
        db.delete(expense)
    logger.info("Expense deleted: %s", expense_id)


@read_guard("Expense summary")
def expense_summary(db: Session, today: Optional[date] = None) -> Dict[str, Decimal]:
    """
    Totals for the dashboard: all time, today, last 7, 30 and 90 days.
    Windows are inclusive of the reference date and measured on expense_date.
    """
    today = today or date.today()

    def total_since(start: Optional[date]) -> Decimal:
        q = db.query(func.coalesce(func.sum(Expense.amount), 0))
        if start is not None:
            q = q.filter(Expense.expense_date >= start, Expense.expense_date <= today)
        return Decimal(str(q.scalar() or 0))

    summary = {"total": total_since(None)}
    for key, days in SUMMARY_WINDOWS.items():
        summary[key] = total_since(today - timedelta(days=days))
    return summary
