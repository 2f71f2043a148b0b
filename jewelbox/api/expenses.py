"""
Expenses API routes
"""
import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from jewelbox.dependencies import get_current_user, get_db
from jewelbox.schemas.expense import ExpenseCreate, ExpenseResponse, ExpenseSummary, ExpenseUpdate
from jewelbox.services import expense_service, export_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[ExpenseResponse])
def list_expenses(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    category_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    """Newest first; optional inclusive date range and category filter."""
    return expense_service.list_expenses(db, start_date=start_date, end_date=end_date, category_id=category_id)


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
def create_expense(
    expense: ExpenseCreate,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    return expense_service.create_expense(db, expense, user_id=user_id)


@router.get("/summary", response_model=ExpenseSummary)
def expense_summary(
    on: Optional[date] = Query(None, description="Reference date; defaults to today"),
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    """Totals for all time, today, last 7 / 30 / 90 days."""
    return expense_service.expense_summary(db, today=on)


@router.get("/export")
def export_expenses(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    category_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    """CSV of the expenses matching the same filters as the list."""
    expenses = expense_service.list_expenses(db, start_date=start_date, end_date=end_date, category_id=category_id)
    filename = export_service.export_filename("expenses")
    logger.info("Exporting %d expenses for %s", len(expenses), user_id)
    return Response(
        content=export_service.expenses_csv(expenses),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(
    expense_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    return expense_service.get_expense(db, expense_id)


@router.put("/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: UUID,
    expense: ExpenseUpdate,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    return expense_service.update_expense(db, expense_id, expense)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(
    expense_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    expense_service.delete_expense(db, expense_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
