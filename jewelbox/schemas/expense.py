"""
Expense schemas
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from jewelbox.schemas.catalog import CategoryRef


class ExpenseCreate(BaseModel):
    """Amount must be > 0; checked in expense_service so the error is a domain ValidationError."""
    description: str
    amount: Decimal
    category_id: Optional[UUID] = None
    expense_date: Optional[date] = None  # Defaults to today


class ExpenseUpdate(BaseModel):
    description: Optional[str] = None
    amount: Optional[Decimal] = None
    category_id: Optional[UUID] = None
    expense_date: Optional[date] = None


class ExpenseResponse(BaseModel):
    id: UUID
    description: str
    amount: Decimal
    category_id: Optional[UUID] = None
    category: Optional[CategoryRef] = None
    expense_date: date
    user_id: Optional[UUID] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ExpenseSummary(BaseModel):
    """Totals for the dashboard cards"""
    total: Decimal
    today: Decimal
    week: Decimal
    month: Decimal
    three_months: Decimal
