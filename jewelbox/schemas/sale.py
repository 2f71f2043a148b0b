"""
Sales schemas
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from jewelbox.schemas.inventory import InventoryResponse


class SaleLineItemCreate(BaseModel):
    inventory_id: UUID
    price: Decimal


class SaleCreate(BaseModel):
    """Create sale request. Every inventory unit must be available; prices must be > 0."""
    customer_name: str = ""
    customer_phone: Optional[str] = None
    notes: Optional[str] = None
    items: List[SaleLineItemCreate] = []


class SaleLineItemResponse(BaseModel):
    id: UUID
    inventory_id: UUID
    price: Decimal
    position: int
    inventory_unit: Optional[InventoryResponse] = None

    class Config:
        from_attributes = True


class SaleResponse(BaseModel):
    id: UUID
    invoice_number: str
    customer_name: str
    customer_phone: Optional[str] = None
    notes: Optional[str] = None
    total_amount: Decimal
    item_count: int = 0
    user_id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    line_items: List[SaleLineItemResponse] = []

    class Config:
        from_attributes = True


class SaleListResponse(BaseModel):
    items: List[SaleResponse]
    total: int


class SalesSummary(BaseModel):
    total_revenue: Decimal
    total_sales: int
    total_items: int
