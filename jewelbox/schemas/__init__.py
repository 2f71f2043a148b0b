"""
Pydantic schemas for request/response validation
"""
from .catalog import (
    ItemCreate, ItemUpdate, ItemResponse, ItemRef,
    CategoryCreate, CategoryUpdate, CategoryResponse, CategoryRef,
)
from .expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse, ExpenseSummary
from .inventory import (
    ImageDescriptor, InventoryCreate, InventoryUpdate, InventoryResponse, InventoryListResponse,
    ValuationPreviewRequest, ValuationPreviewResponse,
)
from .sale import (
    SaleCreate, SaleLineItemCreate, SaleResponse, SaleLineItemResponse, SaleListResponse, SalesSummary,
)
from .gold_rate import GoldRateCreate, GoldRateResponse, GoldRateWithTable, KaratRate

__all__ = [
    "ItemCreate",
    "ItemUpdate",
    "ItemResponse",
    "ItemRef",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryRef",
    "ExpenseCreate",
    "ExpenseUpdate",
    "ExpenseResponse",
    "ExpenseSummary",
    "ImageDescriptor",
    "InventoryCreate",
    "InventoryUpdate",
    "InventoryResponse",
    "InventoryListResponse",
    "ValuationPreviewRequest",
    "ValuationPreviewResponse",
    "SaleCreate",
    "SaleLineItemCreate",
    "SaleResponse",
    "SaleLineItemResponse",
    "SaleListResponse",
    "SalesSummary",
    "GoldRateCreate",
    "GoldRateResponse",
    "GoldRateWithTable",
    "KaratRate",
]
