"""
Business logic services for JewelBox
"""
from .inventory_service import InventoryService
from .sales_service import SalesService
from .document_service import DocumentService

__all__ = [
    "InventoryService",
    "SalesService",
    "DocumentService",
]
