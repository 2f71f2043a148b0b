"""
Database models for JewelBox
"""
from jewelbox.database import Base

from .catalog import Item, Category
from .expense import Expense
from .inventory import InventoryUnit, STATUS_AVAILABLE, STATUS_SOLD, INVENTORY_STATUSES
from .sale import Sale, SaleLineItem
from .gold_rate import GoldRateSnapshot
from .settings import DocumentSequence

__all__ = [
    "Base",
    "Item",
    "Category",
    "Expense",
    "InventoryUnit",
    "STATUS_AVAILABLE",
    "STATUS_SOLD",
    "INVENTORY_STATUSES",
    "Sale",
    "SaleLineItem",
    "GoldRateSnapshot",
    "DocumentSequence",
]
