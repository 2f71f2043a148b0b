"""
API routes for JewelBox
"""
from .items import router as items_router
from .categories import router as categories_router
from .expenses import router as expenses_router
from .inventory import router as inventory_router
from .sales import router as sales_router
from .gold_rates import router as gold_rates_router

__all__ = [
    "items_router",
    "categories_router",
    "expenses_router",
    "inventory_router",
    "sales_router",
    "gold_rates_router",
]
