"""
Sales Service - create, look up and summarize sales

Creating a sale is delegated to InventoryService.reserve_for_sale, which owns
the all-or-nothing transition of the sold units.
"""
import logging
from decimal import Decimal
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from jewelbox.exceptions import NotFoundError
from jewelbox.models import InventoryUnit, Sale, SaleLineItem
from jewelbox.schemas.sale import SaleCreate
from jewelbox.services.inventory_service import InventoryService
from jewelbox.services.transaction import read_guard

logger = logging.getLogger(__name__)


def _with_lines(q):
    return q.options(
        selectinload(Sale.line_items)
        .selectinload(SaleLineItem.inventory_unit)
        .selectinload(InventoryUnit.item)
    )


def _search_filter(q, search: Optional[str]):
    term = (search or "").strip()
    if term:
        pattern = f"%{term}%"
        q = q.filter(
            or_(
                Sale.invoice_number.ilike(pattern),
                Sale.customer_name.ilike(pattern),
                Sale.customer_phone.ilike(pattern),
            )
        )
    return q


class SalesService:
    """Sales settlement and reporting"""

    @staticmethod
    def create_sale(db: Session, sale: SaleCreate, user_id: Optional[UUID] = None) -> Sale:
        """
        Create a sale from the request. Customer name is required, at least
        one line, every price > 0, no inventory unit twice.
        """
        ids = [line.inventory_id for line in sale.items]
        # Duplicate ids collapse here; reserve_for_sale rejects them from ids
        prices = {line.inventory_id: line.price for line in sale.items}
        payload = {
            "customer_name": sale.customer_name,
            "customer_phone": sale.customer_phone,
            "notes": sale.notes,
        }
        created = InventoryService.reserve_for_sale(db, ids, prices, payload, user_id=user_id)
        return SalesService.get_sale(db, created.id)

    @staticmethod
    @read_guard("Get sale")
    def get_sale(db: Session, sale_id: UUID) -> Sale:
        sale = _with_lines(db.query(Sale)).filter(Sale.id == sale_id).first()
        if not sale:
            raise NotFoundError(f"Sale {sale_id} not found")
        return sale

    @staticmethod
    @read_guard("List sales")
    def list_sales(
        db: Session,
        search: Optional[str] = None,
        limit: Optional[int] = 50,
        offset: int = 0,
    ) -> Tuple[List[Sale], int]:
        """
        Newest first. search matches invoice number, customer name and phone.
        limit=None returns every match (used by CSV export).
        """
        q = _search_filter(db.query(Sale), search)
        total = q.count()
        q = _with_lines(q).order_by(Sale.created_at.desc(), Sale.invoice_number.desc()).offset(max(0, offset))
        if limit is not None:
            q = q.limit(max(1, limit))
        return q.all(), total

    @staticmethod
    @read_guard("Sales summary")
    def sales_summary(db: Session, search: Optional[str] = None) -> dict:
        """total_revenue, total_sales, total_items over the sales matching search."""
        q = _search_filter(db.query(Sale), search)
        total_sales, revenue = q.with_entities(
            func.count(Sale.id), func.coalesce(func.sum(Sale.total_amount), 0)
        ).one()
        total_items = _search_filter(
            db.query(func.count(SaleLineItem.id)).join(Sale, SaleLineItem.sale_id == Sale.id),
            search,
        ).scalar()
        return {
            "total_revenue": Decimal(str(revenue or 0)),
            "total_sales": int(total_sales or 0),
            "total_items": int(total_items or 0),
        }
