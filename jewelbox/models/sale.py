"""
Sales models. Sales are immutable after creation.
"""
import uuid

from sqlalchemy import (
    CheckConstraint, Column, ForeignKey, Integer, Numeric, String, Text, Uuid,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

from jewelbox.database import Base
from jewelbox.models._common import utcnow


class Sale(Base):
    """Sale settlement. total_amount is the sum of its line prices."""
    __tablename__ = "sales"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    invoice_number = Column(String(50), nullable=False, unique=True, index=True)
    customer_name = Column(String(255), nullable=False)
    customer_phone = Column(String(50))
    notes = Column(Text)
    total_amount = Column(Numeric(14, 2), nullable=False)
    user_id = Column(Uuid)
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now(), index=True)

    line_items = relationship(
        "SaleLineItem",
        back_populates="sale",
        order_by="SaleLineItem.position",
        cascade="all, delete-orphan",
    )

    @property
    def item_count(self) -> int:
        return len(self.line_items)


class SaleLineItem(Base):
    """
    One sold inventory unit and its agreed price.

    inventory_id is unique over the whole table: a unit can only ever be sold once.
    """
    __tablename__ = "sale_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    sale_id = Column(Uuid, ForeignKey("sales.id", ondelete="CASCADE"), nullable=False)
    inventory_id = Column(Uuid, ForeignKey("inventory.id", ondelete="RESTRICT"), nullable=False, unique=True)
    price = Column(Numeric(14, 2), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())

    sale = relationship("Sale", back_populates="line_items")
    inventory_unit = relationship("InventoryUnit", back_populates="sale_item")

    __table_args__ = (
        CheckConstraint("price > 0", name="sale_item_price_positive"),
    )
