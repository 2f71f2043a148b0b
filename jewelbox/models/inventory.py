"""
Inventory model - one physical, uniquely tagged piece (or batch of pieces)
"""
import uuid

from sqlalchemy import (
    JSON, CheckConstraint, Column, ForeignKey, Integer, Numeric, String, Text, Uuid,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

from jewelbox.database import Base
from jewelbox.models._common import utcnow

STATUS_AVAILABLE = "available"
STATUS_SOLD = "sold"
INVENTORY_STATUSES = (STATUS_AVAILABLE, STATUS_SOLD)


class InventoryUnit(Base):
    """
    Inventory unit.

    total_weight and pure_gold are derived from the physical inputs by the
    valuation engine on every write; nothing else sets them.
    status moves available -> sold exactly once, through a sale.
    """
    __tablename__ = "inventory"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    tag_number = Column(String(50), nullable=False, unique=True, index=True)
    item_id = Column(Uuid, ForeignKey("items.id", ondelete="RESTRICT"), nullable=False)
    description = Column(Text)

    # Physical inputs (grams unless noted)
    net_weight = Column(Numeric(12, 3), nullable=False)
    wasteage_percentage = Column(Numeric(12, 3), nullable=False, default=0)
    polish_weight = Column(Numeric(12, 3), nullable=False, default=0)
    stone_weight = Column(Numeric(12, 3), nullable=False, default=0)
    karat = Column(Integer, nullable=False, default=22)
    ratti = Column(Numeric(7, 3), nullable=False, default=0)
    no_of_pieces = Column(Integer)
    quantity = Column(Integer)  # Legacy; superseded by no_of_pieces

    # Derived
    total_weight = Column(Numeric(12, 3), nullable=False)
    pure_gold = Column(Numeric(12, 3), nullable=False)

    status = Column(String(20), nullable=False, default=STATUS_AVAILABLE, index=True)
    sold_at = Column(TIMESTAMP(timezone=True), nullable=True)
    # Ordered list of {url, name, type, size}; first entry is the cover image
    images = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=list)

    user_id = Column(Uuid)
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow)

    item = relationship("Item", back_populates="inventory_units")
    sale_item = relationship("SaleLineItem", back_populates="inventory_unit", uselist=False)

    __table_args__ = (
        CheckConstraint("net_weight > 0", name="inventory_net_weight_positive"),
        CheckConstraint("karat BETWEEN 1 AND 24", name="inventory_karat_range"),
        CheckConstraint("status IN ('available', 'sold')", name="inventory_status_valid"),
    )

    @property
    def pieces(self) -> int:
        """no_of_pieces if set, else legacy quantity, else 1."""
        if self.no_of_pieces is not None:
            return self.no_of_pieces
        if self.quantity is not None:
            return self.quantity
        return 1

    @property
    def is_available(self) -> bool:
        return self.status == STATUS_AVAILABLE
