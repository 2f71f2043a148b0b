"""
Catalog models: Item (jewelry type) and Category (expense label)
"""
import uuid

from sqlalchemy import Column, String, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

from jewelbox.database import Base
from jewelbox.models._common import utcnow


class Item(Base):
    """Catalog entry (ring, chain, bangle ...). Many inventory units reference one item."""
    __tablename__ = "items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    abbreviation = Column(String(20))  # Short code shown on tags
    user_id = Column(Uuid)
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow)

    inventory_units = relationship("InventoryUnit", back_populates="item")


class Category(Base):
    """Expense category"""
    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())

    expenses = relationship("Expense", back_populates="category")
