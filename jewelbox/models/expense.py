"""
Expense model
"""
import uuid

from sqlalchemy import Column, Date, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

from jewelbox.database import Base
from jewelbox.models._common import utcnow


class Expense(Base):
    """Business expense. Independent of the valuation core."""
    __tablename__ = "expenses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    description = Column(Text, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    # Categories are restrict-delete: see catalog_service.delete_category
    category_id = Column(Uuid, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=True)
    expense_date = Column(Date, nullable=False)
    user_id = Column(Uuid)
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow)

    category = relationship("Category", back_populates="expenses")
