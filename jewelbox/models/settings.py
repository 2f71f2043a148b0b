"""
Document numbering sequences
"""
import uuid

from sqlalchemy import Column, Integer, String, Uuid
from sqlalchemy.types import TIMESTAMP

from jewelbox.database import Base
from jewelbox.models._common import utcnow


class DocumentSequence(Base):
    """
    One counter row per document type (INVENTORY_TAG, SALE_INVOICE).

    current_number only ever increases, so a number is never handed out twice
    even if the record that used it is later removed.
    """
    __tablename__ = "document_sequences"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    document_type = Column(String(50), nullable=False, unique=True)
    current_number = Column(Integer, nullable=False, default=0)
    updated_at = Column(TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow)
