"""
Document Numbering Service - sequential tag and invoice numbers
"""
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from jewelbox.config import settings
from jewelbox.models import DocumentSequence

INVENTORY_TAG = "INVENTORY_TAG"
SALE_INVOICE = "SALE_INVOICE"


class DocumentService:
    """Issues human-readable sequential numbers from the document_sequences table"""

    @staticmethod
    def next_number(db: Session, document_type: str) -> int:
        """
        Increment and return the counter for document_type.

        The counter row is locked (SELECT ... FOR UPDATE) for the rest of the
        caller's transaction, so two concurrent callers never get the same
        number. The increment is not committed here: it commits or rolls back
        with the caller's record.
        """
        seq = (
            db.query(DocumentSequence)
            .filter(DocumentSequence.document_type == document_type)
            .with_for_update()
            .first()
        )
        if seq is None:
            seq = DocumentSequence(document_type=document_type, current_number=0)
            db.add(seq)
        seq.current_number = (seq.current_number or 0) + 1
        db.flush()
        return seq.current_number

    @staticmethod
    def get_tag_number(db: Session, prefix: Optional[str] = None) -> str:
        """
        Next inventory tag number.

        Format: {TAG_PREFIX}{NUMBER}, e.g. T000001
        Global sequence; numbers are never reused.
        """
        n = DocumentService.next_number(db, INVENTORY_TAG)
        prefix = settings.TAG_PREFIX if prefix is None else prefix
        return f"{prefix}{n:06d}"

    @staticmethod
    def get_invoice_number(db: Session, on_date: Optional[date] = None) -> str:
        """
        Next sale invoice number.

        Format: {INVOICE_PREFIX}-{YYYY}-{NUMBER}, e.g. INV-2026-000001
        The sequence is global (not reset per year), so the number alone is unique.
        """
        n = DocumentService.next_number(db, SALE_INVOICE)
        year = (on_date or date.today()).year
        return f"{settings.INVOICE_PREFIX}-{year}-{n:06d}"
