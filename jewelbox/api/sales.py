"""
Sales API routes
"""
import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from jewelbox.dependencies import get_current_user, get_db
from jewelbox.schemas.sale import SaleCreate, SaleListResponse, SaleResponse, SalesSummary
from jewelbox.services import export_service
from jewelbox.services.document_pdf_service import build_sale_invoice_pdf
from jewelbox.services.sales_service import SalesService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=SaleListResponse)
def list_sales(
    search: Optional[str] = Query(None, description="Invoice number, customer name or phone"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    rows, total = SalesService.list_sales(db, search=search, limit=limit, offset=offset)
    return {"items": rows, "total": total}


@router.post("", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
def create_sale(
    sale: SaleCreate,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    """
    Sell one or more available units in one transaction.
    409 if any unit is already sold; nothing changes in that case.
    """
    return SalesService.create_sale(db, sale, user_id=user_id)


@router.get("/summary", response_model=SalesSummary)
def sales_summary(
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    return SalesService.sales_summary(db, search=search)


@router.get("/export")
def export_sales(
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    """CSV of every sale matching search (not just one page)."""
    rows, _ = SalesService.list_sales(db, search=search, limit=None)
    filename = export_service.export_filename("sales")
    logger.info("Exporting %d sales for %s", len(rows), user_id)
    return Response(
        content=export_service.sales_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{sale_id}", response_model=SaleResponse)
def get_sale(
    sale_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    return SalesService.get_sale(db, sale_id)


@router.get("/{sale_id}/invoice.pdf")
def download_invoice_pdf(
    sale_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    sale = SalesService.get_sale(db, sale_id)
    pdf_bytes = build_sale_invoice_pdf(sale)
    filename = f"invoice-{sale.invoice_number}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
