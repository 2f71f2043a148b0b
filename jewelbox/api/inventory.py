"""
Inventory API routes.

Static paths (available, preview, images, tag/{tag}) are declared before
/{inventory_id} so they are not parsed as ids.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from jewelbox.config import settings
from jewelbox.dependencies import get_blob_store, get_current_user, get_db
from jewelbox.schemas.inventory import (
    ImageDescriptor,
    InventoryCreate,
    InventoryListResponse,
    InventoryResponse,
    InventoryUpdate,
    ValuationPreviewRequest,
    ValuationPreviewResponse,
)
from jewelbox.services import valuation
from jewelbox.services.document_pdf_service import build_tag_pdf
from jewelbox.services.inventory_service import InventoryService
from jewelbox.services.storage_service import BlobStore

router = APIRouter()


@router.get("", response_model=InventoryListResponse)
def list_inventory(
    search: Optional[str] = Query(None, description="Tag number, description, item name or abbreviation"),
    status_filter: Optional[str] = Query(None, alias="status", description="available | sold | all"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    rows, total = InventoryService.list_inventory(db, search=search, status=status_filter, limit=limit, offset=offset)
    return {"items": rows, "total": total}


@router.post("", response_model=InventoryResponse, status_code=status.HTTP_201_CREATED)
def create_inventory(
    body: InventoryCreate,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    """Create an available unit; tag number and derived weights are assigned here."""
    unit = InventoryService.create_inventory(db, body, user_id=user_id)
    return InventoryService.get_inventory(db, unit.id)


@router.get("/available", response_model=List[InventoryResponse])
def list_available(
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    """Units that can be added to a sale."""
    return InventoryService.list_available(db)


@router.post("/preview", response_model=ValuationPreviewResponse)
def preview_valuation(
    body: ValuationPreviewRequest,
    user_id: UUID = Depends(get_current_user),
):
    """Live form preview. Unparseable inputs count as 0; nothing is validated or stored."""
    return valuation.compute_derived(body.model_dump())


@router.post("/images", response_model=ImageDescriptor, status_code=status.HTTP_201_CREATED)
def upload_image(
    file: UploadFile = File(...),
    store: BlobStore = Depends(get_blob_store),
    user_id: UUID = Depends(get_current_user),
):
    """
    Upload one photo (png, jpeg, gif, webp; max MAX_IMAGE_BYTES).
    Returns {url, name, type, size} for the client to add to the unit's images.
    """
    # Read one byte past the limit so oversized files are rejected without buffering them whole
    content = file.file.read(settings.MAX_IMAGE_BYTES + 1)
    return InventoryService.upload_image(store, content, file.content_type or "", file.filename)


@router.get("/tag/{tag_number}", response_model=InventoryResponse)
def get_by_tag(
    tag_number: str,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    return InventoryService.get_by_tag_number(db, tag_number)


@router.get("/{inventory_id}", response_model=InventoryResponse)
def get_inventory(
    inventory_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    return InventoryService.get_inventory(db, inventory_id)


@router.put("/{inventory_id}", response_model=InventoryResponse)
def update_inventory(
    inventory_id: UUID,
    body: InventoryUpdate,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    """Replace the fields present in the body. 409 once the unit is sold."""
    InventoryService.update_inventory(db, inventory_id, body)
    return InventoryService.get_inventory(db, inventory_id)


@router.get("/{inventory_id}/tag.pdf")
def print_tag(
    inventory_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    unit = InventoryService.get_inventory(db, inventory_id)
    pdf_bytes = build_tag_pdf(unit)
    filename = f"tag-{unit.tag_number}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{filename}"'},
    )
