"""
Inventory schemas.

Numeric inputs are unconstrained here; inventory_service validates them and
raises a domain ValidationError.
"""
import json
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field, field_validator

from jewelbox.schemas.catalog import ItemRef


class ImageDescriptor(BaseModel):
    """Uploaded image. Position in the list is display order; index 0 is the cover."""
    url: str
    name: str = "Unnamed image"
    type: str = "image/jpeg"
    size: int = 0


def normalize_images(value: Any) -> List[dict]:
    """
    Accept the shapes stored by older clients:
    - list of {url, name, type, size}
    - list of bare URL strings
    - a JSON-encoded string of either
    Entries without a url are dropped.
    """
    if value is None:
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return []
    if not isinstance(value, list):
        return []
    out = []
    for img in value:
        if isinstance(img, str) and img:
            out.append({"url": img, "name": "Unnamed image"})
        elif isinstance(img, ImageDescriptor):
            out.append(img.model_dump())
        elif isinstance(img, dict) and img.get("url"):
            out.append({k: v for k, v in img.items() if v is not None})
    return out


class InventoryInput(BaseModel):
    """Editable fields of an inventory unit."""
    item_id: Optional[UUID] = None
    description: Optional[str] = None
    no_of_pieces: Optional[int] = None
    karat: Optional[int] = None
    net_weight: Optional[Decimal] = None
    wasteage_percentage: Optional[Decimal] = None
    polish_weight: Optional[Decimal] = None
    stone_weight: Optional[Decimal] = None
    ratti: Optional[Decimal] = None
    images: Optional[List[ImageDescriptor]] = None
    # Derived; computed server-side. Present only so a client sending them can be rejected.
    total_weight: Optional[Decimal] = None
    pure_gold: Optional[Decimal] = None

    @field_validator("images", mode="before")
    @classmethod
    def _images(cls, v):
        if v is None:
            return None
        return normalize_images(v)

    @field_validator("karat", "no_of_pieces", mode="before")
    @classmethod
    def _whole_number(cls, v):
        if isinstance(v, bool):
            raise ValueError("must be a whole number, not true/false")
        return v


class InventoryCreate(InventoryInput):
    pass


class InventoryUpdate(InventoryInput):
    """Only fields present in the request body are replaced."""
    pass


class ValuationPreviewRequest(BaseModel):
    net_weight: Optional[Any] = None
    wasteage_percentage: Optional[Any] = None
    polish_weight: Optional[Any] = None
    stone_weight: Optional[Any] = None
    ratti: Optional[Any] = None


class ValuationPreviewResponse(BaseModel):
    total_weight: Decimal
    pure_gold: Decimal


class InventoryResponse(BaseModel):
    id: UUID
    tag_number: str
    item_id: UUID
    item: Optional[ItemRef] = None
    description: Optional[str] = None
    no_of_pieces: int = Field(1, validation_alias=AliasChoices("pieces", "no_of_pieces"))
    karat: int
    net_weight: Decimal
    wasteage_percentage: Decimal
    polish_weight: Decimal
    stone_weight: Decimal
    ratti: Decimal
    total_weight: Decimal
    pure_gold: Decimal
    status: str
    sold_at: Optional[datetime] = None
    images: List[ImageDescriptor] = []
    user_id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("images", mode="before")
    @classmethod
    def _images(cls, v):
        return normalize_images(v)

    class Config:
        from_attributes = True
        populate_by_name = True


class InventoryListResponse(BaseModel):
    items: List[InventoryResponse]
    total: int
