"""
Item and category schemas
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class ItemBase(BaseModel):
    """Catalog item: name plus optional short abbreviation"""
    name: str = Field(..., max_length=255)
    abbreviation: Optional[str] = Field(None, max_length=20, description="Short code printed on tags")


class ItemCreate(ItemBase):
    pass


class ItemUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    abbreviation: Optional[str] = Field(None, max_length=20)


class ItemRef(BaseModel):
    """Item embedded in inventory responses"""
    id: UUID
    name: str
    abbreviation: Optional[str] = None

    class Config:
        from_attributes = True


class ItemResponse(ItemBase):
    id: UUID
    user_id: Optional[UUID] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CategoryBase(BaseModel):
    name: str = Field(..., max_length=100)


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)


class CategoryRef(BaseModel):
    id: UUID
    name: str

    class Config:
        from_attributes = True


class CategoryResponse(CategoryBase):
    id: UUID
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
