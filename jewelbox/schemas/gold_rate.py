"""
Gold rate schemas
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel


class GoldRateCreate(BaseModel):
    rate_24k: Decimal


class KaratRate(BaseModel):
    karat: int
    rate: Decimal


class GoldRateResponse(BaseModel):
    id: UUID
    rate_24k: Decimal
    user_id: Optional[UUID] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class GoldRateWithTable(BaseModel):
    """Latest snapshot plus the derived rate for every karat, 24 down to 1"""
    snapshot: Optional[GoldRateResponse] = None
    karat_rates: List[KaratRate] = []
