"""
Gold rate API routes (reporting only)
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jewelbox.dependencies import get_current_user, get_db
from jewelbox.schemas.gold_rate import GoldRateCreate, GoldRateResponse, GoldRateWithTable
from jewelbox.services import gold_rate_service

router = APIRouter()


@router.get("", response_model=List[GoldRateResponse])
def rate_history(
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    """Snapshots, newest first."""
    return gold_rate_service.rate_history(db, limit=limit)


@router.post("", response_model=GoldRateWithTable, status_code=status.HTTP_201_CREATED)
def record_rate(
    body: GoldRateCreate,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    snapshot = gold_rate_service.record_rate(db, body.rate_24k, user_id=user_id)
    return GoldRateWithTable(
        snapshot=GoldRateResponse.model_validate(snapshot),
        karat_rates=gold_rate_service.karat_table(snapshot),
    )


@router.get("/latest", response_model=GoldRateWithTable)
def latest_rate(
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
):
    """Latest 24k rate and the rate for every karat; empty before the first entry."""
    snapshot = gold_rate_service.latest_rate(db)
    return GoldRateWithTable(
        snapshot=GoldRateResponse.model_validate(snapshot) if snapshot else None,
        karat_rates=gold_rate_service.karat_table(snapshot),
    )
