"""
Gold rate service - append-only 24k rate history and the per-karat table.
Reporting only: nothing in valuation or sales reads these rates.
"""
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from jewelbox.exceptions import ValidationError
from jewelbox.models import GoldRateSnapshot
from jewelbox.services import valuation
from jewelbox.services.transaction import read_guard, write_transaction
from jewelbox.utils.numbers import parse_decimal, round_money

logger = logging.getLogger(__name__)


def record_rate(db: Session, rate_24k, user_id: Optional[UUID] = None) -> GoldRateSnapshot:
    rate = parse_decimal(rate_24k)
    if rate is not None:
        rate = round_money(rate)
    if rate is None or rate <= 0:
        raise ValidationError("Please enter a valid gold rate", field="rate_24k")
    snapshot = GoldRateSnapshot(rate_24k=rate, user_id=user_id)
    with write_transaction(db, "Record gold rate"):
        db.add(snapshot)
    db.refresh(snapshot)
    logger.info("Gold rate recorded: 24k=%s by %s", rate, user_id)
    return snapshot


@read_guard("Latest gold rate")
def latest_rate(db: Session) -> Optional[GoldRateSnapshot]:
    return (
        db.query(GoldRateSnapshot)
        .order_by(GoldRateSnapshot.created_at.desc())
        .first()
    )


@read_guard("Gold rate history")
def rate_history(db: Session, limit: int = 50) -> List[GoldRateSnapshot]:
    return (
        db.query(GoldRateSnapshot)
        .order_by(GoldRateSnapshot.created_at.desc())
        .limit(max(1, limit))
        .all()
    )


def karat_table(snapshot: Optional[GoldRateSnapshot]) -> List[dict]:
    """[{karat: 24, rate: ...}, ..., {karat: 1, rate: ...}]; empty without a snapshot."""
    if snapshot is None:
        return []
    return [{"karat": k, "rate": r} for k, r in valuation.karat_rate_table(snapshot.rate_24k)]
