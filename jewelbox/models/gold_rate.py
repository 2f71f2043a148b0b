"""
Gold rate history (24 karat reference rate)
"""
import uuid

from sqlalchemy import CheckConstraint, Column, Numeric, Uuid
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

from jewelbox.database import Base
from jewelbox.models._common import utcnow


class GoldRateSnapshot(Base):
    """
    Append-only. The newest row is the current rate; older rows are history.
    """
    __tablename__ = "gold_rates"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    rate_24k = Column(Numeric(14, 2), nullable=False)
    user_id = Column(Uuid)
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now(), index=True)

    __table_args__ = (
        CheckConstraint("rate_24k > 0", name="gold_rate_positive"),
    )
