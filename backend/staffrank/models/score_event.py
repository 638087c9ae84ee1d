from sqlalchemy import Column, DateTime, Float, Index, JSON, String
from sqlalchemy.sql import func

from ..platform.database import Base
from ..shared.utils import new_id, utcnow


class ScoreEvent(Base):
    """Append-only ledger row. Never updated or deleted in normal operation."""

    __tablename__ = "score_events"
    __table_args__ = (
        Index("ix_score_events_staff_id_created_at", "staff_id", "created_at"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    staff_id = Column(String, nullable=False, index=True)
    action = Column(String, nullable=False)
    points = Column(Float, nullable=False)
    source = Column(String, nullable=False)
    event_metadata = Column("metadata", JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
