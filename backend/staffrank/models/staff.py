from sqlalchemy import Column, DateTime, Float, String
from sqlalchemy.sql import func

from ..platform.database import Base
from ..shared.utils import new_id


class _StaffRowColumns:
    id = Column(String(36), primary_key=True, default=new_id)
    staff_id = Column(String, nullable=False)  # display code, e.g. BDZ-123
    name = Column(String, nullable=False)
    rank = Column(String, nullable=False)
    profile_image_url = Column(String, nullable=True)
    overall_grade = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class _ModeratorMetricColumns:
    responsiveness = Column(Float, nullable=True)
    fairness = Column(Float, nullable=True)
    communication = Column(Float, nullable=True)
    conflict_resolution = Column(Float, nullable=True)
    rule_enforcement = Column(Float, nullable=True)
    engagement = Column(Float, nullable=True)
    supportiveness = Column(Float, nullable=True)
    adaptability = Column(Float, nullable=True)
    objectivity = Column(Float, nullable=True)
    initiative = Column(Float, nullable=True)


class _BuilderOnlyMetricColumns:
    exterior = Column(Float, nullable=True)
    interior = Column(Float, nullable=True)
    decoration = Column(Float, nullable=True)
    effort = Column(Float, nullable=True)
    contribution = Column(Float, nullable=True)
    cooperativeness = Column(Float, nullable=True)
    creativity = Column(Float, nullable=True)
    consistency = Column(Float, nullable=True)


class ModeratorRow(_StaffRowColumns, _ModeratorMetricColumns, Base):
    __tablename__ = "moderators"


class BuilderRow(_StaffRowColumns, _BuilderOnlyMetricColumns, Base):
    __tablename__ = "builders"

    communication = Column(Float, nullable=True)
    adaptability = Column(Float, nullable=True)


class ManagerRow(_StaffRowColumns, _ModeratorMetricColumns, _BuilderOnlyMetricColumns, Base):
    """Managers and Owners. ``role`` distinguishes them; NULL means Manager."""

    __tablename__ = "managers"

    role = Column(String, nullable=True, default="Manager")
