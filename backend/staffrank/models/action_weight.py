from sqlalchemy import Column, DateTime, Float, String, Text
from sqlalchemy.sql import func

from ..platform.database import Base
from ..shared.utils import new_id


class ActionWeight(Base):
    __tablename__ = "action_weights"

    id = Column(String(36), primary_key=True, default=new_id)
    action = Column(String, unique=True, index=True, nullable=False)
    weight = Column(Float, nullable=False, default=0)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
