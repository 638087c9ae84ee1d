from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.sql import func

from ..platform.database import Base
from ..shared.utils import new_id, utcnow


class ApiToken(Base):
    __tablename__ = "api_tokens"

    id = Column(String(36), primary_key=True, default=new_id)
    # Only the SHA-256 digest of the secret is stored; the plaintext is shown once.
    token_hash = Column(String(64), unique=True, index=True, nullable=False)
    token_prefix = Column(String(8), nullable=False)
    name = Column(String, nullable=False)
    source = Column(String, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    last_used_at = Column(DateTime(timezone=True), nullable=True)
