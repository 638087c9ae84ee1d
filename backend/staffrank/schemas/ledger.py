from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..shared.utils import ensure_utc


class ScoreEventResponse(BaseModel):
    id: str
    staff_id: str
    action: str
    points: float
    source: str
    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("event_metadata", "metadata"),
    )
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class ScoreApiAddRequest(BaseModel):
    """Body of ``POST /score-api/add``. Required fields are checked by the ledger."""

    model_config = ConfigDict(populate_by_name=True)

    staff_id: Optional[str] = Field(default=None, alias="staffId")
    action: Optional[str] = None
    source: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    points: Optional[float] = None


class AdminEventCreate(BaseModel):
    action: str = Field(min_length=1, max_length=200)
    source: str = Field(default="admin", min_length=1, max_length=200)
    metadata: Optional[Dict[str, Any]] = None
    points: Optional[float] = None


class StaffScoreResponse(BaseModel):
    staff_id: str
    score: float
    events: List[ScoreEventResponse]


class ActionWeightUpsert(BaseModel):
    weight: float
    description: Optional[str] = Field(default=None, max_length=2000)


class ActionWeightResponse(BaseModel):
    id: str
    action: str
    weight: float
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


class ApiTokenCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    source: str = Field(min_length=1, max_length=200)


class ApiTokenStatusUpdate(BaseModel):
    is_active: bool


class ApiTokenResponse(BaseModel):
    id: str
    name: str
    source: str
    is_active: bool
    token: str  # masked prefix, never the secret
    created_at: Optional[datetime] = None
    last_used_at: Optional[datetime] = None


class ApiTokenCreatedResponse(ApiTokenResponse):
    """Returned once, at creation. ``token`` holds the full secret."""
