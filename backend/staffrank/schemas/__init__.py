from .staff import (
    AccessCodeRequest,
    AccessCodeResponse,
    MetricResponse,
    RemoveStaffResponse,
    StaffCreate,
    StaffResponse,
    StaffUpdate,
)
from .ledger import (
    ActionWeightResponse,
    ActionWeightUpsert,
    AdminEventCreate,
    ApiTokenCreate,
    ApiTokenCreatedResponse,
    ApiTokenResponse,
    ApiTokenStatusUpdate,
    ScoreApiAddRequest,
    ScoreEventResponse,
    StaffScoreResponse,
)

__all__ = [
    "AccessCodeRequest",
    "AccessCodeResponse",
    "MetricResponse",
    "RemoveStaffResponse",
    "StaffCreate",
    "StaffResponse",
    "StaffUpdate",
    "ActionWeightResponse",
    "ActionWeightUpsert",
    "AdminEventCreate",
    "ApiTokenCreate",
    "ApiTokenCreatedResponse",
    "ApiTokenResponse",
    "ApiTokenStatusUpdate",
    "ScoreApiAddRequest",
    "ScoreEventResponse",
    "StaffScoreResponse",
]
