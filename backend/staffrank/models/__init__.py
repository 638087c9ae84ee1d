from .staff import ModeratorRow, BuilderRow, ManagerRow
from .action_weight import ActionWeight
from .api_token import ApiToken
from .score_event import ScoreEvent

__all__ = [
    "ModeratorRow",
    "BuilderRow",
    "ManagerRow",
    "ActionWeight",
    "ApiToken",
    "ScoreEvent",
]
