"""Token-gated score API used by external integrations (game servers, bots).

Mounted at ``/score-api`` rather than under ``/api/v1`` so the public URLs
stay stable. Errors render as ``{success: false, error, reason}``.
"""

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session

from ...components.ledger.service import read_event_log, submit_event
from ...deps import bearer_token
from ...platform.database import get_db
from ...schemas.ledger import ScoreApiAddRequest, ScoreEventResponse
from ..errors import SCORE_API_PREFIX

router = APIRouter(prefix=SCORE_API_PREFIX, tags=["Score API"])


def _event_payload(event) -> dict:
    return ScoreEventResponse.model_validate(event).model_dump(mode="json")


@router.post("/add")
def add_score_event(
    background_tasks: BackgroundTasks,
    payload: Optional[ScoreApiAddRequest] = None,
    token: Optional[str] = Depends(bearer_token),
    db: Session = Depends(get_db),
):
    payload = payload or ScoreApiAddRequest()
    event = submit_event(
        db,
        token=token,
        staff_id=payload.staff_id,
        action=payload.action,
        source=payload.source,
        metadata=payload.metadata,
        points_override=payload.points,
        defer=background_tasks.add_task,
    )
    return {"success": True, "event": _event_payload(event)}


@router.get("/log")
def score_event_log(
    background_tasks: BackgroundTasks,
    staff_id: Optional[str] = Query(default=None, alias="staffId"),
    token: Optional[str] = Depends(bearer_token),
    db: Session = Depends(get_db),
):
    events = read_event_log(db, token=token, staff_id=staff_id, defer=background_tasks.add_task)
    return {"success": True, "events": [_event_payload(e) for e in events]}

