"""Weighted score ledger.

Submission path: token check -> field validation -> action lookup -> insert.
The insert is the only mutating step; it commits atomically or raises
``StorageFailure`` with nothing persisted. Recording token use happens after
the insert and can never fail the submission.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...errors import StorageFailure, ValidationError
from ...models.score_event import ScoreEvent
from ...platform.config import settings
from .tokens import authenticate_token, touch_token_last_used
from .weights import normalize_action, resolve_weight

logger = logging.getLogger(__name__)

Defer = Callable[..., Any]


def _require(value: Optional[str], field: str) -> str:
    cleaned = "" if value is None else str(value).strip()
    if not cleaned:
        raise ValidationError(f"Missing required field: {field}")
    return cleaned


def _validate_override(points_override) -> Optional[float]:
    if points_override is None:
        return None
    try:
        value = float(points_override)
    except (TypeError, ValueError):
        raise ValidationError("points must be a number") from None
    if not math.isfinite(value):
        raise ValidationError("points must be a finite number")
    return value


def _append_event(
    db: Session,
    *,
    staff_id: str,
    action: str,
    source: str,
    metadata: Optional[Dict[str, Any]],
    points_override,
) -> ScoreEvent:
    staff_id = _require(staff_id, "staffId")
    action = normalize_action(_require(action, "action"))
    source = _require(source, "source")
    if metadata is not None and not isinstance(metadata, dict):
        raise ValidationError("metadata must be an object")
    override = _validate_override(points_override)

    weight = resolve_weight(db, action)
    points = override if override is not None else weight

    event = ScoreEvent(
        staff_id=staff_id,
        action=action,
        points=points,
        source=source,
        event_metadata=metadata or {},
    )
    db.add(event)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Failed to create score event staff=%s action=%s: %s", staff_id, action, exc)
        raise StorageFailure(f"Failed to create score event: {exc.__class__.__name__}") from exc
    db.refresh(event)
    logger.info(
        "Score event id=%s staff=%s action=%s points=%s source=%s",
        event.id,
        staff_id,
        action,
        points,
        source,
    )
    return event


def submit_event(
    db: Session,
    *,
    token: Optional[str],
    staff_id: Optional[str],
    action: Optional[str],
    source: Optional[str],
    metadata: Optional[Dict[str, Any]] = None,
    points_override=None,
    defer: Optional[Defer] = None,
) -> ScoreEvent:
    """Append a weighted event on behalf of an API token holder.

    ``defer`` schedules the token ``last_used_at`` update (for example
    ``BackgroundTasks.add_task``); without it the update runs inline.
    """
    api_token = authenticate_token(db, token)
    event = _append_event(
        db,
        staff_id=staff_id,
        action=action,
        source=source,
        metadata=metadata,
        points_override=points_override,
    )
    _record_token_use(api_token.id, defer)
    return event


def record_event(
    db: Session,
    *,
    staff_id: str,
    action: str,
    source: str,
    metadata: Optional[Dict[str, Any]] = None,
    points_override=None,
) -> ScoreEvent:
    """Append a weighted event from the admin dashboard (no API token)."""
    return _append_event(
        db,
        staff_id=staff_id,
        action=action,
        source=source,
        metadata=metadata,
        points_override=points_override,
    )


def read_event_log(
    db: Session,
    *,
    token: Optional[str],
    staff_id: Optional[str],
    limit: Optional[int] = None,
    defer: Optional[Defer] = None,
) -> List[ScoreEvent]:
    api_token = authenticate_token(db, token)
    events = get_event_log(db, _require(staff_id, "staffId"), limit=limit)
    _record_token_use(api_token.id, defer)
    return events


def get_score(db: Session, staff_id: str) -> float:
    """Running total: the plain sum of every event's points."""
    try:
        total = (
            db.query(func.coalesce(func.sum(ScoreEvent.points), 0.0))
            .filter(ScoreEvent.staff_id == staff_id)
            .scalar()
        )
    except SQLAlchemyError as exc:
        raise StorageFailure("Failed to calculate staff score") from exc
    return float(total or 0.0)


def get_event_log(db: Session, staff_id: str, limit: Optional[int] = None) -> List[ScoreEvent]:
    """Newest first, at most ``limit`` events. There is no continuation cursor."""
    limit = settings.EVENT_LOG_LIMIT if limit is None else int(limit)
    if limit <= 0:
        raise ValidationError("limit must be positive")
    try:
        return (
            db.query(ScoreEvent)
            .filter(ScoreEvent.staff_id == staff_id)
            .order_by(ScoreEvent.created_at.desc())
            .limit(limit)
            .all()
        )
    except SQLAlchemyError as exc:
        raise StorageFailure("Failed to get score events") from exc


def _record_token_use(token_id: str, defer: Optional[Defer]) -> None:
    if defer is None:
        touch_token_last_used(token_id)
        return
    try:
        defer(touch_token_last_used, token_id)
    except Exception:
        logger.warning("Could not schedule last_used_at update for token %s", token_id, exc_info=True)
