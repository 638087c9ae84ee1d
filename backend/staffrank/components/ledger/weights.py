from __future__ import annotations

import logging
import math
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...errors import NotFound, StorageFailure, UnknownAction, ValidationError
from ...models.action_weight import ActionWeight
from ...shared.utils import utcnow

logger = logging.getLogger(__name__)


def normalize_action(action: Optional[str]) -> str:
    cleaned = (action or "").strip()
    if not cleaned:
        raise ValidationError("Action name is required")
    return cleaned


def list_action_weights(db: Session) -> List[ActionWeight]:
    return db.query(ActionWeight).order_by(ActionWeight.action).all()


def get_action_weight(db: Session, action: str) -> Optional[ActionWeight]:
    try:
        return db.query(ActionWeight).filter(ActionWeight.action == normalize_action(action)).first()
    except SQLAlchemyError as exc:
        raise StorageFailure("Failed to look up action weight") from exc


def resolve_weight(db: Session, action: str) -> float:
    entry = get_action_weight(db, action)
    if entry is None:
        raise UnknownAction(action)
    return float(entry.weight)


def upsert_action_weight(
    db: Session,
    action: str,
    weight: float,
    description: Optional[str] = None,
) -> ActionWeight:
    action = normalize_action(action)
    try:
        weight = float(weight)
    except (TypeError, ValueError):
        raise ValidationError("Weight must be a number") from None
    if not math.isfinite(weight):
        raise ValidationError("Weight must be a finite number")

    entry = get_action_weight(db, action)
    if entry is None:
        entry = ActionWeight(action=action, weight=weight, description=description)
        db.add(entry)
    else:
        entry.weight = weight
        entry.description = description
        entry.updated_at = utcnow()
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Failed to save action weight %s: %s", action, exc)
        raise StorageFailure("Failed to save action weight") from exc
    db.refresh(entry)
    logger.info("Action weight %s=%s", action, weight)
    return entry


def delete_action_weight(db: Session, action: str) -> None:
    entry = get_action_weight(db, action)
    if entry is None:
        raise NotFound(f"Action weight {action} not found")
    db.delete(entry)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageFailure("Failed to delete action weight") from exc
    logger.info("Deleted action weight %s", action)
