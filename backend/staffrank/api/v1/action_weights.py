from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...components.ledger.weights import (
    delete_action_weight,
    get_action_weight,
    list_action_weights,
    upsert_action_weight,
)
from ...deps import require_admin
from ...errors import NotFound
from ...platform.database import get_db
from ...schemas.ledger import ActionWeightResponse, ActionWeightUpsert

router = APIRouter(prefix="/action-weights", tags=["Action Weights"])


@router.get("", response_model=List[ActionWeightResponse])
def list_weights(db: Session = Depends(get_db)):
    return list_action_weights(db)


@router.get("/{action}", response_model=ActionWeightResponse)
def get_weight(action: str, db: Session = Depends(get_db)):
    entry = get_action_weight(db, action)
    if entry is None:
        raise NotFound(f"Action weight {action} not found")
    return entry


@router.put("/{action}", response_model=ActionWeightResponse)
def put_weight(
    action: str,
    data: ActionWeightUpsert,
    db: Session = Depends(get_db),
    _admin: None = Depends(require_admin),
):
    return upsert_action_weight(db, action, data.weight, data.description)


@router.delete("/{action}", status_code=status.HTTP_204_NO_CONTENT)
def remove_weight(
    action: str,
    db: Session = Depends(get_db),
    _admin: None = Depends(require_admin),
):
    delete_action_weight(db, action)
