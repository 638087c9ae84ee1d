from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...components.ledger.tokens import (
    create_api_token,
    delete_api_token,
    list_api_tokens,
    mask_token,
    set_token_active,
)
from ...deps import require_admin
from ...models.api_token import ApiToken
from ...platform.database import get_db
from ...schemas.ledger import (
    ApiTokenCreate,
    ApiTokenCreatedResponse,
    ApiTokenResponse,
    ApiTokenStatusUpdate,
)
from ...shared.utils import ensure_utc

router = APIRouter(prefix="/api-tokens", tags=["API Tokens"], dependencies=[Depends(require_admin)])


def _token_to_response(token: ApiToken) -> ApiTokenResponse:
    return ApiTokenResponse(
        id=token.id,
        name=token.name,
        source=token.source,
        is_active=bool(token.is_active),
        token=mask_token(token),
        created_at=ensure_utc(token.created_at),
        last_used_at=ensure_utc(token.last_used_at),
    )


@router.get("", response_model=List[ApiTokenResponse])
def list_tokens(db: Session = Depends(get_db)):
    return [_token_to_response(t) for t in list_api_tokens(db)]


@router.post("", response_model=ApiTokenCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_token(data: ApiTokenCreate, db: Session = Depends(get_db)):
    issued = create_api_token(db, name=data.name, source=data.source)
    masked = _token_to_response(issued.token)
    return ApiTokenCreatedResponse(**{**masked.model_dump(), "token": issued.secret})


@router.patch("/{token_id}", response_model=ApiTokenResponse)
def update_token_status(token_id: str, data: ApiTokenStatusUpdate, db: Session = Depends(get_db)):
    return _token_to_response(set_token_active(db, token_id, data.is_active))


@router.delete("/{token_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_token(token_id: str, db: Session = Depends(get_db)):
    delete_api_token(db, token_id)
