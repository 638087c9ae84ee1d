"""API tokens that gate the score API.

The plaintext secret is returned exactly once, from :func:`create_api_token`.
Only its SHA-256 digest is stored, so later reads can show nothing more than
a masked prefix.
"""

from __future__ import annotations

import hashlib
import logging
import secrets
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...errors import NotFound, StorageFailure, Unauthorized, ValidationError
from ...models.api_token import ApiToken
from ...platform.database import SessionLocal
from ...shared.utils import utcnow

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid or inactive API token"
_PREFIX_LEN = 8


@dataclass
class IssuedToken:
    token: ApiToken
    secret: str


def hash_token(secret: str) -> str:
    return hashlib.sha256((secret or "").encode("utf-8")).hexdigest()


def mask_token(token: ApiToken) -> str:
    return f"{token.token_prefix}…"


def create_api_token(db: Session, *, name: str, source: str) -> IssuedToken:
    name = (name or "").strip()
    source = (source or "").strip()
    if not name or not source:
        raise ValidationError("Token name and source are required")

    secret = secrets.token_hex(32)
    token = ApiToken(
        token_hash=hash_token(secret),
        token_prefix=secret[:_PREFIX_LEN],
        name=name,
        source=source,
        is_active=True,
    )
    db.add(token)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Failed to create API token %s: %s", name, exc)
        raise StorageFailure("Failed to create API token") from exc
    db.refresh(token)
    logger.info("Created API token id=%s name=%s source=%s", token.id, name, source)
    return IssuedToken(token=token, secret=secret)


def list_api_tokens(db: Session) -> List[ApiToken]:
    return db.query(ApiToken).order_by(ApiToken.created_at.desc()).all()


def _get_token(db: Session, token_id: str) -> ApiToken:
    token = db.get(ApiToken, token_id)
    if token is None:
        raise NotFound(f"API token {token_id} not found")
    return token


def set_token_active(db: Session, token_id: str, is_active: bool) -> ApiToken:
    token = _get_token(db, token_id)
    token.is_active = bool(is_active)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageFailure("Failed to update token status") from exc
    db.refresh(token)
    logger.info("API token %s %s", token_id, "enabled" if token.is_active else "disabled")
    return token


def delete_api_token(db: Session, token_id: str) -> None:
    token = _get_token(db, token_id)
    db.delete(token)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageFailure("Failed to delete token") from exc
    logger.info("Deleted API token %s", token_id)


def authenticate_token(db: Session, secret: Optional[str]) -> ApiToken:
    """Return the active token matching ``secret``.

    Missing, unknown and disabled tokens all raise the same ``Unauthorized``.
    """
    if not secret:
        raise Unauthorized(INVALID_TOKEN_MESSAGE)
    try:
        token = (
            db.query(ApiToken)
            .filter(ApiToken.token_hash == hash_token(secret), ApiToken.is_active.is_(True))
            .first()
        )
    except SQLAlchemyError as exc:
        raise StorageFailure("Failed to verify API token") from exc
    if token is None:
        logger.warning("Rejected score API call with an invalid or inactive token")
        raise Unauthorized(INVALID_TOKEN_MESSAGE)
    return token


def touch_token_last_used(token_id: str, session_factory=None) -> None:
    """Record token use. Runs after the response; failures are logged and dropped."""
    db = (session_factory or SessionLocal)()
    try:
        token = db.get(ApiToken, token_id)
        if token is not None:
            token.last_used_at = utcnow()
            db.commit()
    except Exception:
        db.rollback()
        logger.warning("Failed to update last_used_at for API token %s", token_id, exc_info=True)
    finally:
        db.close()
