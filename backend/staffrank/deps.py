"""
Shared request dependencies: the admin access-code gate and bearer token extraction.
"""

import hmac
from typing import Optional

from fastapi import Header

from .errors import Unauthorized
from .platform.config import settings


def is_admin_code(code: Optional[str]) -> bool:
    if not code or not settings.ADMIN_ACCESS_CODE:
        return False
    return hmac.compare_digest(code.strip().encode("utf-8"), settings.ADMIN_ACCESS_CODE.encode("utf-8"))


def require_admin(x_admin_code: Optional[str] = Header(default=None, alias="X-Admin-Code")) -> None:
    """Gate for dashboard writes. The access code is shared, not a user credential."""
    if not is_admin_code(x_admin_code):
        raise Unauthorized("Admin access code required")


def bearer_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, value = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return value.strip() or None


__all__ = ["bearer_token", "is_admin_code", "require_admin"]
