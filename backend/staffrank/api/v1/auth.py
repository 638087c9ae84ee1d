import logging

from fastapi import APIRouter

from ...deps import is_admin_code
from ...schemas.staff import AccessCodeRequest, AccessCodeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/access", response_model=AccessCodeResponse)
def check_access_code(data: AccessCodeRequest):
    """Dashboard access check.

    Any non-empty code opens the read-only view; only the configured admin
    code unlocks editing. This gates the UI, it does not authenticate anyone.
    """
    code = (data.access_code or "").strip()
    is_admin = is_admin_code(code)
    logger.info("Dashboard access check granted=%s admin=%s", bool(code), is_admin)
    return AccessCodeResponse(access_granted=bool(code), is_admin=is_admin)
