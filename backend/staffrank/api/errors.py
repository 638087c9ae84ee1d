"""HTTP rendering of domain errors.

The score API answers with ``{success: false, error, reason}`` on every
failure, including request-body validation, which it reports as 400. The admin
API keeps FastAPI's ``{"detail": ...}`` shape and its 422 for invalid bodies.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..errors import StaffRankError

logger = logging.getLogger("staffrank.errors")

SCORE_API_PREFIX = "/score-api"


def is_score_api(request: Request) -> bool:
    return request.url.path.startswith(SCORE_API_PREFIX)


def score_api_error(status_code: int, message: str, reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, "reason": reason},
    )


def _first_problem(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    loc = [str(part) for part in errors[0].get("loc", ()) if part not in ("body", "query")]
    field = ".".join(loc) or "body"
    return f"Invalid {field}: {errors[0].get('msg', 'invalid value')}"


async def handle_staffrank_error(request: Request, exc: StaffRankError):
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.kind, request.method, request.url.path, exc.message)
    else:
        logger.info("%s on %s %s: %s", exc.kind, request.method, request.url.path, exc.message)
    if is_score_api(request):
        return score_api_error(exc.status_code, exc.message, exc.kind)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "reason": exc.kind})


async def handle_validation_error(request: Request, exc: RequestValidationError):
    logger.warning("Validation error on %s %s: %s", request.method, request.url.path, exc.errors())
    if is_score_api(request):
        return score_api_error(400, _first_problem(exc), "ValidationError")
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})


async def handle_http_error(request: Request, exc: StarletteHTTPException):
    # Unknown paths and wrong methods under the score API are both "not found".
    if is_score_api(request) and exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"error": "Endpoint not found"})
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StaffRankError, handle_staffrank_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
