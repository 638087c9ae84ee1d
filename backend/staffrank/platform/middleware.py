import logging
import time
import uuid
from collections import defaultdict
from typing import Callable, List, Tuple

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response as StarletteResponse

from .config import settings
from .logging import set_request_id

logger = logging.getLogger("staffrank.middleware")

# Sliding one-minute window per bucket: "<bucket>:<ip>" -> request timestamps
_rate_limit_store = defaultdict(list)
_RATE_WINDOW_SEC = 60

# (path prefix, bucket, limit per window). Limits are read on every request.
_RATE_LIMIT_RULES: List[Tuple[str, str, Callable[[], int]]] = [
    ("/score-api", "score_api", lambda: settings.SCORE_API_RATE_LIMIT_PER_MINUTE),
    ("/api/v1/auth/access", "access_code", lambda: 10),
]


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _matching_rule(path: str):
    for prefix, bucket, limit in _RATE_LIMIT_RULES:
        if path.startswith(prefix):
            return bucket, limit()
    return None


class RateLimitMiddleware(BaseHTTPMiddleware):
    """429 when one IP calls the score API or guesses access codes too often."""

    async def dispatch(self, request: Request, call_next):
        rule = None if request.method == "OPTIONS" else _matching_rule(request.url.path)
        if rule is None:
            return await call_next(request)

        bucket, limit = rule
        key = f"{bucket}:{_client_ip(request)}"
        now = time.time()
        recent = [t for t in _rate_limit_store[key] if t > now - _RATE_WINDOW_SEC]
        if len(recent) >= limit:
            _rate_limit_store[key] = recent
            logger.warning("Rate limit exceeded key=%s path=%s", key, request.url.path)
            return JSONResponse(
                status_code=429,
                content={
                    "success": False,
                    "error": "Too many requests. Please try again later.",
                    "reason": "RateLimited",
                },
            )
        recent.append(now)
        _rate_limit_store[key] = recent
        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One log line per request; echoes the request id back to the caller."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        set_request_id(request_id)

        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        if request.url.path != "/health":
            logger.info(
                "%s %s -> %d in %.1fms",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
                extra={"request_id": request_id},
            )
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time-Ms"] = f"{elapsed_ms:.1f}"
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000"
        return response


_SCORE_API_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


class ScoreApiCorsMiddleware(BaseHTTPMiddleware):
    """Open CORS for /score-api (any origin); admin routes keep the stricter CORSMiddleware."""

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith("/score-api"):
            return await call_next(request)
        if request.method == "OPTIONS":
            return StarletteResponse(status_code=200, headers=_SCORE_API_CORS_HEADERS)
        response = await call_next(request)
        response.headers.update(_SCORE_API_CORS_HEADERS)
        return response
