from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text

from .api.errors import register_exception_handlers
from .api.v1.action_weights import router as action_weights_router
from .api.v1.api_tokens import router as api_tokens_router
from .api.v1.auth import router as auth_router
from .api.v1.score_api import router as score_api_router
from .api.v1.staff import router as staff_router
from .platform.brand import BRAND_APP_DESCRIPTION, BRAND_NAME
from .platform.config import settings
from .platform.database import engine
from .platform.logging import setup_logging
from .platform.middleware import (
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    ScoreApiCorsMiddleware,
    SecurityHeadersMiddleware,
)

logger = setup_logging()


def _init_sentry() -> None:
    if not (settings.SENTRY_DSN and settings.SENTRY_DSN.startswith("https://")):
        return
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.DEPLOYMENT_ENV,
        traces_sample_rate=0.1,
        integrations=[FastApiIntegration(), SqlalchemyIntegration()],
    )
    logger.info("Sentry enabled")


@asynccontextmanager
async def _lifespan(_app: FastAPI):
    logger.info("%s API started | env=%s", BRAND_NAME, settings.DEPLOYMENT_ENV)
    yield
    logger.info("%s API stopping", BRAND_NAME)


_init_sentry()

# No interactive docs in production
app = FastAPI(
    title=f"{BRAND_NAME} API",
    description=BRAND_APP_DESCRIPTION,
    version="1.0.0",
    docs_url=None if settings.is_production else "/api/docs",
    openapi_url=None if settings.is_production else "/api/openapi.json",
    lifespan=_lifespan,
)
register_exception_handlers(app)

# Middleware runs outermost-last: score API CORS wraps everything so that
# preflights and 429s from the rate limiter carry the open CORS headers.
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_admin_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Admin-Code", "X-Request-ID"],
)
app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(ScoreApiCorsMiddleware)

# Uploaded avatars are served straight from disk
_avatar_dir = Path(settings.AVATAR_STORAGE_DIR)
_avatar_dir.mkdir(parents=True, exist_ok=True)
app.mount(
    settings.AVATAR_PUBLIC_PREFIX.rstrip("/"),
    StaticFiles(directory=str(_avatar_dir)),
    name="staff_images",
)

for _router in (auth_router, staff_router, action_weights_router, api_tokens_router):
    app.include_router(_router, prefix="/api/v1")
app.include_router(score_api_router)


@app.get("/health")
def health_check():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        db_ok = True
    except Exception:
        logger.warning("Health check database probe failed", exc_info=True)
        db_ok = False
    return {
        "status": "healthy" if db_ok else "degraded",
        "service": "staffrank-api",
        "database": db_ok,
    }
