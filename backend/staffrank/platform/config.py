from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # Deployment environment
    DEPLOYMENT_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./staffrank.db"

    # Shared dashboard access code. This is a UI convenience gate for the admin
    # screens, not an authentication boundary.
    ADMIN_ACCESS_CODE: str = "APV09"

    # URLs
    FRONTEND_URL: str = "http://localhost:5173"
    BACKEND_URL: str = "http://localhost:8000"
    # Optional comma-separated extra CORS origins for the admin API
    CORS_EXTRA_ORIGINS: Optional[str] = None

    # Avatar storage (local filesystem)
    AVATAR_STORAGE_DIR: str = "./uploads/staff_images"
    AVATAR_PUBLIC_PREFIX: str = "/static/staff_images"
    AVATAR_MAX_BYTES: int = 5 * 1024 * 1024

    # Score API
    SCORE_API_RATE_LIMIT_PER_MINUTE: int = 120
    EVENT_LOG_LIMIT: int = 50

    # Default score for a freshly created editable metric
    DEFAULT_METRIC_SCORE: float = 5.0

    # Sentry
    SENTRY_DSN: Optional[str] = None

    @property
    def is_production(self) -> bool:
        return (self.DEPLOYMENT_ENV or "").strip().lower() == "production"

    @property
    def cors_admin_origins(self) -> list[str]:
        origins = [self.FRONTEND_URL, "http://localhost:5173", "http://localhost:3000"]
        if self.CORS_EXTRA_ORIGINS:
            origins.extend(o.strip() for o in self.CORS_EXTRA_ORIGINS.split(",") if o.strip())
        return [o for o in origins if o]

    model_config = {
        "env_file": ".env",
        "extra": "ignore",
    }


settings = Settings()
