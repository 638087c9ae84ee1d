import os

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from .config import settings


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # Background tasks touch the DB from a worker thread
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}


# DATABASE_PUBLIC_URL lets a local shell reach the hosted database
database_url = os.environ.get("DATABASE_PUBLIC_URL") or settings.DATABASE_URL
if database_url.startswith("postgres://"):
    database_url = database_url.replace("postgres://", "postgresql://", 1)
engine = create_engine(database_url, **_engine_options(database_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Request-scoped session; closed when the response is done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


class Base(DeclarativeBase):
    pass
