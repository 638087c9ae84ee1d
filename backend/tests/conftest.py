import os
import tempfile

# Override DATABASE_URL before any staffrank imports so tests never touch a real database
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["ADMIN_ACCESS_CODE"] = "APV09"
os.environ["DEPLOYMENT_ENV"] = "test"
os.environ["AVATAR_STORAGE_DIR"] = os.path.join(tempfile.gettempdir(), "staffrank-test-avatars")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from staffrank.platform.database import Base, get_db
from staffrank.main import app
from staffrank.platform.middleware import _rate_limit_store
from staffrank.components.ledger.tokens import create_api_token
from staffrank.components.ledger.weights import upsert_action_weight

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_CODE = "APV09"


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    Base.metadata.create_all(bind=engine)
    # Clear in-memory rate limit state between tests to prevent 429 bleed-through
    _rate_limit_store.clear()
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    _rate_limit_store.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def avatar_dir(tmp_path, monkeypatch):
    """Point avatar storage at a per-test directory."""
    from staffrank.platform.config import settings

    monkeypatch.setattr(settings, "AVATAR_STORAGE_DIR", str(tmp_path))
    return tmp_path


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def admin_headers() -> dict:
    return {"X-Admin-Code": ADMIN_CODE}


def bearer(secret: str) -> dict:
    return {"Authorization": f"Bearer {secret}"}


def issue_token(db, name="Game Server", source="minecraft", active=True) -> str:
    """Create an API token directly in the DB. Returns the plaintext secret."""
    issued = create_api_token(db, name=name, source=source)
    if not active:
        issued.token.is_active = False
        db.commit()
    return issued.secret


def register_action(db, action="resolve_ticket", weight=2.5, description=None):
    return upsert_action_weight(db, action, weight, description)


def moderator_payload(**overrides) -> dict:
    payload = {
        "name": "Alex",
        "role": "Moderator",
        "rank": "Mod",
        "metrics": {
            "responsiveness": 9.6,
            "fairness": 9.2,
            "communication": 8.7,
            "conflictResolution": 9.0,
            "ruleEnforcement": 9.5,
            "engagement": 8.8,
            "supportiveness": 9.3,
            "adaptability": 8.9,
            "objectivity": 9.1,
            "initiative": 9.0,
        },
    }
    payload.update(overrides)
    return payload


def create_staff_via_api(client, **overrides):
    """Create a staff member via the admin API. Returns the response."""
    return client.post("/api/v1/staff", json=moderator_payload(**overrides), headers=admin_headers())
