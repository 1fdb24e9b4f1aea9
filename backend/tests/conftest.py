import os
from datetime import datetime, timezone

# Settings are read at import time; pin a hermetic configuration before importing hirelink.
os.environ.setdefault("ENV", "dev")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("IDENTITY_SERVICE_URL", "https://identity.test")
os.environ.setdefault("IDENTITY_SERVICE_API_KEY", "test-service-key")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hirelink.auth.gate import AuthGate
from hirelink.core import config as app_config
from hirelink.core.base import Base
from hirelink.core.database import get_db
from hirelink.core.security import hash_password
from hirelink.dependencies.auth import get_auth_gate

# Import models so they register with SQLAlchemy metadata.
from hirelink.models.account import Account
from hirelink.models.job import Job  # noqa: F401

IDENTITY_USER_URL = "https://identity.test/auth/v1/user"
TEST_API_KEY = "test-service-key"


class FakeIdentityService:
    """
    Stand-in for the identity service's /auth/v1/user endpoint.

    Records every request; answers with ``status_code``/``payload`` unless
    ``error`` is set, in which case that exception is raised as a transport failure.
    """

    def __init__(self) -> None:
        self.calls: list[httpx.Request] = []
        self.status_code = 200
        self.payload: dict | None = {
            "id": "user-123",
            "email": "poster@example.com",
            "aud": "authenticated",
        }
        self.text: str | None = None
        self.error: Exception | None = None

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.payload)


@pytest.fixture()
def identity_service():
    return FakeIdentityService()


@pytest.fixture()
def auth_gate(identity_service):
    client = httpx.AsyncClient(transport=httpx.MockTransport(identity_service.handle))
    return AuthGate(client, user_url=IDENTITY_USER_URL, api_key=TEST_API_KEY)


@pytest.fixture(scope="session")
def db_engine():
    # In-memory SQLite for fast, isolated tests.
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture()
def db_session(db_engine):
    # The in-memory DB persists across tests (StaticPool); reset schema per test.
    Base.metadata.drop_all(bind=db_engine)
    Base.metadata.create_all(bind=db_engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def _reset_mutable_settings():
    """
    Tests sometimes tweak the process-global settings object; restore after each test.
    """
    keys = [
        "ALL_JOBS_UNFILTERED",
        "ALL_JOBS_MAX_AGE_DAYS",
        "LATEST_JOBS_HOURS",
        "JWT_SECRET",
        "ENABLE_RATE_LIMITING",
        "AUTH_RATE_LIMIT",
    ]
    original = {k: getattr(app_config.settings, k) for k in keys}
    try:
        yield
    finally:
        for k, v in original.items():
            setattr(app_config.settings, k, v)


@pytest.fixture()
def app(db_session, auth_gate):
    # Rate limit tests reload hirelink.main, so always resolve the current module attribute.
    import hirelink.main as main

    fastapi_app = main.app

    def override_get_db():
        yield db_session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_auth_gate] = lambda: auth_gate
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def account(db_session):
    acct = Account(
        name="A",
        email="a@x.com",
        department="Eng",
        password_hash=hash_password("pw"),
        is_verified=False,
    )
    db_session.add(acct)
    db_session.commit()
    db_session.refresh(acct)
    return acct


@pytest.fixture()
def now():
    return datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)
