import os
import sys
import tempfile
from pathlib import Path

# Keep the default engine and log files out of the home directory
os.environ.setdefault("RATINGS_DATA_DIR", tempfile.mkdtemp(prefix="ratings-test-"))
os.environ.setdefault("JWT_SECRET", "test-secret")

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Now import after path is set
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from database import create_db_engine, get_db
from dependencies import get_clock, get_token_service
from domain.entities import IdentityContext
from domain.value_objects import Role
from main import app
from models import Base, Store, User
from services.access_control import AccessControl
from services.interfaces import IClock
from services.password_service import PasswordService
from services.token_service import TokenService

TEST_PASSWORD = "Secret@123"


class FakeClock(IClock):
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


@pytest.fixture
def engine():
    """Create in-memory database for testing"""
    db_engine = create_db_engine("sqlite://", in_memory=True)
    Base.metadata.create_all(db_engine)
    yield db_engine
    Base.metadata.drop_all(db_engine)
    db_engine.dispose()


@pytest.fixture
def db_session(engine):
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 1, 1, 12, 0, 0))


@pytest.fixture
def token_service(clock):
    return TokenService(secret="test-secret", ttl=timedelta(hours=8), clock=clock)


@pytest.fixture
def access_control(token_service, db_session):
    return AccessControl(token_service, db_session)


@pytest.fixture
def user_password():
    """Plain-text password of every user built by make_user."""
    return TEST_PASSWORD


@pytest.fixture(scope="session")
def password_hash():
    """bcrypt is slow; hash the shared test password once."""
    return PasswordService.hash(TEST_PASSWORD)


@pytest.fixture
def make_user(db_session, clock, password_hash):
    """Factory for committed users."""
    counter = {"n": 0}

    def _make(role: Role = Role.NORMAL, email: str | None = None, name: str | None = None) -> User:
        counter["n"] += 1
        user = User(
            name=name or f"Test {role.value.title()} User Number {counter['n']:03d}",
            email=email or f"{role.value}{counter['n']}@example.com",
            address="1 Test Street",
            password_hash=password_hash,
            role=role.value,
            credential_version=1,
            created_at=clock.now(),
            updated_at=clock.now(),
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make


@pytest.fixture
def make_store(db_session, clock):
    """Factory for committed stores."""
    counter = {"n": 0}

    def _make(owner: User | None = None, name: str | None = None) -> Store:
        counter["n"] += 1
        store = Store(
            name=name or f"Store {counter['n']:03d}",
            email=f"store{counter['n']}@example.com",
            address="2 Market Road",
            owner_id=owner.id if owner else None,
            created_at=clock.now(),
        )
        db_session.add(store)
        db_session.commit()
        return store

    return _make


@pytest.fixture
def identity_of():
    """Build the IdentityContext a fresh credential for user would resolve to."""
    def _identity(user: User) -> IdentityContext:
        return IdentityContext(user_id=user.id, role=Role(user.role), credential_version=user.credential_version)

    return _identity


@pytest.fixture
def auth_headers(token_service):
    """Build an Authorization header for a user."""
    def _headers(user: User) -> dict:
        token = token_service.issue(user.id, Role(user.role), user.credential_version)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def client(engine, clock, token_service):
    """
    TestClient wired to the in-memory database and the fake clock.

    Used without a context manager so the startup lifespan (log files,
    bootstrap admin) does not run.
    """
    SessionLocal = sessionmaker(bind=engine)

    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_token_service] = lambda: token_service
    yield TestClient(app)
    app.dependency_overrides.clear()
