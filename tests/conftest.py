import os

# Settings are read at import time; give the app a test configuration first
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-messmate")

import pytest
from datetime import date, datetime, timedelta, UTC
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from jose import jwt

from messmate.database import get_db, enable_sqlite_foreign_keys
from messmate.models.base import Base
from messmate.config import settings
# Import all model classes to ensure they're registered with SQLAlchemy
from messmate.models.user import User
from messmate.models.tenant import Tenant
from messmate.models.tenant_membership import TenantMembership
from messmate.models.role import TenantRole
from messmate.models.resident import ResidentRow
from messmate.models.meal_record import MealRow
from messmate.models.market_record import MarketRow
from messmate.models.bill_record import BillRow
from messmate.ledger.ephemeral import EphemeralLedgerStore
from messmate.ledger.records import BillRecord, LedgerSnapshot, MarketRecord, MealRecord, Resident
from messmate.services.guest_sessions import guest_sessions
# Import FastAPI app AFTER model imports
from messmate.main import app

# Test database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
event.listen(engine, "connect", enable_sqlite_foreign_keys)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixed reference day so seeded guest ledgers are deterministic
TODAY = date(2026, 10, 19)


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """FastAPI test client with test database"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_guest_sessions():
    """Guest sessions are process-wide; drop them between tests"""
    yield
    guest_sessions.clear()


def create_test_token(user_id: str = "test-user-123", expired: bool = False) -> str:
    """
    Generate valid JWT token for testing.

    Args:
        user_id: Actor id to embed in 'sub' claim
        expired: If True, create expired token

    Returns:
        Encoded JWT token
    """
    if expired:
        exp = datetime.now(UTC) - timedelta(minutes=5)
    else:
        exp = datetime.now(UTC) + timedelta(minutes=15)

    payload = {"sub": user_id, "exp": exp, "iat": datetime.now(UTC)}

    token = jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")
    return token


@pytest.fixture
def mock_jwt_token():
    """Generate valid JWT token"""
    return create_test_token()


@pytest.fixture
def auth_headers(mock_jwt_token):
    """Authorization headers for authenticated requests"""
    return {"Authorization": f"Bearer {mock_jwt_token}"}


@pytest.fixture
def user_a_headers():
    """Authorization headers for user A"""
    token = create_test_token(user_id="user-a")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_b_headers():
    """Authorization headers for user B"""
    token = create_test_token(user_id="user-b")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def test_user(db_session):
    """The actor behind auth_headers"""
    user = User(auth_user_id="test-user-123")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def shared_tenant(db_session):
    tenant = Tenant(name="Green Villa Mess")
    db_session.add(tenant)
    db_session.commit()
    db_session.refresh(tenant)
    return tenant


@pytest.fixture
def owner_membership(db_session, test_user, shared_tenant):
    """test_user owns shared_tenant"""
    membership = TenantMembership(
        tenant_id=shared_tenant.id, user_id=test_user.id, role=TenantRole.OWNER
    )
    db_session.add(membership)
    db_session.commit()
    db_session.refresh(membership)
    return membership


@pytest.fixture
def guest_store():
    """Ephemeral store without sample data"""
    return EphemeralLedgerStore(tenant_id=settings.GUEST_TENANT_ID, seed=False)


@pytest.fixture
def seeded_guest_store():
    """Ephemeral store with the sample ledger for October 2026"""
    return EphemeralLedgerStore(tenant_id=settings.GUEST_TENANT_ID, seed=True, today=TODAY)


def make_snapshot(
    meals: dict[str, int],
    market: dict[str, float],
    day: date = date(2026, 10, 10),
    bills: list[tuple[str, float]] | None = None,
) -> LedgerSnapshot:
    """
    Snapshot with one resident per key in ``meals``.

    Args:
        meals: resident name -> meals eaten on ``day``
        market: resident name -> market spend on ``day``
        day: Date of every meal and market record
        bills: Optional (name, amount) bills dated ``day``
    """
    residents = [
        Resident(id=f"r-{name}", tenant_id="t1", name=name, join_date=date(2026, 1, 1))
        for name in meals
    ]
    meal_records = [
        MealRecord(id=f"m-{name}", tenant_id="t1", resident_id=f"r-{name}", date=day, meal_count=count)
        for name, count in meals.items()
        if count > 0
    ]
    market_records = [
        MarketRecord(
            id=f"k-{name}",
            tenant_id="t1",
            resident_id=f"r-{name}",
            date=day,
            amount=amount,
            description="Groceries",
        )
        for name, amount in market.items()
    ]
    bill_records = [
        BillRecord(id=f"b-{index}", tenant_id="t1", name=name, amount=amount, date=day)
        for index, (name, amount) in enumerate(bills or [])
    ]
    return LedgerSnapshot.build(residents, meal_records, market_records, bill_records)
