"""
Centralized Test Configuration.
"""

import os

# Keep the app off Postgres/Stripe during import
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")
os.environ.setdefault("SITE_DOMAIN", "http://shop.test")

import pytest
from typing import Dict, List, Optional
from httpx import AsyncClient, ASGITransport
from sqlalchemy.pool import StaticPool

from zapship.app.main import app
from zapship.app.core.exceptions import ProviderUnavailableError, PaymentInitiationError, SessionLookupError
from zapship.app.core.jwt import issue_identity_token
from zapship.app.core.redis_client import get_redis
from zapship.app.db.session import Database, get_db
from zapship.app.models.enums import UserRole
from zapship.app.models.parcel import Parcel
from zapship.app.models.user import User
from zapship.app.models.parcel_enums import ParcelType
from zapship.app.services.payment_gateway import CheckoutSessionInfo, get_payment_gateway

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

test_database = Database(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = test_database.session_factory


# Mock Redis for reliability in CI/CD
class MockRedis:
    def __init__(self):
        self.store = {}
        self._closed = False

    async def ping(self):
        return not self._closed

    async def get(self, key):
        if self._closed:
            return None
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        if self._closed:
            return False
        self.store[key] = value
        return True

    async def delete(self, key):
        if key in self.store:
            del self.store[key]
            return 1
        return 0

    async def exists(self, key):
        if self._closed:
            return 0
        return 1 if key in self.store else 0

    async def flushdb(self):
        self.store = {}

    async def aclose(self):
        self._closed = True
        self.store = {}


class FakeStripeGateway:
    """
    In-memory stand-in for StripeGateway.

    Tests register sessions with ``add_session`` and flip ``unavailable`` to
    simulate an outage.
    """

    def __init__(self):
        self.sessions: Dict[str, CheckoutSessionInfo] = {}
        self.created: List[dict] = []
        self.unavailable = False
        self.retrieve_calls = 0

    def add_session(
        self,
        session_id: str,
        parcel_id,
        parcel_name: str = "Birthday gift",
        amount_total: int = 50000,
        payment_status: str = "paid",
        payment_intent: Optional[str] = "pi_TX1",
        customer_email: str = "sender@test.com",
        currency: str = "bdt",
    ) -> CheckoutSessionInfo:
        session = CheckoutSessionInfo(
            id=session_id,
            payment_intent=payment_intent,
            amount_total=amount_total,
            currency=currency,
            customer_email=customer_email,
            payment_status=payment_status,
            status="complete" if payment_status == "paid" else "open",
            metadata={"parcelId": str(parcel_id), "parcelName": parcel_name},
        )
        self.sessions[session_id] = session
        return session

    async def create_checkout_session(self, **kwargs) -> str:
        if self.unavailable:
            raise PaymentInitiationError()
        self.created.append(kwargs)
        return f"https://checkout.stripe.test/c/pay/cs_test_{len(self.created)}"

    async def retrieve_session(self, session_id: str) -> CheckoutSessionInfo:
        self.retrieve_calls += 1
        if self.unavailable:
            raise ProviderUnavailableError()
        if session_id not in self.sessions:
            raise SessionLookupError(session_id)
        return self.sessions[session_id]


@pytest.fixture(scope="session")
def redis_client_session():
    return MockRedis()


@pytest.fixture
def gateway():
    return FakeStripeGateway()


@pytest.fixture(autouse=True)
def apply_overrides(redis_client_session, gateway):
    async def override_get_db():
        async with TestingSessionLocal() as session:
            yield session

    async def override_get_redis():
        return redis_client_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = override_get_redis
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    yield
    app.dependency_overrides = {}


@pytest.fixture(autouse=True)
async def setup_database(redis_client_session):
    """Create tables before each test function and drop after."""
    await test_database.create_all()
    await redis_client_session.flushdb()

    yield

    await test_database.drop_all()


@pytest.fixture
async def client():
    """Async client for testing."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session():
    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture
def auth_headers():
    """Build bearer headers for an email, as the identity provider would."""
    def _headers(email: str = "sender@test.com", **claims) -> Dict[str, str]:
        token = issue_identity_token(email, **claims)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
async def parcel(db_session):
    """An unpaid parcel costing 500."""
    new_parcel = Parcel(
        parcel_type=ParcelType.NON_DOCUMENT,
        parcel_name="Birthday gift",
        parcel_weight=2.5,
        sender_name="Rahim",
        sender_email="sender@test.com",
        receiver_name="Karim",
        receiver_district="Dhaka",
        cost=500,
    )
    db_session.add(new_parcel)
    await db_session.commit()
    await db_session.refresh(new_parcel)
    return new_parcel


@pytest.fixture
async def admin_headers(db_session, auth_headers):
    """Bearer headers for a stored ADMIN profile."""
    db_session.add(User(email="admin@zapshift.com", display_name="Operator", role=UserRole.ADMIN))
    await db_session.commit()
    return auth_headers("admin@zapshift.com", role=UserRole.ADMIN.value)
