"""
Pytest configuration and shared fixtures.
"""

import pytest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from brokerage.main import app
from brokerage.config import get_settings
from brokerage.db.database import get_db
# Import all models to ensure all tables are created
from brokerage.db.models import (
    Base, Agent, Listing, ListingBroker, FeatureOption, News, NewsLink,
    ContactMessage, NdaSubmission, LeaseApplication
)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: marks integration tests")


# Create a shared test database engine
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override database dependency for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# Override the dependency globally for all tests
app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and drop after."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    """Create database session for test setup."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def admin_headers(client):
    """Bearer header for the configured back-office account."""
    settings = get_settings()
    response = client.post(
        "/api/auth/login",
        json={"username": settings.admin_username, "password": settings.admin_password},
    )
    assert response.status_code == 200
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def agent(db_session):
    """Create a team member."""
    agent = Agent(
        slug="jordan-avery",
        name="Jordan Avery",
        title="Principal Broker",
        email="javery@example.com",
        phone="614-555-0101",
        credentials="CCIM",
        notable_deals=["Sold 48,000 SF flex building"],
        order=0,
    )
    db_session.add(agent)
    db_session.commit()
    db_session.refresh(agent)
    return agent


@pytest.fixture
def investment_listing(db_session, agent):
    """Create a published investment listing with NOI, price and cap rate."""
    listing = Listing(
        slug="1200-commerce-pkwy",
        title="1200 Commerce Pkwy",
        address="1200 Commerce Pkwy",
        city="Columbus",
        state="OH",
        listing_type="For Sale",
        property_type="Retail",
        features=["Drive-Thru", "Corner Lot"],
        noi=120000,
        price=1500000,
        cap_rate=0.08,
        status="Active",
        published=True,
        featured=True,
        financial_doc_path="/docs/commerce-financials.pdf",
    )
    db_session.add(listing)
    db_session.flush()
    db_session.add(ListingBroker(listing_id=listing.id, agent_id=agent.id, position=0))
    db_session.commit()
    db_session.refresh(listing)
    return listing
