"""Pytest fixtures for API and workflow testing."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from adcert.main import app
from adcert.core.database import get_db
from adcert.core.roles import RoleCode
from adcert.core.security import get_password_hash, create_access_token
from adcert.models.base import Base
from adcert.models.enums import AdvertCategory, GeographicScope, SubmissionStatus
from adcert.models.submission import Submission
from adcert.models.user import User

# In-memory SQLite for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """Override database dependency for testing."""
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Test client with database override."""
    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def make_user(db, email, role, full_name="Test User", company_name=None, password="testpass123"):
    user = User(
        email=email,
        full_name=full_name,
        company_name=company_name,
        password_hash=get_password_hash(password),
        role=role,
        is_verified=True
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def headers_for(user):
    token = create_access_token(user.email, role=user.role.value)
    return {"Authorization": f"Bearer {token}"}


def make_submission(db, advertiser, status=SubmissionStatus.PENDING, **overrides):
    """Insert a submission directly, bypassing the workflow."""
    values = dict(
        advertiser_id=advertiser.user_id,
        brand_name="Sunrise Foods",
        campaign_title="Harmattan Breakfast",
        advert_category=AdvertCategory.TV,
        geographic_scope=GeographicScope.NATIONAL,
        campaign_start_date=date(2024, 2, 1),
        campaign_end_date=date(2024, 4, 30),
        status=status,
    )
    values.update(overrides)
    submission = Submission(**values)
    db.add(submission)
    db.commit()
    db.refresh(submission)
    return submission


@pytest.fixture
def advertiser_user(db_session):
    """Create an advertiser."""
    return make_user(db_session, "advertiser@example.com", RoleCode.ADVERTISER,
                     full_name="Ada Okafor", company_name="Sunrise Foods Ltd")


@pytest.fixture
def other_advertiser(db_session):
    """Create a second advertiser who must not see the first one's work."""
    return make_user(db_session, "other@example.com", RoleCode.ADVERTISER,
                     full_name="Bola Ade", company_name="Bright Media")


@pytest.fixture
def reviewer_user(db_session):
    """Create a reviewer."""
    return make_user(db_session, "reviewer@example.com", RoleCode.REVIEWER,
                     full_name="Chidi Reviewer")


@pytest.fixture
def second_reviewer(db_session):
    return make_user(db_session, "reviewer2@example.com", RoleCode.REVIEWER,
                     full_name="Dayo Reviewer")


@pytest.fixture
def admin_user(db_session):
    """Create an admin user."""
    return make_user(db_session, "admin@example.com", RoleCode.ADMIN,
                     full_name="Admin User", password="admin123")


@pytest.fixture
def advertiser_headers(advertiser_user):
    return headers_for(advertiser_user)


@pytest.fixture
def other_advertiser_headers(other_advertiser):
    return headers_for(other_advertiser)


@pytest.fixture
def reviewer_headers(reviewer_user):
    return headers_for(reviewer_user)


@pytest.fixture
def admin_headers(admin_user):
    """Get authorization headers for admin user."""
    return headers_for(admin_user)


@pytest.fixture
def pending_submission(db_session, advertiser_user):
    """A fresh submission awaiting review."""
    return make_submission(db_session, advertiser_user)


@pytest.fixture
def submission_payload():
    return {
        "brand_name": "Sunrise Foods",
        "campaign_title": "Harmattan Breakfast",
        "advert_category": "tv",
        "geographic_scope": "national",
        "campaign_start_date": "2024-02-01",
        "campaign_end_date": "2024-04-30",
        "creative_materials_urls": ["creatives/harmattan.mp4"],
        "payment_confirmed": True,
    }
