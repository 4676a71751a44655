"""Pytest configuration for Hereoz backend tests."""

import os

# Must be set before hereoz_backend reads its settings
os.environ["TESTING"] = "1"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["NOTIFICATIONS_ENABLED"] = "false"

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

# Configure Hypothesis before importing test modules
from tests.property_based.config import PropertyTestConfig
PropertyTestConfig.configure_hypothesis()

from hereoz_backend.auth.models import User, UserRole
from hereoz_backend.auth.utils import create_access_token, get_password_hash
from hereoz_backend.core.base import Base
from hereoz_backend.core.database import build_engine, get_db
from hereoz_backend.main import app
from hereoz_backend.models.company import Company
from hereoz_backend.models.offer import ContractType, Offer, OfferStatus, RemoteMode
from hereoz_backend.services.notification_service import NotificationService, get_notification_service

import hereoz_backend.models  # noqa: F401

TEST_PASSWORD = "Password123!"


def make_engine():
    """Fresh in-memory SQLite database with every table created."""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture
def engine():
    engine = make_engine()
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Provide a database session bound to the in-memory database."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def notifier():
    """Notification service double recording every email the code asks for."""
    return MagicMock(spec=NotificationService)


@pytest.fixture
def client(db_session, notifier):
    """TestClient wired to the test session and notifier."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notification_service] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()


def create_user(db, email, role=UserRole.CANDIDATE, company=None, **fields):
    user = User(
        email=email,
        hashed_password=get_password_hash(TEST_PASSWORD),
        first_name=fields.pop("first_name", "Test"),
        last_name=fields.pop("last_name", "User"),
        role=role.value,
        company_id=company.id if company else None,
        email_verified=fields.pop("email_verified", True),
        is_active=True,
        **fields
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_offer(db, recruiter, **fields):
    values = dict(
        title="Backend Developer",
        description="Build and run our matching APIs",
        location="Paris",
        contract_type=ContractType.PERMANENT.value,
        remote_mode=RemoteMode.HYBRID.value,
        salary_min=45000,
        salary_max=60000,
        required_skills=["python", "sql", "docker"],
        required_languages=["english"],
        required_experience_years=2,
        status=OfferStatus.ACTIVE.value,
    )
    values.update(fields)
    offer = Offer(company_id=recruiter.company_id, recruiter_id=recruiter.id, **values)
    db.add(offer)
    db.commit()
    db.refresh(offer)
    return offer


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def company(db_session):
    company = Company(name="Acme", email_domain="acme.com")
    db_session.add(company)
    db_session.commit()
    db_session.refresh(company)
    return company


@pytest.fixture
def recruiter(db_session, company):
    return create_user(db_session, "recruiter@acme.com", UserRole.RECRUITER, company, first_name="Rita")


@pytest.fixture
def other_recruiter(db_session):
    other = Company(name="Globex", email_domain="globex.com")
    db_session.add(other)
    db_session.commit()
    return create_user(db_session, "recruiter@globex.com", UserRole.RECRUITER, other)


@pytest.fixture
def company_admin(db_session, company):
    return create_user(db_session, "admin@acme.com", UserRole.COMPANY_ADMIN, company)


@pytest.fixture
def candidate(db_session):
    return create_user(
        db_session,
        "candidate@example.com",
        first_name="Camille",
        last_name="Martin",
        skills=["Python", "SQL"],
        languages=["French", "English"],
        experience_years=3,
        address="12 rue de Rivoli, Paris",
    )


@pytest.fixture
def other_candidate(db_session):
    return create_user(db_session, "other@example.com", first_name="Alex", skills=["Java"])


@pytest.fixture
def offer(db_session, recruiter):
    return create_offer(db_session, recruiter)


@pytest.fixture
def candidate_headers(candidate):
    return auth_headers(candidate)


@pytest.fixture
def recruiter_headers(recruiter):
    return auth_headers(recruiter)


# Pytest markers for organizing tests
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "property_test: mark test as a property-based test"
    )
    config.addinivalue_line(
        "markers", "api: mark test as exercising the HTTP layer"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )


def pytest_collection_modifyitems(config, items):
    """Add markers based on test location."""
    for item in items:
        path = str(item.fspath)
        if "property_based" in path:
            item.add_marker(pytest.mark.property_test)
        elif "_api" in path:
            item.add_marker(pytest.mark.api)
        else:
            item.add_marker(pytest.mark.unit)
