# tests/conftest.py
import os
import secrets

# point the app at a throwaway database before anything imports it
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.main import app
from app.organization.models import Organization
from app.region.models import Region
from app.resource_category.models import ResourceCategory
from app.ticket.models import Ticket
from app.user.models import User

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _persist(db, obj):
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@pytest.fixture
def region(db):
    return _persist(db, Region(name="Portland"))


@pytest.fixture
def other_region(db):
    return _persist(db, Region(name="Seattle"))


@pytest.fixture
def resource_category(db):
    return _persist(db, ResourceCategory(name="Water"))


@pytest.fixture
def other_resource_category(db):
    return _persist(db, ResourceCategory(name="Shelter"))


@pytest.fixture
def organization(db):
    return _persist(db, Organization(name="Red Cross", email="help@example.org"))


@pytest.fixture
def other_organization(db):
    return _persist(db, Organization(name="Food Bank"))


@pytest.fixture
def make_ticket(db, region, resource_category):
    def _make(**overrides):
        fields = dict(
            closed=False,
            phone="1-555-666-2244",
            name="fake open ticket",
            organization=None,
            region=region,
            resource_category=resource_category,
        )
        fields.update(overrides)
        return _persist(db, Ticket(**fields))

    return _make


@pytest.fixture
def make_user(db):
    def _make(organization=None, confirmed=True, email=None):
        user = User(
            email=email or f"{secrets.token_hex(4)}@example.org",
            auth_token=secrets.token_hex(16),
            organization=organization,
        )
        if confirmed:
            user.confirm()
        return _persist(db, user)

    return _make


@pytest.fixture
def organization_user(make_user, organization):
    return make_user(organization=organization)


@pytest.fixture
def auth_headers(organization_user):
    return {"Authorization": f"Bearer {organization_user.auth_token}"}
