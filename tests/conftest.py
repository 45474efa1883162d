"""Shared pytest fixtures and configuration."""

import os

# Set test environment variables before the settings module is imported
os.environ["DATABASE_URL"] = ""
os.environ["SEED_SAMPLE_DATA"] = "False"
os.environ["SESSION_SWEEP_INTERVAL_SECONDS"] = "0"
os.environ["ADMIN_EMAIL"] = ""
os.environ["ADMIN_PASSWORD"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from island_properties.core.config import settings
from island_properties.core.database import create_session_factory
from island_properties.main import create_app
from island_properties.repositories.memory import MemoryRepository
from island_properties.repositories.seed import create_admin_account
from island_properties.repositories.sql import SqlRepository
from island_properties.schemas.admin import AdminUserCreate
from island_properties.schemas.content import BlogPostCreate
from island_properties.schemas.property import PropertyCreate
from island_properties.services.audit import AuditLogger
from island_properties.services.auth import AuthService
from island_properties.services.sessions import SessionStore

ADMIN_EMAIL = "admin@islandproperties.ph"
ADMIN_PASSWORD = "correct-horse-battery"


def make_property(**overrides) -> PropertyCreate:
    """A valid listing; keyword overrides use snake_case field names."""
    data = {
        "title": "Modern 4-Bedroom Villa with Pool",
        "price": "25000000",
        "location": "Tagbilaran Heights, Bohol",
        "category": "houses",
        "description": "Stunning modern villa.",
        "images": ["https://images.example.com/villa.jpg"],
        "broker_name": "Maria Santos",
        "broker_phone": "+63 917 123 4567",
        "broker_email": "maria@islandproperties.ph",
    }
    data.update(overrides)
    return PropertyCreate.model_validate(data)


def make_blog_post(**overrides) -> BlogPostCreate:
    data = {
        "title": "Market Update: Q3!!",
        "content": "Prices on Panglao kept climbing.",
        "category": "Market",
        "author": "Island Properties Team",
    }
    data.update(overrides)
    return BlogPostCreate.model_validate(data)


@pytest.fixture(params=["memory", "sql"])
async def repository(request):
    """Every repository contract test runs against both backends."""
    if request.param == "memory":
        repo = MemoryRepository()
    else:
        repo = SqlRepository(create_session_factory("sqlite://"))
    yield repo
    await repo.close()


@pytest.fixture
async def admin(repository):
    return await create_admin_account(
        repository, AdminUserCreate(email=ADMIN_EMAIL, password=ADMIN_PASSWORD)
    )


@pytest.fixture
def sessions():
    return SessionStore()


@pytest.fixture
def audit(repository):
    return AuditLogger(repository)


@pytest.fixture
def auth_service(repository, sessions, audit):
    return AuthService(repository, sessions, audit)


# ─── HTTP ─────────────────────────────────────────────────────────────────────

@pytest.fixture
def app_repository():
    return MemoryRepository()


@pytest.fixture
def client(monkeypatch, app_repository):
    """App over a fresh memory store with the bootstrap admin created at startup."""
    monkeypatch.setattr(settings, "ADMIN_EMAIL", ADMIN_EMAIL)
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", ADMIN_PASSWORD)
    app = create_app(app_repository)
    # https so the Secure adminToken cookie is kept by the client
    with TestClient(app, base_url="https://testserver") as test_client:
        yield test_client


@pytest.fixture
def admin_token(client):
    response = client.post(
        "/api/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    client.cookies.clear()
    return response.json()["token"]


@pytest.fixture
def auth_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}
