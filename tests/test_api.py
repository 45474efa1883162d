"""End-to-end HTTP tests against the app over an in-memory store."""

import asyncio
import pytest
import uvicorn
from fastapi.testclient import TestClient

from island_properties import main
from island_properties.core.config import settings
from island_properties.main import create_app
from island_properties.schemas.content import FAQCreate
from island_properties.services.auth import MAX_LOGIN_ATTEMPTS
from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD

PROPERTY_PAYLOAD = {
    "title": "Modern 4-Bedroom Villa with Pool",
    "price": "25000000",
    "location": "Tagbilaran Heights, Bohol",
    "category": "houses",
    "description": "Stunning modern villa.",
    "images": ["https://images.example.com/villa.jpg"],
    "brokerName": "Maria Santos",
    "brokerPhone": "+63 917 123 4567",
    "brokerEmail": "maria@islandproperties.ph",
    "categoryData": {"swimmingPool": True},
}

BLOG_PAYLOAD = {
    "title": "Market Update: Q3!!",
    "content": "Prices on Panglao kept climbing.",
    "category": "Market",
    "author": "Island Properties Team",
}


def security_log_actions(client, headers):
    return [log["action"] for log in client.get("/api/admin/security-logs", headers=headers).json()]


# ─── Public ───────────────────────────────────────────────────────────────────

def test_root_and_health(client):
    """Test the service banner and health check."""
    assert client.get("/").json()["status"] == "active"
    assert client.get("/health").json()["status"] == "healthy"


def test_public_property_routes(client, auth_headers):
    """Test public listing, shortcut and detail routes."""
    created = client.post("/api/admin/properties", json={**PROPERTY_PAYLOAD, "isHot": True}, headers=auth_headers).json()

    assert [p["id"] for p in client.get("/api/properties").json()] == [created["id"]]
    assert [p["id"] for p in client.get("/api/properties/hot").json()] == [created["id"]]
    assert client.get("/api/properties/featured").json() == []
    assert [p["id"] for p in client.get("/api/properties/category/houses").json()] == [created["id"]]
    assert client.get("/api/properties/category/beach").json() == []
    assert client.get(f"/api/properties/{created['id']}").json()["brokerName"] == "Maria Santos"


def test_public_property_not_found(client):
    """Test an unknown listing id is a 404."""
    response = client.get("/api/properties/missing")

    assert response.status_code == 404
    assert response.json() == {"detail": "Property not found"}


def test_public_blog_shows_published_only(client, auth_headers):
    """Test drafts are hidden from the public blog but listed for admins."""
    draft = client.post("/api/admin/blog-posts", json={**BLOG_PAYLOAD, "title": "Draft"}, headers=auth_headers).json()
    for title in ("First", "Second"):
        client.post(
            "/api/admin/blog-posts", json={**BLOG_PAYLOAD, "title": title, "status": "published"}, headers=auth_headers
        )

    assert len(client.get("/api/blog-posts").json()) == 2
    assert len(client.get("/api/admin/blog-posts", headers=auth_headers).json()) == 3
    assert client.get(f"/api/blog-posts/{draft['id']}").status_code == 404


def test_public_faqs_active_and_ordered(client, app_repository):
    """Test FAQs are filtered to active ones and sorted by order."""
    for faq in (
        FAQCreate(question="Second?", answer="B", category="General", order=2),
        FAQCreate(question="First?", answer="A", category="General", order=1),
        FAQCreate(question="Hidden?", answer="C", category="General", order=0, is_active=False),
    ):
        asyncio.run(app_repository.create_faq(faq))

    assert [faq["question"] for faq in client.get("/api/faqs").json()] == ["First?", "Second?"]


def test_seeded_app_serves_sample_content(monkeypatch):
    """Test startup seeding fills an empty store."""
    monkeypatch.setattr(settings, "SEED_SAMPLE_DATA", True)
    with TestClient(create_app()) as client:
        categories = {p["category"] for p in client.get("/api/properties").json()}
        assert len(categories) == 6
        assert len(client.get("/api/testimonials").json()) == 3
        assert len(client.get("/api/blog-posts").json()) == 1


# ─── Login / logout ───────────────────────────────────────────────────────────

def test_login_sets_cookie_and_returns_token(client):
    """Test a login returns the session in the body and as a cookie."""
    response = client.post(
        "/api/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD, "rememberMe": True}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["user"]["email"] == ADMIN_EMAIL
    assert body["user"]["role"] == "super_admin"
    assert "passwordHash" not in body["user"]
    assert body["expiresAt"]

    cookie = response.headers["set-cookie"]
    assert f"adminToken={body['token']}" in cookie
    assert "HttpOnly" in cookie
    assert "Secure" in cookie
    assert f"Max-Age={168 * 3600}" in cookie


def test_cookie_authenticates_admin_routes(client):
    """Test the adminToken cookie alone is enough."""
    client.post("/api/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

    response = client.get("/api/admin/me")

    assert response.status_code == 200
    assert response.json()["email"] == ADMIN_EMAIL
    assert response.json()["lastLogin"] is not None


def test_bearer_authenticates_admin_routes(client, auth_headers):
    """Test the Authorization header works without a cookie."""
    assert client.get("/api/admin/me", headers=auth_headers).status_code == 200


@pytest.mark.parametrize(
    "path", ["/api/admin/me", "/api/admin/properties", "/api/admin/dashboard/stats", "/api/admin/security-logs"]
)
def test_admin_routes_require_session(client, path):
    """Test admin routes refuse anonymous requests."""
    response = client.get(path)

    assert response.status_code == 401
    assert response.json() == {"detail": "Unauthorized: No token provided"}
    assert response.headers["www-authenticate"] == "Bearer"


def test_invalid_token_rejected(client):
    """Test a forged token is refused."""
    response = client.get("/api/admin/me", headers={"Authorization": "Bearer forged"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Unauthorized: Invalid or expired session"


def test_login_missing_fields_is_400(client):
    """Test an incomplete login body is a 400."""
    assert client.post("/api/admin/login", json={"email": ADMIN_EMAIL}).status_code == 400


def test_login_wrong_password_then_lockout(client):
    """Test five failures lock the account with 423 and lockedUntil."""
    for _ in range(MAX_LOGIN_ATTEMPTS):
        response = client.post("/api/admin/login", json={"email": ADMIN_EMAIL, "password": "wrong"})
        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid credentials"}

    response = client.post("/api/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

    assert response.status_code == 423
    assert response.json()["lockedUntil"]


def test_logout_revokes_session(client, auth_headers):
    """Test the token stops working after logout and the cookie is cleared."""
    response = client.post("/api/admin/logout", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert 'adminToken=""' in response.headers["set-cookie"]
    assert client.get("/api/admin/me", headers=auth_headers).status_code == 401


# ─── Admin properties ─────────────────────────────────────────────────────────

def test_property_crud_writes_audit_entries(client, auth_headers):
    """Test each successful mutation logs exactly one entry."""
    created = client.post("/api/admin/properties", json=PROPERTY_PAYLOAD, headers=auth_headers)
    assert created.status_code == 201
    property_id = created.json()["id"]

    updated = client.put(f"/api/admin/properties/{property_id}", json={"isFeatured": True}, headers=auth_headers)
    assert updated.status_code == 200
    assert updated.json()["isFeatured"] is True
    assert updated.json()["title"] == PROPERTY_PAYLOAD["title"]

    deleted = client.delete(f"/api/admin/properties/{property_id}", headers=auth_headers)
    assert deleted.json() == {"success": True}

    actions = security_log_actions(client, auth_headers)
    assert sorted(actions) == ["create_property", "delete_property", "login", "update_property"]


def test_failed_mutations_write_no_audit_entry(client, auth_headers):
    """Test 404 and 400 responses leave the log untouched."""
    before = security_log_actions(client, auth_headers)

    assert client.put("/api/admin/properties/missing", json={"isHot": True}, headers=auth_headers).status_code == 404
    assert client.delete("/api/admin/properties/missing", headers=auth_headers).status_code == 404
    assert client.post(
        "/api/admin/properties", json={**PROPERTY_PAYLOAD, "price": "-5"}, headers=auth_headers
    ).status_code == 400
    assert client.put("/api/admin/blog-posts/missing", json={"title": "x"}, headers=auth_headers).status_code == 404

    assert security_log_actions(client, auth_headers) == before


def test_update_rejects_null_required_field(client, auth_headers):
    """Test a required field cannot be nulled over HTTP."""
    property_id = client.post("/api/admin/properties", json=PROPERTY_PAYLOAD, headers=auth_headers).json()["id"]

    response = client.put(f"/api/admin/properties/{property_id}", json={"title": None}, headers=auth_headers)

    assert response.status_code == 400


def test_admin_property_list_filters(client, auth_headers):
    """Test the admin list honours category, status and search."""
    client.post("/api/admin/properties", json={**PROPERTY_PAYLOAD, "isHot": True}, headers=auth_headers)
    client.post(
        "/api/admin/properties",
        json={**PROPERTY_PAYLOAD, "title": "Alona Beach Lot", "category": "beach", "categoryData": None},
        headers=auth_headers,
    )

    def titles(**params):
        response = client.get("/api/admin/properties", params=params, headers=auth_headers)
        return [p["title"] for p in response.json()]

    assert titles(category="beach") == ["Alona Beach Lot"]
    assert titles(status="hot") == [PROPERTY_PAYLOAD["title"]]
    assert titles(search="ALONA") == ["Alona Beach Lot"]
    assert len(titles()) == 2


def test_bulk_operation_reports_per_id_and_logs_once(client, auth_headers):
    """Test bulk delete isolates failures and writes one aggregate entry."""
    a = client.post("/api/admin/properties", json=PROPERTY_PAYLOAD, headers=auth_headers).json()["id"]
    c = client.post("/api/admin/properties", json=PROPERTY_PAYLOAD, headers=auth_headers).json()["id"]

    response = client.post(
        "/api/admin/properties/bulk",
        json={"action": "delete", "propertyIds": [a, "missing", c]},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["results"] == [
        {"id": a, "success": True},
        {"id": "missing", "success": False, "error": "Property not found"},
        {"id": c, "success": True},
    ]
    assert client.get("/api/properties").json() == []

    logs = client.get("/api/admin/security-logs", headers=auth_headers).json()
    bulk_logs = [log for log in logs if log["action"] == "bulk_property_operation"]
    assert len(bulk_logs) == 1
    assert bulk_logs[0]["details"]["propertyIds"] == [a, "missing", c]
    assert len(bulk_logs[0]["details"]["results"]) == 3


def test_bulk_unknown_action_is_400(client, auth_headers):
    """Test an unsupported bulk action is rejected."""
    response = client.post(
        "/api/admin/properties/bulk", json={"action": "archive", "propertyIds": ["x"]}, headers=auth_headers
    )

    assert response.status_code == 400


# ─── Admin blog & testimonials ────────────────────────────────────────────────

def test_blog_post_slug_and_rename(client, auth_headers):
    """Test the slug is derived on create and follows a title change."""
    post = client.post("/api/admin/blog-posts", json=BLOG_PAYLOAD, headers=auth_headers).json()
    assert post["slug"] == "market-update-q3"

    renamed = client.put(
        f"/api/admin/blog-posts/{post['id']}", json={"title": "Market Update: Q4"}, headers=auth_headers
    ).json()
    assert renamed["slug"] == "market-update-q4"

    duplicate = client.post(
        "/api/admin/blog-posts", json={**BLOG_PAYLOAD, "title": "Market Update Q4"}, headers=auth_headers
    )
    assert duplicate.status_code == 400


def test_blog_post_title_without_letters_or_digits(client, auth_headers):
    """Test a symbol-only title is a 400 every time, never a stored empty slug."""
    for _ in range(2):
        response = client.post("/api/admin/blog-posts", json={**BLOG_PAYLOAD, "title": "!!!"}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json() == {"detail": "Title must contain at least one letter or digit"}

    assert client.get("/api/admin/blog-posts", headers=auth_headers).json() == []


def test_testimonial_crud(client, auth_headers):
    """Test testimonial management and its audit trail."""
    created = client.post(
        "/api/admin/testimonials",
        json={"name": "Sarah Johnson", "title": "Investor", "quote": "Great", "avatar": "a.png"},
        headers=auth_headers,
    )
    assert created.status_code == 201
    testimonial_id = created.json()["id"]

    updated = client.put(f"/api/admin/testimonials/{testimonial_id}", json={"rating": 4}, headers=auth_headers)
    assert updated.json()["rating"] == 4

    assert client.delete(f"/api/admin/testimonials/{testimonial_id}", headers=auth_headers).json() == {"success": True}
    assert client.get("/api/testimonials").json() == []

    actions = security_log_actions(client, auth_headers)
    assert {"create_testimonial", "update_testimonial", "delete_testimonial"} <= set(actions)


# ─── Dashboard & security logs ────────────────────────────────────────────────

def test_dashboard_stats(client, auth_headers):
    """Test the dashboard payload shape."""
    client.post("/api/admin/properties", json=PROPERTY_PAYLOAD, headers=auth_headers)

    stats = client.get("/api/admin/dashboard/stats", headers=auth_headers).json()

    assert stats["totalProperties"] == 1
    assert stats["propertiesByCategory"]["houses"] == 1
    assert stats["propertiesByCategory"]["beach"] == 0
    assert {item["user"] for item in stats["recentActivity"]} == {ADMIN_EMAIL}


@pytest.mark.parametrize("limit", [0, 501])
def test_security_log_limit_bounds(client, auth_headers, limit):
    """Test the limit parameter is bounded."""
    response = client.get("/api/admin/security-logs", params={"limit": limit}, headers=auth_headers)

    assert response.status_code == 400


def test_unhandled_error_is_generic_500(app_repository, monkeypatch):
    """Test unexpected errors never leak their message."""

    async def explode():
        raise RuntimeError("database password is hunter2")

    monkeypatch.setattr(app_repository, "get_all_properties", explode)
    with TestClient(create_app(app_repository), raise_server_exceptions=False) as client:
        response = client.get("/api/properties")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


# ─── Startup ──────────────────────────────────────────────────────────────────

def test_mixed_case_bootstrap_email_logs_in_across_restarts(monkeypatch, app_repository):
    """Test the configured admin email is matched regardless of case on every start."""
    monkeypatch.setattr(settings, "ADMIN_EMAIL", "Admin@IslandProperties.PH")
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", ADMIN_PASSWORD)

    for _ in range(2):
        with TestClient(create_app(app_repository), base_url="https://testserver") as client:
            response = client.post(
                "/api/admin/login", json={"email": "Admin@IslandProperties.PH", "password": ADMIN_PASSWORD}
            )
            assert response.status_code == 200
            assert response.json()["user"]["email"] == ADMIN_EMAIL

    assert len(app_repository.admin_users) == 1


def test_run_serves_app_with_configured_address(monkeypatch):
    """Test the console entry point hands the app to uvicorn."""
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(settings, "HOST", "127.0.0.1")
    monkeypatch.setattr(settings, "PORT", 8123)

    main.run()

    assert len(calls) == 1
    app, kwargs = calls[0]
    assert app == "island_properties.main:app"
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 8123
