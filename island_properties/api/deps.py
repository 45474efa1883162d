from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from typing import Optional
from island_properties.repositories.base import Repository
from island_properties.schemas.admin import AdminUserInDB
from island_properties.services.audit import AuditLogger, RequestMeta
from island_properties.services.auth import AuthService

ADMIN_TOKEN_COOKIE = "adminToken"

bearer_scheme = HTTPBearer(auto_error=False)


# ─── Application services (built once in main.lifespan) ──────────────────────

def get_repository(request: Request) -> Repository:
    return request.app.state.repository


def get_audit_logger(request: Request) -> AuditLogger:
    return request.app.state.audit


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth


# ─── Request context ──────────────────────────────────────────────────────────

def get_request_meta(request: Request) -> RequestMeta:
    return RequestMeta(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


async def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """Bearer header first, then the adminToken cookie."""
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(ADMIN_TOKEN_COOKIE)


async def get_current_admin(
    token: Optional[str] = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service),
) -> AdminUserInDB:
    return await auth.validate_request(token)
