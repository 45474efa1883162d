from fastapi import APIRouter, Depends, Response
from typing import Optional
from island_properties.api.deps import (
    ADMIN_TOKEN_COOKIE, get_auth_service, get_current_admin, get_request_meta, get_session_token,
)
from island_properties.core.config import settings
from island_properties.schemas.admin import (
    AdminProfile, AdminUserInDB, AdminUserPublic, LoginRequest, LoginResponse, SuccessResponse,
)
from island_properties.services.audit import RequestMeta
from island_properties.services.auth import AuthService

router = APIRouter(tags=["Admin Auth"])


@router.post("/login", response_model=LoginResponse)
async def admin_login(
    credentials: LoginRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    meta: RequestMeta = Depends(get_request_meta),
):
    """
    Admin login. Wrong password and unknown email get the same 401; five
    consecutive failures lock the account for 15 minutes (423).
    The session token is returned in the body and as an HttpOnly cookie.
    """
    result = await auth.login(
        credentials.email, credentials.password, credentials.remember_me, meta
    )

    ttl = auth.session_ttl_for(credentials.remember_me)
    response.set_cookie(
        key=ADMIN_TOKEN_COOKIE,
        value=result.session.token,
        max_age=int(ttl.total_seconds()),
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )

    return LoginResponse(
        user=AdminUserPublic.model_validate(result.user),
        token=result.session.token,
        expires_at=result.session.expires_at,
    )


@router.post("/logout", response_model=SuccessResponse)
async def admin_logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    admin: AdminUserInDB = Depends(get_current_admin),
    auth: AuthService = Depends(get_auth_service),
    meta: RequestMeta = Depends(get_request_meta),
):
    await auth.logout(token, admin, meta)
    response.delete_cookie(ADMIN_TOKEN_COOKIE, httponly=True, secure=settings.COOKIE_SECURE, samesite="lax")
    return SuccessResponse()


@router.get("/me", response_model=AdminProfile)
async def get_current_admin_info(admin: AdminUserInDB = Depends(get_current_admin)):
    return admin
