from pydantic import EmailStr, Field
from typing import Optional, List, Dict, Any
from island_properties.models.admin import AdminRole
from island_properties.models.property import PropertyCategory
from island_properties.schemas.base import CamelModel, UTCDateTime


# ─── Admin users ──────────────────────────────────────────────────────────────

class AdminUserCreate(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: AdminRole = AdminRole.ADMIN


class AdminUserInDB(CamelModel):
    """Full stored record. Never returned to clients as-is."""

    id: str
    email: str
    password_hash: str
    role: AdminRole = AdminRole.ADMIN
    login_attempts: int = 0
    locked_until: Optional[UTCDateTime] = None
    last_login: Optional[UTCDateTime] = None
    created_at: UTCDateTime
    updated_at: UTCDateTime


class AdminUserPublic(CamelModel):
    id: str
    email: str
    role: AdminRole


class AdminProfile(AdminUserPublic):
    last_login: Optional[UTCDateTime] = None


# ─── Login / logout ───────────────────────────────────────────────────────────

class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    remember_me: bool = False


class LoginResponse(CamelModel):
    success: bool = True
    user: AdminUserPublic
    token: str
    expires_at: UTCDateTime


class SuccessResponse(CamelModel):
    success: bool = True


# ─── Security logs ────────────────────────────────────────────────────────────

class SecurityLogCreate(CamelModel):
    admin_user_id: Optional[str] = None
    action: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class SecurityLogResponse(SecurityLogCreate):
    id: str
    created_at: UTCDateTime


# ─── Dashboard ────────────────────────────────────────────────────────────────

class ActivityItem(CamelModel):
    id: str
    action: str
    timestamp: UTCDateTime
    user: str


class DashboardStats(CamelModel):
    total_properties: int
    properties_by_category: Dict[PropertyCategory, int]
    recent_activity: List[ActivityItem]
