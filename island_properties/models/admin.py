from sqlalchemy import Column, String, Integer, JSON, DateTime
from island_properties.models.base import BaseModel, TimestampedModel, utcnow
import enum


class AdminRole(str, enum.Enum):
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class AdminUser(TimestampedModel):
    __tablename__ = "admin_users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), default=AdminRole.ADMIN.value, nullable=False)

    # Lockout bookkeeping
    login_attempts = Column(Integer, default=0, nullable=False)
    locked_until = Column(DateTime(timezone=True), nullable=True)
    last_login = Column(DateTime(timezone=True), nullable=True)


class SecurityLog(BaseModel):
    """Append-only audit trail. Rows are never updated or deleted."""

    __tablename__ = "security_logs"

    admin_user_id = Column(String(36), index=True, nullable=True)  # null for unknown-user failures
    action = Column(String(50), nullable=False)
    ip_address = Column(String(64), nullable=True)
    user_agent = Column(String(500), nullable=True)
    details = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True, nullable=False)
