"""
services/audit.py

Writes the security log. Callers record an entry only after the mutation it
describes has succeeded; failed logins are the one case where the failure
itself is the action.
"""

import enum
from dataclasses import dataclass
from typing import Any, Dict, Optional

from loguru import logger

from island_properties.repositories.base import Repository
from island_properties.schemas.admin import SecurityLogCreate, SecurityLogResponse


class AuditAction(str, enum.Enum):
    LOGIN = "login"
    LOGOUT = "logout"
    FAILED_LOGIN = "failed_login"
    CREATE_PROPERTY = "create_property"
    UPDATE_PROPERTY = "update_property"
    DELETE_PROPERTY = "delete_property"
    BULK_PROPERTY_OPERATION = "bulk_property_operation"
    CREATE_BLOG_POST = "create_blog_post"
    UPDATE_BLOG_POST = "update_blog_post"
    DELETE_BLOG_POST = "delete_blog_post"
    CREATE_TESTIMONIAL = "create_testimonial"
    UPDATE_TESTIMONIAL = "update_testimonial"
    DELETE_TESTIMONIAL = "delete_testimonial"


@dataclass(frozen=True)
class RequestMeta:
    """Where a request came from, as far as the audit trail cares."""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class AuditLogger:

    def __init__(self, repository: Repository):
        self.repository = repository

    async def record(
        self,
        action: AuditAction,
        admin_user_id: Optional[str],
        meta: Optional[RequestMeta] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> SecurityLogResponse:
        meta = meta or RequestMeta()
        entry = await self.repository.create_security_log(
            SecurityLogCreate(
                admin_user_id=admin_user_id,
                action=AuditAction(action).value,
                ip_address=meta.ip_address,
                user_agent=meta.user_agent,
                details=details,
            )
        )
        logger.info(
            "Audit: {action}",
            action=entry.action,
            admin_user_id=admin_user_id,
            ip_address=meta.ip_address,
            log_id=entry.id,
        )
        return entry
