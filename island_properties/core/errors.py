"""Error taxonomy shared by services, repositories and routers."""

from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import status


class IslandPropertiesError(Exception):
    """Base error. Carries the HTTP status it maps to at the boundary."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    def to_body(self) -> Dict[str, Any]:
        return {"detail": self.detail}


class ValidationError(IslandPropertiesError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class DuplicateError(ValidationError):
    """A unique field (admin email, blog slug) is already taken."""

    default_detail = "Record already exists"


class UnauthorizedError(IslandPropertiesError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid credentials"


class AccountLockedError(IslandPropertiesError):
    status_code = status.HTTP_423_LOCKED
    default_detail = "Account is temporarily locked due to multiple failed login attempts"

    def __init__(self, locked_until: datetime, detail: Optional[str] = None):
        self.locked_until = locked_until
        super().__init__(detail)

    def to_body(self) -> Dict[str, Any]:
        return {"detail": self.detail, "lockedUntil": self.locked_until.isoformat()}


class NotFoundError(IslandPropertiesError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"
