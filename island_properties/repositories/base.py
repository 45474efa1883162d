"""
Repository contract.

Every entity kind is read and written through this interface so the backing
store (process memory, a SQL database) can be swapped without touching the
services or routers.

Conventions shared by all implementations:
    get_*       -> record or None; a missing id is a value, not an error
    create_*    -> fully materialised record with a fresh id and defaults
    update_*    -> shallow merge of `updates` over the stored record,
                   refreshes updated_at, raises NotFoundError for a missing id
    delete_*    -> idempotent; a missing id is a silent no-op
Security logs are append-only: there is no update or delete for them.
Admin emails are stored and matched case-insensitively (utils.security.normalize_email).
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from island_properties.models.admin import AdminRole
from island_properties.models.property import PropertyCategory
from island_properties.schemas.admin import AdminUserInDB, SecurityLogCreate, SecurityLogResponse
from island_properties.schemas.content import (
    BlogPostCreate, BlogPostResponse, FAQCreate, FAQResponse,
    TestimonialCreate, TestimonialResponse,
)
from island_properties.schemas.property import PropertyCreate, PropertyResponse
from island_properties.schemas.user import UserCreate, UserInDB

DEFAULT_SECURITY_LOG_LIMIT = 50


class Repository(ABC):

    # ── Users ────────────────────────────────────────────────────────────────

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[UserInDB]: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[UserInDB]: ...

    @abstractmethod
    async def create_user(self, data: UserCreate) -> UserInDB: ...

    # ── Properties ───────────────────────────────────────────────────────────

    @abstractmethod
    async def get_all_properties(self) -> List[PropertyResponse]: ...

    @abstractmethod
    async def get_property(self, property_id: str) -> Optional[PropertyResponse]: ...

    @abstractmethod
    async def create_property(self, data: PropertyCreate) -> PropertyResponse: ...

    @abstractmethod
    async def update_property(self, property_id: str, updates: Dict[str, Any]) -> PropertyResponse: ...

    @abstractmethod
    async def delete_property(self, property_id: str) -> None: ...

    async def get_properties_by_category(self, category: PropertyCategory) -> List[PropertyResponse]:
        category = PropertyCategory(category)
        return [p for p in await self.get_all_properties() if p.category == category]

    async def get_featured_properties(self) -> List[PropertyResponse]:
        return [p for p in await self.get_all_properties() if p.is_featured]

    async def get_hot_properties(self) -> List[PropertyResponse]:
        return [p for p in await self.get_all_properties() if p.is_hot]

    # ── Testimonials ─────────────────────────────────────────────────────────

    @abstractmethod
    async def get_all_testimonials(self) -> List[TestimonialResponse]: ...

    @abstractmethod
    async def get_testimonial(self, testimonial_id: str) -> Optional[TestimonialResponse]: ...

    @abstractmethod
    async def create_testimonial(self, data: TestimonialCreate) -> TestimonialResponse: ...

    @abstractmethod
    async def update_testimonial(self, testimonial_id: str, updates: Dict[str, Any]) -> TestimonialResponse: ...

    @abstractmethod
    async def delete_testimonial(self, testimonial_id: str) -> None: ...

    # ── Admin users ──────────────────────────────────────────────────────────

    @abstractmethod
    async def get_admin_user(self, admin_id: str) -> Optional[AdminUserInDB]: ...

    @abstractmethod
    async def get_admin_user_by_email(self, email: str) -> Optional[AdminUserInDB]: ...

    @abstractmethod
    async def create_admin_user(
        self, email: str, password_hash: str, role: AdminRole = AdminRole.ADMIN
    ) -> AdminUserInDB:
        """Raises DuplicateError when the email is taken."""

    @abstractmethod
    async def update_admin_user(self, admin_id: str, updates: Dict[str, Any]) -> AdminUserInDB: ...

    # ── Blog posts ───────────────────────────────────────────────────────────

    @abstractmethod
    async def get_all_blog_posts(self) -> List[BlogPostResponse]: ...

    @abstractmethod
    async def get_blog_post(self, post_id: str) -> Optional[BlogPostResponse]: ...

    @abstractmethod
    async def create_blog_post(self, data: BlogPostCreate) -> BlogPostResponse:
        """Derives the slug from the title. Raises DuplicateError on a slug clash."""

    @abstractmethod
    async def update_blog_post(self, post_id: str, updates: Dict[str, Any]) -> BlogPostResponse:
        """Re-derives the slug when the title changes."""

    @abstractmethod
    async def delete_blog_post(self, post_id: str) -> None: ...

    # ── FAQs ─────────────────────────────────────────────────────────────────

    @abstractmethod
    async def get_all_faqs(self) -> List[FAQResponse]: ...

    @abstractmethod
    async def get_faq(self, faq_id: str) -> Optional[FAQResponse]: ...

    @abstractmethod
    async def create_faq(self, data: FAQCreate) -> FAQResponse: ...

    @abstractmethod
    async def update_faq(self, faq_id: str, updates: Dict[str, Any]) -> FAQResponse: ...

    @abstractmethod
    async def delete_faq(self, faq_id: str) -> None: ...

    # ── Security logs (append-only) ──────────────────────────────────────────

    @abstractmethod
    async def create_security_log(self, data: SecurityLogCreate) -> SecurityLogResponse: ...

    @abstractmethod
    async def get_security_logs(self, limit: int = DEFAULT_SECURITY_LOG_LIMIT) -> List[SecurityLogResponse]:
        """The `limit` most recent entries, newest first, sorted by created_at on every call."""

    async def close(self) -> None:
        """Release backend resources. No-op by default."""
