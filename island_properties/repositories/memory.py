"""
repositories/memory.py

Process-local repository: one dict per entity kind keyed by generated id,
plus an append-only list for security logs. Default backend when no
DATABASE_URL is configured; everything is lost on restart.
"""

import itertools
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel

from island_properties.core.errors import DuplicateError, NotFoundError
from island_properties.models.admin import AdminRole
from island_properties.models.base import new_id, utcnow
from island_properties.repositories.base import DEFAULT_SECURITY_LOG_LIMIT, Repository
from island_properties.schemas.admin import AdminUserInDB, SecurityLogCreate, SecurityLogResponse
from island_properties.schemas.content import (
    BlogPostCreate, BlogPostResponse, FAQCreate, FAQResponse,
    TestimonialCreate, TestimonialResponse,
)
from island_properties.schemas.property import PropertyCreate, PropertyResponse
from island_properties.schemas.user import UserCreate, UserInDB
from island_properties.utils.security import normalize_email
from island_properties.utils.slugs import slug_for_title

RecordT = TypeVar("RecordT", bound=BaseModel)


def _merge(model: Type[RecordT], existing: RecordT, updates: Dict[str, Any]) -> RecordT:
    # Shallow merge, re-validated so a bad value never lands in the store
    return model.model_validate({**existing.model_dump(), **updates})


class MemoryRepository(Repository):

    def __init__(self) -> None:
        self.users: Dict[str, UserInDB] = {}
        self.properties: Dict[str, PropertyResponse] = {}
        self.testimonials: Dict[str, TestimonialResponse] = {}
        self.admin_users: Dict[str, AdminUserInDB] = {}
        self.blog_posts: Dict[str, BlogPostResponse] = {}
        self.faqs: Dict[str, FAQResponse] = {}
        self.security_logs: List[tuple] = []  # (sequence, SecurityLogResponse)
        self._sequence = itertools.count()

    # ── Users ────────────────────────────────────────────────────────────────

    async def get_user(self, user_id: str) -> Optional[UserInDB]:
        user = self.users.get(user_id)
        return user.model_copy(deep=True) if user else None

    async def get_user_by_username(self, username: str) -> Optional[UserInDB]:
        for user in self.users.values():
            if user.username == username:
                return user.model_copy(deep=True)
        return None

    async def create_user(self, data: UserCreate) -> UserInDB:
        if await self.get_user_by_username(data.username):
            raise DuplicateError(f"Username '{data.username}' is already registered.")
        user = UserInDB(id=new_id(), **data.model_dump())
        self.users[user.id] = user
        return user.model_copy(deep=True)

    # ── Properties ───────────────────────────────────────────────────────────

    async def get_all_properties(self) -> List[PropertyResponse]:
        return [p.model_copy(deep=True) for p in self.properties.values()]

    async def get_property(self, property_id: str) -> Optional[PropertyResponse]:
        prop = self.properties.get(property_id)
        return prop.model_copy(deep=True) if prop else None

    async def create_property(self, data: PropertyCreate) -> PropertyResponse:
        prop = PropertyResponse(id=new_id(), **data.model_dump())
        self.properties[prop.id] = prop
        return prop.model_copy(deep=True)

    async def update_property(self, property_id: str, updates: Dict[str, Any]) -> PropertyResponse:
        existing = self.properties.get(property_id)
        if existing is None:
            raise NotFoundError("Property not found")
        updated = _merge(PropertyResponse, existing, updates)
        self.properties[property_id] = updated
        return updated.model_copy(deep=True)

    async def delete_property(self, property_id: str) -> None:
        self.properties.pop(property_id, None)

    # ── Testimonials ─────────────────────────────────────────────────────────

    async def get_all_testimonials(self) -> List[TestimonialResponse]:
        return [t.model_copy(deep=True) for t in self.testimonials.values()]

    async def get_testimonial(self, testimonial_id: str) -> Optional[TestimonialResponse]:
        testimonial = self.testimonials.get(testimonial_id)
        return testimonial.model_copy(deep=True) if testimonial else None

    async def create_testimonial(self, data: TestimonialCreate) -> TestimonialResponse:
        testimonial = TestimonialResponse(id=new_id(), **data.model_dump())
        self.testimonials[testimonial.id] = testimonial
        return testimonial.model_copy(deep=True)

    async def update_testimonial(self, testimonial_id: str, updates: Dict[str, Any]) -> TestimonialResponse:
        existing = self.testimonials.get(testimonial_id)
        if existing is None:
            raise NotFoundError("Testimonial not found")
        updated = _merge(TestimonialResponse, existing, updates)
        self.testimonials[testimonial_id] = updated
        return updated.model_copy(deep=True)

    async def delete_testimonial(self, testimonial_id: str) -> None:
        self.testimonials.pop(testimonial_id, None)

    # ── Admin users ──────────────────────────────────────────────────────────

    async def get_admin_user(self, admin_id: str) -> Optional[AdminUserInDB]:
        admin = self.admin_users.get(admin_id)
        return admin.model_copy(deep=True) if admin else None

    async def get_admin_user_by_email(self, email: str) -> Optional[AdminUserInDB]:
        email = normalize_email(email)
        for admin in self.admin_users.values():
            if admin.email == email:
                return admin.model_copy(deep=True)
        return None

    async def create_admin_user(
        self, email: str, password_hash: str, role: AdminRole = AdminRole.ADMIN
    ) -> AdminUserInDB:
        email = normalize_email(email)
        if await self.get_admin_user_by_email(email):
            raise DuplicateError(f"Email '{email}' is already registered.")
        now = utcnow()
        admin = AdminUserInDB(
            id=new_id(),
            email=email,
            password_hash=password_hash,
            role=role,
            login_attempts=0,
            locked_until=None,
            last_login=None,
            created_at=now,
            updated_at=now,
        )
        self.admin_users[admin.id] = admin
        return admin.model_copy(deep=True)

    async def update_admin_user(self, admin_id: str, updates: Dict[str, Any]) -> AdminUserInDB:
        existing = self.admin_users.get(admin_id)
        if existing is None:
            raise NotFoundError("Admin user not found")
        if updates.get("email"):
            updates = {**updates, "email": normalize_email(updates["email"])}
            new_email = updates["email"]
            if new_email != existing.email and await self.get_admin_user_by_email(new_email):
                raise DuplicateError(f"Email '{new_email}' is already registered.")
        updated = _merge(AdminUserInDB, existing, {**updates, "updated_at": utcnow()})
        self.admin_users[admin_id] = updated
        return updated.model_copy(deep=True)

    # ── Blog posts ───────────────────────────────────────────────────────────

    def _ensure_unique_slug(self, slug: str, post_id: Optional[str] = None) -> None:
        for post in self.blog_posts.values():
            if post.slug == slug and post.id != post_id:
                raise DuplicateError(f"A blog post with slug '{slug}' already exists.")

    async def get_all_blog_posts(self) -> List[BlogPostResponse]:
        return [p.model_copy(deep=True) for p in self.blog_posts.values()]

    async def get_blog_post(self, post_id: str) -> Optional[BlogPostResponse]:
        post = self.blog_posts.get(post_id)
        return post.model_copy(deep=True) if post else None

    async def create_blog_post(self, data: BlogPostCreate) -> BlogPostResponse:
        slug = slug_for_title(data.title)
        self._ensure_unique_slug(slug)
        now = utcnow()
        post = BlogPostResponse(
            id=new_id(), slug=slug, created_at=now, updated_at=now, **data.model_dump()
        )
        self.blog_posts[post.id] = post
        return post.model_copy(deep=True)

    async def update_blog_post(self, post_id: str, updates: Dict[str, Any]) -> BlogPostResponse:
        existing = self.blog_posts.get(post_id)
        if existing is None:
            raise NotFoundError("Blog post not found")
        changes = {k: v for k, v in updates.items() if k != "slug"}
        if "title" in changes:
            changes["slug"] = slug_for_title(changes["title"])
            self._ensure_unique_slug(changes["slug"], post_id)
        updated = _merge(BlogPostResponse, existing, {**changes, "updated_at": utcnow()})
        self.blog_posts[post_id] = updated
        return updated.model_copy(deep=True)

    async def delete_blog_post(self, post_id: str) -> None:
        self.blog_posts.pop(post_id, None)

    # ── FAQs ─────────────────────────────────────────────────────────────────

    async def get_all_faqs(self) -> List[FAQResponse]:
        return [f.model_copy(deep=True) for f in self.faqs.values()]

    async def get_faq(self, faq_id: str) -> Optional[FAQResponse]:
        faq = self.faqs.get(faq_id)
        return faq.model_copy(deep=True) if faq else None

    async def create_faq(self, data: FAQCreate) -> FAQResponse:
        now = utcnow()
        faq = FAQResponse(id=new_id(), created_at=now, updated_at=now, **data.model_dump())
        self.faqs[faq.id] = faq
        return faq.model_copy(deep=True)

    async def update_faq(self, faq_id: str, updates: Dict[str, Any]) -> FAQResponse:
        existing = self.faqs.get(faq_id)
        if existing is None:
            raise NotFoundError("FAQ not found")
        updated = _merge(FAQResponse, existing, {**updates, "updated_at": utcnow()})
        self.faqs[faq_id] = updated
        return updated.model_copy(deep=True)

    async def delete_faq(self, faq_id: str) -> None:
        self.faqs.pop(faq_id, None)

    # ── Security logs ────────────────────────────────────────────────────────

    async def create_security_log(self, data: SecurityLogCreate) -> SecurityLogResponse:
        entry = SecurityLogResponse(id=new_id(), created_at=utcnow(), **data.model_dump())
        self.security_logs.append((next(self._sequence), entry))
        return entry.model_copy(deep=True)

    async def get_security_logs(self, limit: int = DEFAULT_SECURITY_LOG_LIMIT) -> List[SecurityLogResponse]:
        # Newest first by timestamp; insertion sequence breaks ties
        ordered = sorted(
            self.security_logs, key=lambda item: (item[1].created_at, item[0]), reverse=True
        )
        return [entry.model_copy(deep=True) for _, entry in ordered[:limit]]
