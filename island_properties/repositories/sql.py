"""
repositories/sql.py

Repository backed by the SQLAlchemy models in `island_properties.models`.
Each call opens its own short-lived session from the session factory and
commits before returning, so records handed back are plain pydantic
objects detached from the database.
"""

import enum
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Type

from pydantic import BaseModel as Schema
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from island_properties.core.errors import DuplicateError, NotFoundError
from island_properties.models import (
    FAQ, AdminRole, AdminUser, BlogPost, Property, PropertyCategory, SecurityLog, Testimonial, User,
)
from island_properties.models.base import utcnow
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


def _column_values(values: Dict[str, Any]) -> Dict[str, Any]:
    """Enum members -> their string value, for the String columns."""
    return {k: (v.value if isinstance(v, enum.Enum) else v) for k, v in values.items()}


class SqlRepository(Repository):

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self.session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    # ── Generic helpers ──────────────────────────────────────────────────────

    def _all(self, orm_model, schema: Type[Schema]) -> list:
        with self._session() as db:
            return [schema.model_validate(row) for row in db.scalars(select(orm_model)).all()]

    def _get(self, orm_model, schema: Type[Schema], record_id: str):
        with self._session() as db:
            row = db.get(orm_model, record_id)
            return schema.model_validate(row) if row is not None else None

    def _first_by(self, orm_model, schema: Type[Schema], **filters):
        with self._session() as db:
            row = db.scalars(select(orm_model).filter_by(**filters).limit(1)).first()
            return schema.model_validate(row) if row is not None else None

    def _create(self, orm_model, schema: Type[Schema], values: Dict[str, Any], duplicate_detail: str = ""):
        try:
            with self._session() as db:
                row = orm_model(**_column_values(values))
                db.add(row)
                db.flush()
                db.refresh(row)
                return schema.model_validate(row)
        except IntegrityError:
            raise DuplicateError(duplicate_detail or None)

    def _update(
        self,
        orm_model,
        schema: Type[Schema],
        record_id: str,
        updates: Dict[str, Any],
        not_found_detail: str,
        duplicate_detail: str = "",
    ):
        try:
            with self._session() as db:
                row = db.get(orm_model, record_id)
                if row is None:
                    raise NotFoundError(not_found_detail)
                # Re-validate the merged record before touching the row
                merged = schema.model_validate({**schema.model_validate(row).model_dump(), **updates})
                for key in updates:
                    if key in schema.model_fields and hasattr(row, key):
                        setattr(row, key, _column_values({key: getattr(merged, key)})[key])
                db.flush()
                db.refresh(row)
                return schema.model_validate(row)
        except IntegrityError:
            raise DuplicateError(duplicate_detail or None)

    def _delete(self, orm_model, record_id: str) -> None:
        with self._session() as db:
            row = db.get(orm_model, record_id)
            if row is not None:
                db.delete(row)

    # ── Users ────────────────────────────────────────────────────────────────

    async def get_user(self, user_id: str) -> Optional[UserInDB]:
        return self._get(User, UserInDB, user_id)

    async def get_user_by_username(self, username: str) -> Optional[UserInDB]:
        return self._first_by(User, UserInDB, username=username)

    async def create_user(self, data: UserCreate) -> UserInDB:
        return self._create(
            User, UserInDB, data.model_dump(),
            duplicate_detail=f"Username '{data.username}' is already registered.",
        )

    # ── Properties ───────────────────────────────────────────────────────────

    async def get_all_properties(self) -> List[PropertyResponse]:
        return self._all(Property, PropertyResponse)

    async def get_property(self, property_id: str) -> Optional[PropertyResponse]:
        return self._get(Property, PropertyResponse, property_id)

    async def get_properties_by_category(self, category) -> List[PropertyResponse]:
        with self._session() as db:
            stmt = select(Property).where(Property.category == PropertyCategory(category).value)
            return [PropertyResponse.model_validate(row) for row in db.scalars(stmt).all()]

    async def create_property(self, data: PropertyCreate) -> PropertyResponse:
        return self._create(Property, PropertyResponse, data.model_dump())

    async def update_property(self, property_id: str, updates: Dict[str, Any]) -> PropertyResponse:
        return self._update(Property, PropertyResponse, property_id, updates, "Property not found")

    async def delete_property(self, property_id: str) -> None:
        self._delete(Property, property_id)

    # ── Testimonials ─────────────────────────────────────────────────────────

    async def get_all_testimonials(self) -> List[TestimonialResponse]:
        return self._all(Testimonial, TestimonialResponse)

    async def get_testimonial(self, testimonial_id: str) -> Optional[TestimonialResponse]:
        return self._get(Testimonial, TestimonialResponse, testimonial_id)

    async def create_testimonial(self, data: TestimonialCreate) -> TestimonialResponse:
        return self._create(Testimonial, TestimonialResponse, data.model_dump())

    async def update_testimonial(self, testimonial_id: str, updates: Dict[str, Any]) -> TestimonialResponse:
        return self._update(
            Testimonial, TestimonialResponse, testimonial_id, updates, "Testimonial not found"
        )

    async def delete_testimonial(self, testimonial_id: str) -> None:
        self._delete(Testimonial, testimonial_id)

    # ── Admin users ──────────────────────────────────────────────────────────

    async def get_admin_user(self, admin_id: str) -> Optional[AdminUserInDB]:
        return self._get(AdminUser, AdminUserInDB, admin_id)

    async def get_admin_user_by_email(self, email: str) -> Optional[AdminUserInDB]:
        return self._first_by(AdminUser, AdminUserInDB, email=normalize_email(email))

    async def create_admin_user(
        self, email: str, password_hash: str, role: AdminRole = AdminRole.ADMIN
    ) -> AdminUserInDB:
        email = normalize_email(email)
        now = utcnow()
        return self._create(
            AdminUser,
            AdminUserInDB,
            {
                "email": email,
                "password_hash": password_hash,
                "role": role,
                "login_attempts": 0,
                "locked_until": None,
                "last_login": None,
                "created_at": now,
                "updated_at": now,
            },
            duplicate_detail=f"Email '{email}' is already registered.",
        )

    async def update_admin_user(self, admin_id: str, updates: Dict[str, Any]) -> AdminUserInDB:
        if updates.get("email"):
            updates = {**updates, "email": normalize_email(updates["email"])}
        return self._update(
            AdminUser, AdminUserInDB, admin_id, {**updates, "updated_at": utcnow()},
            "Admin user not found",
            duplicate_detail=f"Email '{updates.get('email')}' is already registered.",
        )

    # ── Blog posts ───────────────────────────────────────────────────────────

    async def get_all_blog_posts(self) -> List[BlogPostResponse]:
        return self._all(BlogPost, BlogPostResponse)

    async def get_blog_post(self, post_id: str) -> Optional[BlogPostResponse]:
        return self._get(BlogPost, BlogPostResponse, post_id)

    async def create_blog_post(self, data: BlogPostCreate) -> BlogPostResponse:
        slug = slug_for_title(data.title)
        now = utcnow()
        return self._create(
            BlogPost,
            BlogPostResponse,
            {**data.model_dump(), "slug": slug, "created_at": now, "updated_at": now},
            duplicate_detail=f"A blog post with slug '{slug}' already exists.",
        )

    async def update_blog_post(self, post_id: str, updates: Dict[str, Any]) -> BlogPostResponse:
        changes = {k: v for k, v in updates.items() if k != "slug"}
        if "title" in changes:
            changes["slug"] = slug_for_title(changes["title"])
        return self._update(
            BlogPost, BlogPostResponse, post_id, {**changes, "updated_at": utcnow()},
            "Blog post not found",
            duplicate_detail=f"A blog post with slug '{changes.get('slug')}' already exists.",
        )

    async def delete_blog_post(self, post_id: str) -> None:
        self._delete(BlogPost, post_id)

    # ── FAQs ─────────────────────────────────────────────────────────────────

    async def get_all_faqs(self) -> List[FAQResponse]:
        return self._all(FAQ, FAQResponse)

    async def get_faq(self, faq_id: str) -> Optional[FAQResponse]:
        return self._get(FAQ, FAQResponse, faq_id)

    async def create_faq(self, data: FAQCreate) -> FAQResponse:
        now = utcnow()
        return self._create(FAQ, FAQResponse, {**data.model_dump(), "created_at": now, "updated_at": now})

    async def update_faq(self, faq_id: str, updates: Dict[str, Any]) -> FAQResponse:
        return self._update(FAQ, FAQResponse, faq_id, {**updates, "updated_at": utcnow()}, "FAQ not found")

    async def delete_faq(self, faq_id: str) -> None:
        self._delete(FAQ, faq_id)

    # ── Security logs ────────────────────────────────────────────────────────

    async def create_security_log(self, data: SecurityLogCreate) -> SecurityLogResponse:
        return self._create(SecurityLog, SecurityLogResponse, {**data.model_dump(), "created_at": utcnow()})

    async def get_security_logs(self, limit: int = DEFAULT_SECURITY_LOG_LIMIT) -> List[SecurityLogResponse]:
        with self._session() as db:
            stmt = select(SecurityLog).order_by(SecurityLog.created_at.desc()).limit(limit)
            return [SecurityLogResponse.model_validate(row) for row in db.scalars(stmt).all()]

    async def close(self) -> None:
        self.session_factory.kw["bind"].dispose()
