from pydantic import Field
from typing import Optional, List
from island_properties.models.content import BlogStatus
from island_properties.schemas.base import CamelModel, PartialUpdate, UTCDateTime


# ─── Testimonials ─────────────────────────────────────────────────────────────

class TestimonialBase(CamelModel):
    name: str = Field(..., min_length=1)
    title: str
    quote: str = Field(..., min_length=1)
    avatar: str
    rating: int = Field(5, ge=1, le=5)


class TestimonialCreate(TestimonialBase):
    pass


class TestimonialUpdate(PartialUpdate):
    NOT_NULLABLE = frozenset({"name", "title", "quote", "avatar", "rating"})

    name: Optional[str] = Field(None, min_length=1)
    title: Optional[str] = None
    quote: Optional[str] = Field(None, min_length=1)
    avatar: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)


class TestimonialResponse(TestimonialBase):
    id: str


# ─── Blog posts ───────────────────────────────────────────────────────────────
# `slug` is never accepted from the client; it is derived from the title.

class BlogPostBase(CamelModel):
    title: str = Field(..., min_length=1)
    content: str
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    category: str
    tags: Optional[List[str]] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    status: BlogStatus = BlogStatus.DRAFT
    publish_date: Optional[UTCDateTime] = None
    author: str = Field(..., min_length=1)


class BlogPostCreate(BlogPostBase):
    pass


class BlogPostUpdate(PartialUpdate):
    NOT_NULLABLE = frozenset({"title", "content", "category", "status", "author"})

    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = None
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    status: Optional[BlogStatus] = None
    publish_date: Optional[UTCDateTime] = None
    author: Optional[str] = Field(None, min_length=1)


class BlogPostResponse(BlogPostBase):
    id: str
    slug: str
    created_at: UTCDateTime
    updated_at: UTCDateTime


# ─── FAQs ─────────────────────────────────────────────────────────────────────

class FAQBase(CamelModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    category: str
    order: int = 0
    is_active: bool = True


class FAQCreate(FAQBase):
    pass


class FAQUpdate(PartialUpdate):
    NOT_NULLABLE = frozenset({"question", "answer", "category", "order", "is_active"})

    question: Optional[str] = Field(None, min_length=1)
    answer: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None


class FAQResponse(FAQBase):
    id: str
    created_at: UTCDateTime
    updated_at: UTCDateTime
