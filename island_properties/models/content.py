from sqlalchemy import Column, String, Integer, Boolean, Text, JSON, DateTime
from island_properties.models.base import BaseModel, TimestampedModel
import enum


class BlogStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    SCHEDULED = "scheduled"


class Testimonial(BaseModel):
    __tablename__ = "testimonials"

    name = Column(String(100), nullable=False)
    title = Column(String(100), nullable=False)
    quote = Column(Text, nullable=False)
    avatar = Column(String(500), nullable=False)
    rating = Column(Integer, default=5, nullable=False)


class BlogPost(TimestampedModel):
    __tablename__ = "blog_posts"

    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    content = Column(Text, nullable=False)
    excerpt = Column(Text, nullable=True)
    featured_image = Column(String(500), nullable=True)
    category = Column(String(100), nullable=False)
    tags = Column(JSON, nullable=True)
    seo_title = Column(String(255), nullable=True)
    seo_description = Column(String(300), nullable=True)
    status = Column(String(20), default=BlogStatus.DRAFT.value, index=True, nullable=False)
    publish_date = Column(DateTime(timezone=True), nullable=True)
    author = Column(String(100), nullable=False)


class FAQ(TimestampedModel):
    __tablename__ = "faqs"

    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    category = Column(String(100), nullable=False)
    order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
