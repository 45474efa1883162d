from fastapi import APIRouter, Depends
from typing import List
from island_properties.api.deps import get_repository
from island_properties.core.errors import NotFoundError
from island_properties.models.content import BlogStatus
from island_properties.repositories.base import Repository
from island_properties.schemas.content import BlogPostResponse, FAQResponse, TestimonialResponse

router = APIRouter(tags=["Content"])


@router.get("/testimonials", response_model=List[TestimonialResponse])
async def list_testimonials(repository: Repository = Depends(get_repository)):
    return await repository.get_all_testimonials()


# ─── BLOG (published posts only) ──────────────────────────────────────────────

@router.get("/blog-posts", response_model=List[BlogPostResponse])
async def list_published_blog_posts(repository: Repository = Depends(get_repository)):
    posts = await repository.get_all_blog_posts()
    return [post for post in posts if post.status == BlogStatus.PUBLISHED]


@router.get("/blog-posts/{post_id}", response_model=BlogPostResponse)
async def get_published_blog_post(post_id: str, repository: Repository = Depends(get_repository)):
    """Drafts and scheduled posts are indistinguishable from missing ones."""
    post = await repository.get_blog_post(post_id)
    if post is None or post.status != BlogStatus.PUBLISHED:
        raise NotFoundError("Blog post not found")
    return post


# ─── FAQ ──────────────────────────────────────────────────────────────────────

@router.get("/faqs", response_model=List[FAQResponse])
async def list_active_faqs(repository: Repository = Depends(get_repository)):
    faqs = await repository.get_all_faqs()
    return sorted((faq for faq in faqs if faq.is_active), key=lambda faq: faq.order)
