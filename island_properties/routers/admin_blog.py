from fastapi import APIRouter, Depends, status
from typing import List
from island_properties.api.deps import get_audit_logger, get_current_admin, get_repository, get_request_meta
from island_properties.core.errors import NotFoundError
from island_properties.repositories.base import Repository
from island_properties.schemas.admin import AdminUserInDB, SuccessResponse
from island_properties.schemas.content import BlogPostCreate, BlogPostResponse, BlogPostUpdate
from island_properties.services.audit import AuditAction, AuditLogger, RequestMeta

router = APIRouter(prefix="/blog-posts", tags=["Admin Blog"])


@router.get("", response_model=List[BlogPostResponse])
async def list_blog_posts(
    repository: Repository = Depends(get_repository),
    admin: AdminUserInDB = Depends(get_current_admin),
):
    """Every post regardless of status."""
    return await repository.get_all_blog_posts()


@router.post("", response_model=BlogPostResponse, status_code=status.HTTP_201_CREATED)
async def create_blog_post(
    payload: BlogPostCreate,
    repository: Repository = Depends(get_repository),
    audit: AuditLogger = Depends(get_audit_logger),
    admin: AdminUserInDB = Depends(get_current_admin),
    meta: RequestMeta = Depends(get_request_meta),
):
    post = await repository.create_blog_post(payload)
    await audit.record(AuditAction.CREATE_BLOG_POST, admin.id, meta, {"postId": post.id, "title": post.title})
    return post


@router.put("/{post_id}", response_model=BlogPostResponse)
async def update_blog_post(
    post_id: str,
    payload: BlogPostUpdate,
    repository: Repository = Depends(get_repository),
    audit: AuditLogger = Depends(get_audit_logger),
    admin: AdminUserInDB = Depends(get_current_admin),
    meta: RequestMeta = Depends(get_request_meta),
):
    if await repository.get_blog_post(post_id) is None:
        raise NotFoundError("Blog post not found")

    post = await repository.update_blog_post(post_id, payload.changes())
    await audit.record(AuditAction.UPDATE_BLOG_POST, admin.id, meta, {"postId": post.id, "title": post.title})
    return post


@router.delete("/{post_id}", response_model=SuccessResponse)
async def delete_blog_post(
    post_id: str,
    repository: Repository = Depends(get_repository),
    audit: AuditLogger = Depends(get_audit_logger),
    admin: AdminUserInDB = Depends(get_current_admin),
    meta: RequestMeta = Depends(get_request_meta),
):
    post = await repository.get_blog_post(post_id)
    if post is None:
        raise NotFoundError("Blog post not found")

    await repository.delete_blog_post(post_id)
    await audit.record(AuditAction.DELETE_BLOG_POST, admin.id, meta, {"postId": post.id, "title": post.title})
    return SuccessResponse()
