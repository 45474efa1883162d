from fastapi import APIRouter, Depends, status
from typing import List
from island_properties.api.deps import get_audit_logger, get_current_admin, get_repository, get_request_meta
from island_properties.core.errors import NotFoundError
from island_properties.repositories.base import Repository
from island_properties.schemas.admin import AdminUserInDB, SuccessResponse
from island_properties.schemas.content import TestimonialCreate, TestimonialResponse, TestimonialUpdate
from island_properties.services.audit import AuditAction, AuditLogger, RequestMeta

router = APIRouter(prefix="/testimonials", tags=["Admin Testimonials"])


async def _get_or_404(repository: Repository, testimonial_id: str) -> TestimonialResponse:
    testimonial = await repository.get_testimonial(testimonial_id)
    if testimonial is None:
        raise NotFoundError("Testimonial not found")
    return testimonial


@router.get("", response_model=List[TestimonialResponse])
async def list_testimonials(
    repository: Repository = Depends(get_repository),
    admin: AdminUserInDB = Depends(get_current_admin),
):
    return await repository.get_all_testimonials()


@router.post("", response_model=TestimonialResponse, status_code=status.HTTP_201_CREATED)
async def create_testimonial(
    payload: TestimonialCreate,
    repository: Repository = Depends(get_repository),
    audit: AuditLogger = Depends(get_audit_logger),
    admin: AdminUserInDB = Depends(get_current_admin),
    meta: RequestMeta = Depends(get_request_meta),
):
    testimonial = await repository.create_testimonial(payload)
    await audit.record(
        AuditAction.CREATE_TESTIMONIAL, admin.id, meta,
        {"testimonialId": testimonial.id, "name": testimonial.name},
    )
    return testimonial


@router.put("/{testimonial_id}", response_model=TestimonialResponse)
async def update_testimonial(
    testimonial_id: str,
    payload: TestimonialUpdate,
    repository: Repository = Depends(get_repository),
    audit: AuditLogger = Depends(get_audit_logger),
    admin: AdminUserInDB = Depends(get_current_admin),
    meta: RequestMeta = Depends(get_request_meta),
):
    await _get_or_404(repository, testimonial_id)
    testimonial = await repository.update_testimonial(testimonial_id, payload.changes())
    await audit.record(
        AuditAction.UPDATE_TESTIMONIAL, admin.id, meta,
        {"testimonialId": testimonial.id, "name": testimonial.name},
    )
    return testimonial


@router.delete("/{testimonial_id}", response_model=SuccessResponse)
async def delete_testimonial(
    testimonial_id: str,
    repository: Repository = Depends(get_repository),
    audit: AuditLogger = Depends(get_audit_logger),
    admin: AdminUserInDB = Depends(get_current_admin),
    meta: RequestMeta = Depends(get_request_meta),
):
    testimonial = await _get_or_404(repository, testimonial_id)
    await repository.delete_testimonial(testimonial_id)
    await audit.record(
        AuditAction.DELETE_TESTIMONIAL, admin.id, meta,
        {"testimonialId": testimonial.id, "name": testimonial.name},
    )
    return SuccessResponse()
