from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
from island_properties.api.deps import get_audit_logger, get_current_admin, get_repository, get_request_meta
from island_properties.core.errors import NotFoundError
from island_properties.models.property import PropertyCategory
from island_properties.repositories.base import Repository
from island_properties.schemas.admin import AdminUserInDB, SuccessResponse
from island_properties.schemas.property import (
    BulkOperationRequest, BulkOperationResponse, PropertyCreate, PropertyResponse, PropertyUpdate,
)
from island_properties.services.audit import AuditAction, AuditLogger, RequestMeta
from island_properties.services.properties import filter_properties, prepare_property_update, run_bulk_operation

router = APIRouter(prefix="/properties", tags=["Admin Properties"])


def _log_details(prop: PropertyResponse) -> dict:
    return {"propertyId": prop.id, "title": prop.title, "category": prop.category.value}


# ─── LIST (with admin filters) ────────────────────────────────────────────────

@router.get("", response_model=List[PropertyResponse])
async def list_properties(
    category: Optional[PropertyCategory] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = Query(None),
    repository: Repository = Depends(get_repository),
    admin: AdminUserInDB = Depends(get_current_admin),
):
    """All listings; `status` may be "featured" or "hot"; `search` matches title, location, description."""
    properties = await repository.get_all_properties()
    return filter_properties(properties, category=category, status=status_filter, search=search)


# ─── BULK ─────────────────────────────────────────────────────────────────────
# Registered before /{property_id} routes so "bulk" is never taken for an id.

@router.post("/bulk", response_model=BulkOperationResponse, response_model_exclude_none=True)
async def bulk_property_operation(
    payload: BulkOperationRequest,
    repository: Repository = Depends(get_repository),
    audit: AuditLogger = Depends(get_audit_logger),
    admin: AdminUserInDB = Depends(get_current_admin),
    meta: RequestMeta = Depends(get_request_meta),
):
    """Apply one action to many listings. Per-id failures are reported, not raised."""
    results = await run_bulk_operation(repository, payload.action, payload.property_ids)

    await audit.record(
        AuditAction.BULK_PROPERTY_OPERATION,
        admin.id,
        meta,
        {
            "action": payload.action.value,
            "propertyIds": payload.property_ids,
            "results": [r.model_dump(by_alias=True, exclude_none=True) for r in results],
        },
    )
    return BulkOperationResponse(results=results)


# ─── CRUD ─────────────────────────────────────────────────────────────────────

@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(
    property_id: str,
    repository: Repository = Depends(get_repository),
    admin: AdminUserInDB = Depends(get_current_admin),
):
    prop = await repository.get_property(property_id)
    if prop is None:
        raise NotFoundError("Property not found")
    return prop


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def create_property(
    payload: PropertyCreate,
    repository: Repository = Depends(get_repository),
    audit: AuditLogger = Depends(get_audit_logger),
    admin: AdminUserInDB = Depends(get_current_admin),
    meta: RequestMeta = Depends(get_request_meta),
):
    prop = await repository.create_property(payload)
    await audit.record(AuditAction.CREATE_PROPERTY, admin.id, meta, _log_details(prop))
    return prop


@router.put("/{property_id}", response_model=PropertyResponse)
async def update_property(
    property_id: str,
    payload: PropertyUpdate,
    repository: Repository = Depends(get_repository),
    audit: AuditLogger = Depends(get_audit_logger),
    admin: AdminUserInDB = Depends(get_current_admin),
    meta: RequestMeta = Depends(get_request_meta),
):
    """Partial update: only the fields sent are changed."""
    existing = await repository.get_property(property_id)
    if existing is None:
        raise NotFoundError("Property not found")

    prop = await repository.update_property(property_id, prepare_property_update(existing, payload))
    await audit.record(AuditAction.UPDATE_PROPERTY, admin.id, meta, _log_details(prop))
    return prop


@router.delete("/{property_id}", response_model=SuccessResponse)
async def delete_property(
    property_id: str,
    repository: Repository = Depends(get_repository),
    audit: AuditLogger = Depends(get_audit_logger),
    admin: AdminUserInDB = Depends(get_current_admin),
    meta: RequestMeta = Depends(get_request_meta),
):
    prop = await repository.get_property(property_id)
    if prop is None:
        raise NotFoundError("Property not found")

    await repository.delete_property(property_id)
    await audit.record(AuditAction.DELETE_PROPERTY, admin.id, meta, _log_details(prop))
    return SuccessResponse()
