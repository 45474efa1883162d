from fastapi import APIRouter, Depends, Query
from typing import List
from island_properties.api.deps import get_current_admin, get_repository
from island_properties.repositories.base import DEFAULT_SECURITY_LOG_LIMIT, Repository
from island_properties.schemas.admin import AdminUserInDB, DashboardStats, SecurityLogResponse
from island_properties.services.dashboard import build_dashboard_stats

router = APIRouter(tags=["Admin Dashboard"])

MAX_SECURITY_LOG_LIMIT = 500


@router.get("/dashboard/stats", response_model=DashboardStats)
async def dashboard_stats(
    repository: Repository = Depends(get_repository),
    admin: AdminUserInDB = Depends(get_current_admin),
):
    return await build_dashboard_stats(repository)


@router.get("/security-logs", response_model=List[SecurityLogResponse])
async def security_logs(
    limit: int = Query(DEFAULT_SECURITY_LOG_LIMIT, ge=1, le=MAX_SECURITY_LOG_LIMIT),
    repository: Repository = Depends(get_repository),
    admin: AdminUserInDB = Depends(get_current_admin),
):
    """Most recent entries first."""
    return await repository.get_security_logs(limit)
