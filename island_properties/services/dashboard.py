from typing import Dict, Iterable, List

from island_properties.models.property import PropertyCategory
from island_properties.repositories.base import Repository
from island_properties.schemas.admin import ActivityItem, DashboardStats, SecurityLogResponse
from island_properties.schemas.property import PropertyResponse

RECENT_ACTIVITY_LIMIT = 10
UNKNOWN_USER = "Unknown"


def count_by_category(properties: Iterable[PropertyResponse]) -> Dict[PropertyCategory, int]:
    counts = {category: 0 for category in PropertyCategory}
    for prop in properties:
        counts[prop.category] += 1
    return counts


def project_activity(logs: Iterable[SecurityLogResponse], user_names: Dict[str, str]) -> List[ActivityItem]:
    return [
        ActivityItem(
            id=log.id,
            action=log.action,
            timestamp=log.created_at,
            user=user_names.get(log.admin_user_id, UNKNOWN_USER) if log.admin_user_id else UNKNOWN_USER,
        )
        for log in logs
    ]


async def build_dashboard_stats(repository: Repository) -> DashboardStats:
    """Listing totals per category plus the latest security log activity."""
    properties = await repository.get_all_properties()
    logs = await repository.get_security_logs(RECENT_ACTIVITY_LIMIT)

    user_names: Dict[str, str] = {}
    for admin_id in {log.admin_user_id for log in logs if log.admin_user_id}:
        admin = await repository.get_admin_user(admin_id)
        if admin is not None:
            user_names[admin_id] = admin.email

    return DashboardStats(
        total_properties=len(properties),
        properties_by_category=count_by_category(properties),
        recent_activity=project_activity(logs, user_names),
    )
