"""
services/properties.py

Admin-side listing logic: filtering the listing table, applying a bulk
action to many ids, and preparing a partial update.
"""

from typing import Any, Dict, Iterable, List, Optional

from loguru import logger

from island_properties.core.errors import IslandPropertiesError, NotFoundError, ValidationError
from island_properties.models.property import PropertyCategory
from island_properties.repositories.base import Repository
from island_properties.schemas.property import (
    BulkAction, BulkResult, PropertyResponse, PropertyUpdate, validate_category_data,
)

STATUS_FEATURED = "featured"
STATUS_HOT = "hot"


def filter_properties(
    properties: Iterable[PropertyResponse],
    category: Optional[PropertyCategory] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
) -> List[PropertyResponse]:
    """
    category: exact match
    status:   "featured" / "hot" keep only flagged listings, anything else is ignored
    search:   case-insensitive substring of title, location or description
    """
    results = list(properties)
    if category:
        category = PropertyCategory(category)
        results = [p for p in results if p.category == category]

    if status == STATUS_FEATURED:
        results = [p for p in results if p.is_featured]
    elif status == STATUS_HOT:
        results = [p for p in results if p.is_hot]

    if search:
        term = search.lower()
        results = [
            p for p in results
            if term in p.title.lower() or term in p.location.lower() or term in p.description.lower()
        ]
    return results


def prepare_property_update(existing: PropertyResponse, update: PropertyUpdate) -> Dict[str, Any]:
    """
    The changes to apply, with categoryData checked against the category the
    listing will have after the update. Changing the category without sending
    a new categoryData clears the old one, since it describes the old category.
    """
    changes = update.changes()
    category_changed = "category" in changes and changes["category"] != existing.category
    if category_changed and "category_data" not in changes:
        changes["category_data"] = None
    elif changes.get("category_data") is not None:
        category = changes.get("category", existing.category)
        try:
            changes["category_data"] = validate_category_data(category, changes["category_data"])
        except ValueError as e:
            raise ValidationError(str(e))
    return changes


_FLAG_UPDATES = {
    BulkAction.FEATURE: {"is_featured": True},
    BulkAction.UNFEATURE: {"is_featured": False},
    BulkAction.HOT: {"is_hot": True},
    BulkAction.UNHOT: {"is_hot": False},
}


async def _apply_bulk_action(repository: Repository, action: BulkAction, property_id: str) -> None:
    if action == BulkAction.DELETE:
        if await repository.get_property(property_id) is None:
            raise NotFoundError("Property not found")
        await repository.delete_property(property_id)
        return
    await repository.update_property(property_id, _FLAG_UPDATES[action])


async def run_bulk_operation(
    repository: Repository, action: BulkAction, property_ids: List[str]
) -> List[BulkResult]:
    """Apply `action` to each id independently; one failure never stops the batch."""
    action = BulkAction(action)
    results: List[BulkResult] = []
    for property_id in property_ids:
        try:
            await _apply_bulk_action(repository, action, property_id)
            results.append(BulkResult(id=property_id, success=True))
        except IslandPropertiesError as e:
            results.append(BulkResult(id=property_id, success=False, error=e.detail))
        except Exception as e:
            logger.exception("Bulk {action} failed", action=action.value, property_id=property_id)
            results.append(BulkResult(id=property_id, success=False, error=str(e) or "Unknown error"))
    return results
