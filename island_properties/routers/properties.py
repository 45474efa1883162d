from fastapi import APIRouter, Depends
from typing import List
from island_properties.api.deps import get_repository
from island_properties.core.errors import NotFoundError
from island_properties.models.property import PropertyCategory
from island_properties.repositories.base import Repository
from island_properties.schemas.property import PropertyResponse

router = APIRouter(prefix="/properties", tags=["Properties"])


# ─── PUBLIC LISTINGS ──────────────────────────────────────────────────────────
# Fixed paths are declared before /{property_id}.

@router.get("", response_model=List[PropertyResponse])
async def list_properties(repository: Repository = Depends(get_repository)):
    return await repository.get_all_properties()


@router.get("/hot", response_model=List[PropertyResponse])
async def hot_properties(repository: Repository = Depends(get_repository)):
    return await repository.get_hot_properties()


@router.get("/featured", response_model=List[PropertyResponse])
async def featured_properties(repository: Repository = Depends(get_repository)):
    return await repository.get_featured_properties()


@router.get("/category/{category}", response_model=List[PropertyResponse])
async def properties_by_category(
    category: PropertyCategory,
    repository: Repository = Depends(get_repository),
):
    return await repository.get_properties_by_category(category)


@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(property_id: str, repository: Repository = Depends(get_repository)):
    prop = await repository.get_property(property_id)
    if prop is None:
        raise NotFoundError("Property not found")
    return prop
