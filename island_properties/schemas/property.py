import enum
from decimal import Decimal, InvalidOperation
from pydantic import ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from typing import Optional, List, Dict, Any, Type
from island_properties.models.property import PropertyCategory
from island_properties.schemas.base import CamelModel, PartialUpdate


# ─── Category-specific data ───────────────────────────────────────────────────
# Each category carries its own bag of attributes. Known keys are typed;
# anything else the admin panel sends is kept as-is.

class CategoryData(CamelModel):
    model_config = ConfigDict(extra="allow")


class HouseData(CategoryData):
    lot_size_sqm: Optional[float] = None
    parking_spaces: Optional[int] = None
    stories: Optional[int] = None
    kitchen_type: Optional[str] = None
    flooring: Optional[str] = None
    air_conditioning: Optional[str] = None
    security_features: Optional[List[str]] = None
    outdoor_space: Optional[str] = None
    swimming_pool: Optional[bool] = None
    balcony_terrace: Optional[str] = None
    property_tax: Optional[str] = None
    hoa_fees: Optional[str] = None


class LandData(CategoryData):
    total_area_sqm: Optional[float] = None
    total_area_hectares: Optional[float] = None
    land_classification: Optional[str] = None
    topography: Optional[str] = None
    road_access: Optional[str] = None
    utilities_water: Optional[str] = None
    utilities_electricity: Optional[str] = None
    utilities_internet: Optional[str] = None
    zoning: Optional[str] = None
    soil_type: Optional[str] = None
    flood_history: Optional[str] = None
    development_potential: Optional[str] = None
    restrictions: Optional[str] = None
    nearby_amenities: Optional[str] = None
    environmental_clearance: Optional[str] = None


class CondoData(CategoryData):
    floor_level: Optional[str] = None
    building_name: Optional[str] = None
    parking_slots: Optional[int] = None
    association_dues: Optional[str] = None
    maintenance_fees: Optional[str] = None
    building_amenities: Optional[List[str]] = None
    security: Optional[str] = None
    elevators: Optional[str] = None
    view_type: Optional[str] = None
    balcony: Optional[str] = None
    furnished_status: Optional[str] = None
    pet_policy: Optional[str] = None
    building_age: Optional[str] = None


class BeachData(CategoryData):
    beachfront_meters: Optional[float] = None
    land_size_sqm: Optional[float] = None
    beach_type: Optional[str] = None
    water_depth: Optional[str] = None
    tidal_info: Optional[str] = None
    access_road: Optional[str] = None
    utilities_water: Optional[str] = None
    utilities_electricity: Optional[str] = None
    existing_structures: Optional[str] = None
    environmental_permits: Optional[str] = None
    beach_activities: Optional[List[str]] = None
    nearby_attractions: Optional[str] = None
    diving_spots: Optional[str] = None
    fishing_rights: Optional[str] = None


class CommercialData(CategoryData):
    building_size_sqm: Optional[float] = None
    lot_size_sqm: Optional[float] = None
    commercial_type: Optional[str] = None
    zoning: Optional[str] = None
    parking_spaces: Optional[int] = None
    loading_dock: Optional[str] = None
    current_income: Optional[str] = None
    rental_rate: Optional[str] = None
    foot_traffic: Optional[str] = None
    visibility: Optional[str] = None
    current_tenants: Optional[List[str]] = None
    lease_terms: Optional[str] = None
    renovation_needed: Optional[str] = None
    expansion_potential: Optional[str] = None
    building_age: Optional[str] = None


class AgricultureData(CategoryData):
    land_size_hectares: Optional[float] = None
    soil_type: Optional[str] = None
    current_crops: Optional[str] = None
    irrigation_system: Optional[str] = None
    equipment_included: Optional[List[str]] = None
    road_access: Optional[str] = None
    storage_facilities: Optional[str] = None
    harvest_history: Optional[str] = None
    organic_certification: Optional[str] = None
    worker_housing: Optional[str] = None
    market_access: Optional[str] = None
    climate_conditions: Optional[str] = None
    water_source: Optional[str] = None


CATEGORY_DATA_MODELS: Dict[PropertyCategory, Type[CategoryData]] = {
    PropertyCategory.HOUSES: HouseData,
    PropertyCategory.LAND: LandData,
    PropertyCategory.CONDOS: CondoData,
    PropertyCategory.BEACH: BeachData,
    PropertyCategory.COMMERCIAL: CommercialData,
    PropertyCategory.AGRICULTURE: AgricultureData,
}


def validate_category_data(
    category: PropertyCategory, data: Optional[Dict[str, Any]]
) -> Optional[Dict[str, Any]]:
    """
    Validate a category data bag against the shape for `category`.
    Returns the normalised dict (camelCase keys, unset keys dropped).
    Raises ValueError when a known key has the wrong type.
    """
    if data is None:
        return None
    model = CATEGORY_DATA_MODELS[PropertyCategory(category)]
    try:
        parsed = model.model_validate(data)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ValueError(f"Invalid categoryData for {PropertyCategory(category).value}: {problems}")
    return parsed.model_dump(by_alias=True, exclude_unset=True)


def _normalize_price(value: Any) -> Any:
    if value is None:
        return value
    text = str(value).strip()
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError("price must be a decimal number")
    if not amount.is_finite() or amount < 0:
        raise ValueError("price must be a non-negative decimal number")
    return text


# ─── Property Base ────────────────────────────────────────────────────────────

class PropertyBase(CamelModel):
    title: str = Field(..., min_length=1)
    price: str
    price_per_sqm: Optional[str] = None
    location: str = Field(..., min_length=1)
    category: PropertyCategory
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    square_feet: Optional[int] = None
    lot_size: Optional[str] = None
    year_built: Optional[int] = None
    property_type: Optional[str] = None
    description: str
    detailed_description: Optional[str] = None
    features: Optional[List[str]] = None
    images: List[str] = Field(..., min_length=1)
    video_url: Optional[str] = None
    contact_info: Optional[Dict[str, Any]] = None
    broker_name: str = Field(..., min_length=1)
    broker_phone: str = Field(..., min_length=1)
    broker_email: str = Field(..., min_length=1)
    title_type: Optional[str] = None
    is_featured: bool = False
    is_hot: bool = False
    category_data: Optional[Dict[str, Any]] = None

    @field_validator("price", mode="before")
    @classmethod
    def price_must_be_decimal(cls, v):
        return _normalize_price(v)


# ─── Create Schema ────────────────────────────────────────────────────────────

class PropertyCreate(PropertyBase):

    @model_validator(mode="after")
    def category_data_matches_category(self):
        self.category_data = validate_category_data(self.category, self.category_data)
        return self


# ─── Update Schema (partial, shallow merge) ───────────────────────────────────

class PropertyUpdate(PartialUpdate):
    NOT_NULLABLE = frozenset({
        "title", "price", "location", "category", "description", "images",
        "broker_name", "broker_phone", "broker_email", "is_featured", "is_hot",
    })

    title: Optional[str] = Field(None, min_length=1)
    price: Optional[str] = None
    price_per_sqm: Optional[str] = None
    location: Optional[str] = Field(None, min_length=1)
    category: Optional[PropertyCategory] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    square_feet: Optional[int] = None
    lot_size: Optional[str] = None
    year_built: Optional[int] = None
    property_type: Optional[str] = None
    description: Optional[str] = None
    detailed_description: Optional[str] = None
    features: Optional[List[str]] = None
    images: Optional[List[str]] = Field(None, min_length=1)
    video_url: Optional[str] = None
    contact_info: Optional[Dict[str, Any]] = None
    broker_name: Optional[str] = Field(None, min_length=1)
    broker_phone: Optional[str] = Field(None, min_length=1)
    broker_email: Optional[str] = Field(None, min_length=1)
    title_type: Optional[str] = None
    is_featured: Optional[bool] = None
    is_hot: Optional[bool] = None
    category_data: Optional[Dict[str, Any]] = None

    @field_validator("price", mode="before")
    @classmethod
    def price_must_be_decimal(cls, v):
        return _normalize_price(v)


# ─── Response Schema ──────────────────────────────────────────────────────────

class PropertyResponse(PropertyBase):
    id: str


# ─── Admin listing filters & bulk operations ──────────────────────────────────

class BulkAction(str, enum.Enum):
    DELETE = "delete"
    FEATURE = "feature"
    UNFEATURE = "unfeature"
    HOT = "hot"
    UNHOT = "unhot"


class BulkOperationRequest(CamelModel):
    action: BulkAction
    property_ids: List[str]


class BulkResult(CamelModel):
    id: str
    success: bool
    error: Optional[str] = None


class BulkOperationResponse(CamelModel):
    results: List[BulkResult]
