from sqlalchemy import Column, String, Integer, Boolean, Text, JSON
from island_properties.models.base import BaseModel
import enum


class PropertyCategory(str, enum.Enum):
    HOUSES = "houses"
    LAND = "land"
    CONDOS = "condos"
    BEACH = "beach"
    COMMERCIAL = "commercial"
    AGRICULTURE = "agriculture"


class Property(BaseModel):
    __tablename__ = "properties"

    # Basic Info
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    detailed_description = Column(Text, nullable=True)
    category = Column(String(20), index=True, nullable=False)
    property_type = Column(String(100), nullable=True)
    title_type = Column(String(100), nullable=True)
    location = Column(String(255), nullable=False)

    # Pricing (decimal kept as text)
    price = Column(String(32), nullable=False)
    price_per_sqm = Column(String(50), nullable=True)

    # Property Details
    bedrooms = Column(Integer, nullable=True)
    bathrooms = Column(Integer, nullable=True)
    square_feet = Column(Integer, nullable=True)
    lot_size = Column(String(50), nullable=True)
    year_built = Column(Integer, nullable=True)
    features = Column(JSON, nullable=True)

    # Media
    images = Column(JSON, nullable=False, default=list)
    video_url = Column(String(500), nullable=True)

    # Broker
    contact_info = Column(JSON, nullable=True)
    broker_name = Column(String(100), nullable=False)
    broker_phone = Column(String(50), nullable=False)
    broker_email = Column(String(255), nullable=False)

    # Listing flags
    is_featured = Column(Boolean, default=False, nullable=False)
    is_hot = Column(Boolean, default=False, nullable=False)

    # Category-specific fields, shape depends on `category`
    category_data = Column(JSON, nullable=True)
