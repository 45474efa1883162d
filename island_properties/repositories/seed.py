"""
repositories/seed.py

Sample listings and testimonials for a fresh store, and the bootstrap admin
account taken from ADMIN_EMAIL / ADMIN_PASSWORD.
"""

from typing import Optional

from loguru import logger
from starlette.concurrency import run_in_threadpool

from island_properties.models.admin import AdminRole
from island_properties.repositories.base import Repository
from island_properties.schemas.admin import AdminUserCreate, AdminUserInDB
from island_properties.schemas.content import BlogPostCreate, TestimonialCreate
from island_properties.schemas.property import PropertyCreate
from island_properties.utils.security import get_password_hash

_UNSPLASH = "https://images.unsplash.com/photo-{}?ixlib=rb-4.0.3&auto=format&fit=crop&w=800&h=600"

SAMPLE_PROPERTIES = [
    {
        "title": "Private White Sand Beachfront Resort",
        "price": "50000000",
        "pricePerSqm": "₱10,000",
        "location": "Anda, Bohol",
        "category": "beach",
        "description": "Exceptional beachfront resort property with pristine white sand beach.",
        "features": ["Swimming", "Snorkeling", "Kayaking", "Beach volleyball"],
        "images": [_UNSPLASH.format("1613490493576-7fde63acd811"), _UNSPLASH.format("1507525428034-b723cf961d3e")],
        "brokerName": "Carlos Mendoza",
        "brokerPhone": "+63 917 456 7890",
        "brokerEmail": "carlos@islandproperties.ph",
        "titleType": "Clean Title",
        "isHot": True,
        "categoryData": {
            "beachfrontMeters": 150,
            "landSizeSqm": 5000,
            "beachType": "Pristine White Sand",
            "existingStructures": "5 native cottages, main house",
            "beachActivities": ["Swimming", "Snorkeling", "Kayaking", "Beach volleyball"],
        },
    },
    {
        "title": "Modern 4-Bedroom Villa with Pool",
        "price": "25000000",
        "pricePerSqm": "₱35,000",
        "location": "Tagbilaran Heights, Bohol",
        "category": "houses",
        "bedrooms": 4,
        "bathrooms": 3,
        "squareFeet": 350,
        "yearBuilt": 2020,
        "propertyType": "Single Detached",
        "description": "Stunning modern villa featuring contemporary design with resort-style amenities.",
        "features": ["CCTV", "Alarm System", "24/7 Security", "Central AC"],
        "images": [_UNSPLASH.format("1600596542815-ffad4c1539a9"), _UNSPLASH.format("1568605114967-8130f3a36994")],
        "brokerName": "Maria Santos",
        "brokerPhone": "+63 917 123 4567",
        "brokerEmail": "maria@islandproperties.ph",
        "titleType": "Clean Title",
        "isHot": True,
        "categoryData": {
            "lotSizeSqm": 800,
            "parkingSpaces": 2,
            "stories": 2,
            "swimmingPool": True,
            "securityFeatures": ["CCTV", "Alarm System", "24/7 Security"],
        },
    },
    {
        "title": "Luxury 2BR Oceanview Penthouse",
        "price": "15000000",
        "location": "Seaside Towers, Tagbilaran City",
        "category": "condos",
        "bedrooms": 2,
        "bathrooms": 2,
        "squareFeet": 120,
        "description": "Spectacular penthouse unit with panoramic ocean and city views.",
        "features": ["Infinity Pool", "Gym", "Spa", "Rooftop Garden"],
        "images": [_UNSPLASH.format("1545324418-cc1a3fa10c00"), _UNSPLASH.format("1560448204-e02f11c3d0e2")],
        "brokerName": "Lisa Fernandez",
        "brokerPhone": "+63 917 345 6789",
        "brokerEmail": "lisa@islandproperties.ph",
        "titleType": "Condominium Certificate of Title",
        "isFeatured": True,
        "categoryData": {
            "floorLevel": "25th Floor",
            "buildingName": "Seaside Towers",
            "parkingSlots": 2,
            "buildingAmenities": ["Infinity Pool", "Gym", "Spa", "Rooftop Garden"],
        },
    },
    {
        "title": "Productive Coconut Plantation with Processing",
        "price": "12000000",
        "location": "Carmen, Bohol",
        "category": "agriculture",
        "description": "Fully operational coconut plantation with processing facilities and consistent production.",
        "images": [_UNSPLASH.format("1500382017468-9049fed747ef"), _UNSPLASH.format("1574323347407-f5e1ad6d020b")],
        "brokerName": "Ricardo Villanueva",
        "brokerPhone": "+63 917 678 9012",
        "brokerEmail": "ricardo@islandproperties.ph",
        "titleType": "Agricultural Free Patent",
        "isFeatured": True,
        "categoryData": {
            "landSizeHectares": 10,
            "currentCrops": "Mature coconut trees (500+ trees)",
            "equipmentIncluded": ["Copra dryer", "Processing equipment", "Farm tools"],
        },
    },
    {
        "title": "Prime Commercial Building - City Center",
        "price": "35000000",
        "location": "CPG Avenue, Tagbilaran City",
        "category": "commercial",
        "squareFeet": 800,
        "description": "Excellent investment property in the heart of the business district.",
        "images": [_UNSPLASH.format("1486406146926-c627a92ad1ab"), _UNSPLASH.format("1555774698-0b77e0d5fac6")],
        "brokerName": "Elena Rodriguez",
        "brokerPhone": "+63 917 567 8901",
        "brokerEmail": "elena@islandproperties.ph",
        "titleType": "Clean Title",
        "isFeatured": True,
        "categoryData": {
            "buildingSizeSqm": 800,
            "lotSizeSqm": 400,
            "parkingSpaces": 10,
            "currentTenants": ["Restaurant", "Retail shops", "Office spaces"],
        },
    },
    {
        "title": "Prime Residential Development Land",
        "price": "8000000",
        "pricePerSqm": "₱4,000",
        "location": "Panglao Island, Bohol",
        "category": "land",
        "description": "Exceptional development opportunity on Panglao Island with excellent potential.",
        "images": [_UNSPLASH.format("1500076656116-558758c991c1"), _UNSPLASH.format("1441974231531-c6227db76b6e")],
        "brokerName": "Roberto Cruz",
        "brokerPhone": "+63 917 234 5678",
        "brokerEmail": "roberto@islandproperties.ph",
        "titleType": "Clean Title",
        "isFeatured": True,
        "categoryData": {
            "totalAreaSqm": 2000,
            "totalAreaHectares": 0.2,
            "landClassification": "Residential",
            "zoning": "Residential, R1 Classification",
        },
    },
]

SAMPLE_TESTIMONIALS = [
    {
        "name": "Sarah Johnson",
        "title": "Property Investor",
        "quote": "Island Properties helped me find the perfect beachfront investment.",
        "avatar": "https://images.unsplash.com/photo-1494790108755-2616b612b786?w=64&h=64",
        "rating": 5,
    },
    {
        "name": "Michael Chen",
        "title": "Business Owner",
        "quote": "Outstanding service from start to finish.",
        "avatar": "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?w=64&h=64",
        "rating": 5,
    },
    {
        "name": "Emma Rodriguez",
        "title": "First-Time Buyer",
        "quote": "The team made everything smooth and stress-free.",
        "avatar": "https://images.unsplash.com/photo-1580489944761-15a19d654956?w=64&h=64",
        "rating": 5,
    },
]

SAMPLE_BLOG_POSTS = [
    {
        "title": "Buying Beachfront Property in the Philippines",
        "content": (
            "Foreign buyers cannot hold land title directly, but condominium units, "
            "long-term leases and domestic corporations all open a path to owning a "
            "piece of the coast. This guide walks through each option."
        ),
        "excerpt": "What foreign buyers need to know before investing on the coast.",
        "category": "Guides",
        "tags": ["beachfront", "investment", "foreign buyers"],
        "status": "published",
        "publishDate": "2024-01-15T00:00:00Z",
        "author": "Island Properties Team",
    },
]


async def seed_sample_data(repository: Repository) -> int:
    """Populate an empty store. Returns how many listings were created."""
    if await repository.get_all_properties():
        return 0
    for raw in SAMPLE_PROPERTIES:
        await repository.create_property(PropertyCreate.model_validate(raw))
    for raw in SAMPLE_TESTIMONIALS:
        await repository.create_testimonial(TestimonialCreate.model_validate(raw))
    for raw in SAMPLE_BLOG_POSTS:
        await repository.create_blog_post(BlogPostCreate.model_validate(raw))
    logger.info(
        "Seeded sample data",
        properties=len(SAMPLE_PROPERTIES),
        testimonials=len(SAMPLE_TESTIMONIALS),
        blog_posts=len(SAMPLE_BLOG_POSTS),
    )
    return len(SAMPLE_PROPERTIES)


async def create_admin_account(repository: Repository, data: AdminUserCreate) -> AdminUserInDB:
    """Hash the password and store a new admin. Raises DuplicateError for a taken email."""
    password_hash = await run_in_threadpool(get_password_hash, data.password)
    admin = await repository.create_admin_user(data.email, password_hash, data.role)
    logger.info("Admin account created", admin_id=admin.id, role=admin.role.value)
    return admin


async def ensure_bootstrap_admin(
    repository: Repository, email: str, password: str
) -> Optional[AdminUserInDB]:
    if not email or not password:
        return None
    existing = await repository.get_admin_user_by_email(email)
    if existing:
        return existing
    return await create_admin_account(
        repository, AdminUserCreate(email=email, password=password, role=AdminRole.SUPER_ADMIN)
    )
