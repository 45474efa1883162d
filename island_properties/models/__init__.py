from island_properties.models.base import Base
from island_properties.models.user import User
from island_properties.models.property import Property, PropertyCategory
from island_properties.models.content import Testimonial, BlogPost, BlogStatus, FAQ
from island_properties.models.admin import AdminUser, AdminRole, SecurityLog

__all__ = [
    "Base",
    "User",
    "Property",
    "PropertyCategory",
    "Testimonial",
    "BlogPost",
    "BlogStatus",
    "FAQ",
    "AdminUser",
    "AdminRole",
    "SecurityLog",
]
