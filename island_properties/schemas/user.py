from pydantic import Field
from island_properties.schemas.base import CamelModel


class UserCreate(CamelModel):
    username: str = Field(..., min_length=1)
    password_hash: str


class UserInDB(UserCreate):
    id: str
