"""Pydantic schemas for auth responses and Google OAuth payloads."""
from pydantic import BaseModel


class UserOutSchema(BaseModel):
    id: str
    email: str
    name: str | None = None

    class Config:
        from_attributes = True


class MeOutSchema(BaseModel):
    user: UserOutSchema | None = None


class GoogleUserSchema(BaseModel):
    """Subset of the Google userinfo reply we keep."""

    id: str
    email: str
    name: str | None = None

    class Config:
        extra = "ignore"
        coerce_numbers_to_str = True
