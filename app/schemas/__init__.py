from app.schemas.auth import GoogleUserSchema, MeOutSchema, UserOutSchema
from app.schemas.lesson_plan import (
    GenerateOutSchema,
    GenerateRequestSchema,
    PlansOutSchema,
    SavedOutSchema,
)
from app.schemas.settings import SettingsInSchema

__all__ = [
    "GoogleUserSchema",
    "MeOutSchema",
    "UserOutSchema",
    "GenerateOutSchema",
    "GenerateRequestSchema",
    "PlansOutSchema",
    "SavedOutSchema",
    "SettingsInSchema",
]
