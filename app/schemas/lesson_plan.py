"""Pydantic schemas for generation requests and plan listings."""
from typing import Any

from pydantic import BaseModel, Field


class GenerateRequestSchema(BaseModel):
    subject: str
    grade_level: str = Field(alias="gradeLevel")
    learning_objective: str = Field(alias="learningObjective")
    use_api_key: bool = Field(default=False, alias="useApiKey")
    # sent by the client, not used by generation
    use_gpt_link: bool = Field(default=False, alias="useGptLink")

    class Config:
        populate_by_name = True


class GenerateOutSchema(BaseModel):
    lessonPlan: dict[str, Any]


class SavedOutSchema(BaseModel):
    success: bool = True
    id: str


class PlansOutSchema(BaseModel):
    plans: list[dict[str, Any]]
