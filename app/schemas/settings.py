"""Pydantic schemas for per-user settings."""
from pydantic import BaseModel, Field


class SettingsInSchema(BaseModel):
    api_key: str | None = Field(default=None, alias="apiKey")
    gpt_link: str | None = Field(default=None, alias="gptLink")

    class Config:
        populate_by_name = True
