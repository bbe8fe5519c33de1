"""Lesson-plan generation via the OpenAI chat-completions endpoint.

The model is asked for a JSON document with a fixed shape. The reply is
only checked for being a JSON object; a malformed reply is an error, never
a partially populated plan.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any

import httpx
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.errors import UpstreamError
from app.core.security import generate_id
from app.models.user_settings import UserSettings
from app.schemas.lesson_plan import GenerateRequestSchema

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an educational AI assistant that creates detailed, pedagogically sound "
    "lesson plans. Always respond with valid JSON only."
)

PROMPT_TEMPLATE = """You are an expert educational consultant specializing in integrating AI ethically into lesson plans.

Create a comprehensive lesson plan with the following details:
- Subject: {subject}
- Grade Level: {grade_level}
- Learning Objective: {learning_objective}

Your response must be a valid JSON object with this exact structure:
{{
  "title": "Brief descriptive title",
  "subject": "{subject}",
  "gradeLevel": "{grade_level}",
  "learningObjective": "{learning_objective}",
  "aiIntegration": {{
    "approach": "One-sentence summary of AI integration approach",
    "description": "Detailed description of how AI will be used",
    "rationale": [
      "Reason 1 referencing Bloom's Taxonomy or Kirkpatrick's Model",
      "Reason 2 about learning outcomes",
      "Reason 3 about critical thinking",
      "Reason 4 about real-world preparation"
    ],
    "ethicalConsiderations": [
      "Transparency consideration",
      "Verification consideration",
      "Original thinking consideration",
      "Equity consideration"
    ]
  }},
  "activities": [
    {{
      "phase": "Phase name with duration",
      "activity": "Description of activity",
      "studentRole": "What students do",
      "teacherRole": "What teacher does"
    }}
  ],
  "assessmentStrategy": "Description of how learning will be assessed using Kirkpatrick's model",
  "pedagogicalFrameworks": [
    "Framework 1 explanation",
    "Framework 2 explanation"
  ],
  "toolSuggestions": [
    "Tool 1 with purpose",
    "Tool 2 with purpose"
  ]
}}

IMPORTANT: Return ONLY the JSON object, no additional text or markdown formatting."""


def build_prompt(request: GenerateRequestSchema) -> str:
    return PROMPT_TEMPLATE.format(
        subject=request.subject,
        grade_level=request.grade_level,
        learning_objective=request.learning_objective,
    )


def build_payload(settings: Settings, request: GenerateRequestSchema) -> dict[str, Any]:
    return {
        "model": settings.openai_model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_prompt(request)},
        ],
        "temperature": settings.openai_temperature,
        "max_tokens": settings.openai_max_tokens,
    }


async def resolve_api_key(
    db: AsyncSession,
    settings: Settings,
    user_id: str,
    use_own_key: bool,
) -> str | None:
    """Deployment key by default; the user's stored key when they opt in and have one."""
    api_key = settings.openai_api_key or None
    if use_own_key:
        result = await db.execute(
            select(UserSettings.api_key).where(UserSettings.user_id == user_id)
        )
        own_key = result.scalar_one_or_none()
        if own_key:
            api_key = own_key
    return api_key


def parse_lesson_plan(content: str) -> dict[str, Any]:
    """Parse the completion content; raises ValueError unless it is a JSON object."""
    plan = json.loads(content)
    if not isinstance(plan, dict):
        raise ValueError("Completion content is not a JSON object")
    return plan


def iso_timestamp() -> str:
    """UTC timestamp like 2025-01-30T12:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


async def generate_lesson_plan(
    client: httpx.AsyncClient,
    settings: Settings,
    api_key: str,
    request: GenerateRequestSchema,
) -> dict[str, Any]:
    """Call the completion API and return the parsed plan stamped with id and createdAt."""
    response = await client.post(
        settings.openai_api_url,
        json=build_payload(settings, request),
        headers={"Authorization": f"Bearer {api_key}"},
    )
    if not response.is_success:
        logger.error("OpenAI API error: %s", response.text)
        raise UpstreamError(
            f"OpenAI API error: {response.status_code}",
            status_code=500,
            details=response.text,
        )

    data = response.json()
    content = data["choices"][0]["message"]["content"]

    plan = parse_lesson_plan(content)
    plan["id"] = generate_id()
    plan["createdAt"] = iso_timestamp()
    return plan
