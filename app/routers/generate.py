"""Generation route: relay a lesson-plan request to OpenAI."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import HttpClient, SettingsDep, parse_body
from app.core.errors import error_response
from app.db.session import get_db
from app.schemas.lesson_plan import GenerateOutSchema, GenerateRequestSchema
from app.services.identity import CurrentUser
from app.services.lesson_generator import generate_lesson_plan, resolve_api_key

router = APIRouter(tags=["generate"])
logger = logging.getLogger(__name__)


@router.post("/generate", response_model=GenerateOutSchema)
async def generate(
    request: Request,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: SettingsDep,
    client: HttpClient,
):
    """Generate a plan. The result is returned, not saved."""
    body = await parse_body(request, GenerateRequestSchema)
    api_key = await resolve_api_key(db, settings, user.id, body.use_api_key)
    if not api_key:
        return error_response(400, "No API key configured")

    logger.info("Generating lesson plan for %s (%s, grade %s)", user.id, body.subject, body.grade_level)
    lesson_plan = await generate_lesson_plan(client, settings, api_key, body)
    return GenerateOutSchema(lessonPlan=lesson_plan)
