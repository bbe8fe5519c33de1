"""Plan routes: private saved plans and the public community list."""
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import SettingsDep, read_json_object
from app.db.session import get_db
from app.schemas.lesson_plan import PlansOutSchema, SavedOutSchema
from app.services.identity import CurrentUser
from app.services.plans import list_community_plans, list_plans, save_plan, share_plan

router = APIRouter(tags=["plans"])


@router.get("/plans", response_model=PlansOutSchema)
async def get_plans(
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Caller's saved plans, newest first, each with its dbId."""
    return PlansOutSchema(plans=await list_plans(db, user))


@router.post("/plans", response_model=SavedOutSchema)
async def create_plan(
    request: Request,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    plan = await read_json_object(request)
    plan_id = await save_plan(db, user, plan)
    return SavedOutSchema(id=plan_id)


@router.get("/community-plans", response_model=PlansOutSchema)
async def get_community_plans(
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: SettingsDep,
):
    """Most recently shared plans; no login required."""
    plans = await list_community_plans(db, limit=settings.community_plans_limit)
    return PlansOutSchema(plans=plans)


@router.post("/community-plans", response_model=SavedOutSchema)
async def create_community_plan(
    request: Request,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    plan = await read_json_object(request)
    plan_id = await share_plan(db, user, plan)
    return SavedOutSchema(id=plan_id)
