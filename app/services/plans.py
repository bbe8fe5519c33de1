"""Saved and community-shared lesson plans."""
import json
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import generate_id
from app.models.community_plan import CommunityPlan
from app.models.lesson_plan import LessonPlan
from app.models.user import User


def display_name(email: str) -> str:
    """Sharer name shown on community plans: the email local-part."""
    return email.split("@")[0]


def _summary_columns(plan: dict[str, Any]) -> dict[str, Any]:
    # denormalized copies of the document fields used for filtering
    return {
        "title": plan.get("title"),
        "subject": plan.get("subject"),
        "grade_level": plan.get("gradeLevel"),
        "learning_objective": plan.get("learningObjective"),
    }


async def save_plan(db: AsyncSession, user: User, plan: dict[str, Any]) -> str:
    plan_id = generate_id()
    db.add(
        LessonPlan(
            id=plan_id,
            user_id=user.id,
            plan_data=json.dumps(plan),
            **_summary_columns(plan),
        )
    )
    await db.commit()
    return plan_id


async def list_plans(db: AsyncSession, user: User) -> list[dict[str, Any]]:
    """User's saved plans, newest first."""
    result = await db.execute(
        select(LessonPlan)
        .where(LessonPlan.user_id == user.id)
        .order_by(LessonPlan.created_at.desc())
    )
    return [
        {**json.loads(row.plan_data), "dbId": row.id}
        for row in result.scalars().all()
    ]


async def share_plan(db: AsyncSession, user: User, plan: dict[str, Any]) -> str:
    plan_id = generate_id()
    db.add(
        CommunityPlan(
            id=plan_id,
            user_id=user.id,
            shared_by=display_name(user.email),
            plan_data=json.dumps(plan),
            **_summary_columns(plan),
        )
    )
    await db.commit()
    return plan_id


async def list_community_plans(db: AsyncSession, limit: int = 50) -> list[dict[str, Any]]:
    """Most recently shared plans across all users."""
    result = await db.execute(
        select(CommunityPlan).order_by(CommunityPlan.shared_at.desc()).limit(limit)
    )
    return [
        {
            **json.loads(row.plan_data),
            "dbId": row.id,
            "sharedBy": row.shared_by,
            "sharedAt": row.shared_at.isoformat() if row.shared_at else None,
        }
        for row in result.scalars().all()
    ]
