"""LessonPlan model: a user's saved plan. Append-only."""
from sqlalchemy import Column, String, Text, DateTime, ForeignKey

from app.db.session import Base
from app.models.common import generate_id, utcnow

# plan_data holds the full JSON document and is authoritative;
# title/subject/grade_level/learning_objective are denormalized copies for filtering


class LessonPlan(Base):
    __tablename__ = "lesson_plans"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=True)
    subject = Column(String(255), nullable=True)
    grade_level = Column(String(64), nullable=True)
    learning_objective = Column(Text, nullable=True)
    plan_data = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
