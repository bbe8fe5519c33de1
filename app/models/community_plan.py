"""CommunityPlan model: a plan shared with everyone. Immutable once shared."""
from sqlalchemy import Column, String, Text, DateTime, ForeignKey

from app.db.session import Base
from app.models.common import generate_id, utcnow


class CommunityPlan(Base):
    __tablename__ = "community_plans"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    # email local-part at share time; not re-derived if the user changes
    shared_by = Column(String(255), nullable=False)
    title = Column(String(255), nullable=True)
    subject = Column(String(255), nullable=True)
    grade_level = Column(String(64), nullable=True)
    learning_objective = Column(Text, nullable=True)
    plan_data = Column(Text, nullable=False)
    shared_at = Column(DateTime, nullable=False, default=utcnow, index=True)
