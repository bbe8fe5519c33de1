"""Per-user settings: own OpenAI key and custom GPT link. One row per user."""
from sqlalchemy import Column, String, Text, DateTime, ForeignKey

from app.db.session import Base
from app.models.common import utcnow


class UserSettings(Base):
    __tablename__ = "settings"

    user_id = Column(String(36), ForeignKey("users.id"), primary_key=True)
    api_key = Column(Text, nullable=True)
    gpt_link = Column(Text, nullable=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
