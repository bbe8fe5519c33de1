"""User model: one row per Google account, created on first login."""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from app.db.session import Base
from app.models.common import generate_id, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    email = Column(String(255), nullable=False)
    google_id = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    sessions = relationship("LoginSession", back_populates="user")
