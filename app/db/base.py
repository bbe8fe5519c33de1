"""SQLAlchemy declarative base and model imports for Alembic."""
from app.db.session import Base

# Import all models so Alembic can see them
from app.models.community_plan import CommunityPlan  # noqa: F401
from app.models.lesson_plan import LessonPlan  # noqa: F401
from app.models.login_session import LoginSession  # noqa: F401
from app.models.user import User  # noqa: F401
from app.models.user_settings import UserSettings  # noqa: F401

__all__ = ["Base", "User", "LoginSession", "UserSettings", "LessonPlan", "CommunityPlan"]
