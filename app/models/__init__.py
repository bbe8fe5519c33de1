from app.models.user import User
from app.models.login_session import LoginSession
from app.models.user_settings import UserSettings
from app.models.lesson_plan import LessonPlan
from app.models.community_plan import CommunityPlan

__all__ = ["User", "LoginSession", "UserSettings", "LessonPlan", "CommunityPlan"]
