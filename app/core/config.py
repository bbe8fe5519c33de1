"""Application configuration from environment."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "AI Lesson Planner"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./lesson_planner.db"

    # All JSON routes live under this prefix
    api_prefix: str = "/api"

    # Google OAuth
    google_client_id: str = ""
    google_client_secret: str = ""
    google_auth_url: str = "https://accounts.google.com/o/oauth2/v2/auth"
    google_token_url: str = "https://oauth2.googleapis.com/token"
    google_userinfo_url: str = "https://www.googleapis.com/oauth2/v2/userinfo"
    google_scopes: str = "openid email profile"

    # When on, the state token round-trips through a short-lived cookie
    oauth_verify_state: bool = False
    oauth_state_cookie_name: str = "oauth_state"
    oauth_state_max_age: int = 60 * 10  # 10 minutes

    # OpenAI (deployment-wide key is optional; users may bring their own)
    openai_api_key: str | None = None
    openai_api_url: str = "https://api.openai.com/v1/chat/completions"
    openai_model: str = "gpt-4"
    openai_temperature: float = 0.7
    openai_max_tokens: int = 2000

    # Login session cookie
    session_cookie_name: str = "session"
    session_max_age: int = 60 * 60 * 24 * 7  # 7 days
    session_cookie_secure: bool = True

    community_plans_limit: int = 50

    cors_allow_origin: str = "*"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def get_settings() -> Settings:
    return Settings()
