from app.services.identity import Identity, get_identity, require_user, resolve_identity
from app.services.plans import list_community_plans, list_plans, save_plan, share_plan
from app.services.user_settings import get_settings_row, upsert_settings

__all__ = [
    "Identity",
    "get_identity",
    "require_user",
    "resolve_identity",
    "list_community_plans",
    "list_plans",
    "save_plan",
    "share_plan",
    "get_settings_row",
    "upsert_settings",
]
