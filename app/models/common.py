"""Column defaults shared by the models."""
from datetime import datetime, timezone

from app.core.security import generate_id

__all__ = ["generate_id", "utcnow"]


def utcnow() -> datetime:
    # Naive UTC: SQLite stores DateTime as text, so mixed offsets would not compare
    return datetime.now(timezone.utc).replace(tzinfo=None)
