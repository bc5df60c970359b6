"""SQLAlchemy models."""
from models.base import MAX_INTEGER_ID, Base, TimestampMixin
from models.bookmark import Bookmark
from models.user import User

__all__ = ["MAX_INTEGER_ID", "Base", "Bookmark", "TimestampMixin", "User"]
