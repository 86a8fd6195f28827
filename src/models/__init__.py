"""SQLAlchemy models."""

from src.models.snippet import Snippet
from src.models.user import User

__all__ = [
    "User",
    "Snippet",
]
