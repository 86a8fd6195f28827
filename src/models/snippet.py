"""Snippet model."""

from uuid import uuid4

from sqlalchemy import Column, String, Text

from src.database import Base
from src.models.mixins import TimestampMixin


def generate_snippet_id() -> str:
    """Generate an opaque snippet identifier."""
    return uuid4().hex


class Snippet(Base, TimestampMixin):
    """A stored code snippet with a single owning username."""

    __tablename__ = "snippets"

    id = Column(String(32), primary_key=True, default=generate_snippet_id)
    code = Column(Text, nullable=False)
    # Plain copy of users.username, not a foreign key
    owner = Column(String(255), nullable=False, index=True)
