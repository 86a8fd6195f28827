"""Pydantic schemas for forms and page data."""

from src.schemas.auth import UserLogin, UserRegister
from src.schemas.snippet import SnippetFormData, SnippetListEntry

__all__ = [
    "UserRegister",
    "UserLogin",
    "SnippetListEntry",
    "SnippetFormData",
]
