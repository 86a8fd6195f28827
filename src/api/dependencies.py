"""FastAPI dependencies for the request identity and services."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from src.database import get_db
from src.services.identity import RequestContext
from src.services.snippet_handler import SnippetHandler
from src.services.snippet_store import SnippetStore


def get_request_context(request: Request) -> RequestContext:
    """Get the identity of the current request from its session."""
    return RequestContext.from_session(request.session)


def get_snippet_store(db: Annotated[Session, Depends(get_db)]) -> SnippetStore:
    """Get snippet store bound to the request's database session."""
    return SnippetStore(db)


def get_snippet_handler(
    store: Annotated[SnippetStore, Depends(get_snippet_store)],
) -> SnippetHandler:
    """Get snippet handler with dependencies."""
    return SnippetHandler(store)
