"""Snippet store with document-style repository operations."""

import logging

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.snippet import Snippet

logger = logging.getLogger(__name__)


class SnippetStoreError(Exception):
    """Base error for snippet store failures."""


class SnippetNotFoundError(SnippetStoreError):
    """Raised when no snippet exists for an id."""

    def __init__(self, snippet_id: str):
        super().__init__(f"No code snippet found with id '{snippet_id}'.")
        self.snippet_id = snippet_id


class SnippetValidationError(SnippetStoreError):
    """Raised when a snippet document fails validation."""


def validate_code(code: str | None) -> str:
    """Check that snippet code is present."""
    if code is None or not code.strip():
        raise SnippetValidationError("The code snippet cannot be empty.")
    return code


class SnippetStore:
    """Repository over the snippets table.

    Mirrors a document store: ids are opaque strings, writes report how many
    records they touched, and writes against a missing id are no-ops.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> list[Snippet]:
        """Return every snippet, oldest first. Database errors propagate unchanged."""
        return self.db.query(Snippet).order_by(Snippet.created_at, Snippet.id).all()

    def find_by_id(self, snippet_id: str) -> Snippet:
        """Return the snippet with the given id."""
        try:
            snippet = self.db.query(Snippet).filter(Snippet.id == snippet_id).first()
        except SQLAlchemyError as e:
            self._fail(e, "read")
        if snippet is None:
            raise SnippetNotFoundError(snippet_id)
        return snippet

    def insert(self, code: str | None, owner: str) -> Snippet:
        """Insert a new snippet and return it with its generated id."""
        snippet = Snippet(code=validate_code(code), owner=owner)
        try:
            self.db.add(snippet)
            self.db.commit()
            self.db.refresh(snippet)
        except SQLAlchemyError as e:
            self._fail(e)
        return snippet

    def update_by_id(self, snippet_id: str, code: str | None) -> int:
        """Replace the code of a snippet. Returns the number of modified records."""
        code = validate_code(code)
        return self._execute(
            update(Snippet)
            .where(Snippet.id == snippet_id, Snippet.code != code)
            .values(code=code)
            .execution_options(synchronize_session="fetch")
        )

    def delete_by_id(self, snippet_id: str) -> int:
        """Delete a snippet. Returns the number of deleted records."""
        return self._execute(
            delete(Snippet)
            .where(Snippet.id == snippet_id)
            .execution_options(synchronize_session="fetch")
        )

    def _execute(self, statement) -> int:
        try:
            result = self.db.execute(statement)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail(e)
        return result.rowcount

    def _fail(self, error: SQLAlchemyError, operation: str = "write") -> None:
        self.db.rollback()
        logger.error(f"Snippet store {operation} failed: {error}")
        raise SnippetStoreError(str(error)) from error
