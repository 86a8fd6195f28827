"""Snippet handler: listing, creating, editing and deleting snippets with ownership checks.

Every operation takes a ``RequestContext`` and returns exactly one ``Outcome``:
``Render`` (show a page), ``Redirect`` (optionally with a flash) or ``Forbidden``.
Authorization always compares the request identity with the owner stored on the
snippet. Owner/author values sent by the client are accepted for form
compatibility but never trusted.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from src.schemas.snippet import SnippetFormData, SnippetListEntry
from src.services.flash import Flash
from src.services.identity import RequestContext, can_act_as
from src.services.snippet_store import (
    SnippetNotFoundError,
    SnippetStore,
    SnippetStoreError,
    SnippetValidationError,
)

logger = logging.getLogger(__name__)

LISTING = "/snippets"
ROOT = "/"
# Resolved by the route to the Referer header
REFERRER = "referrer"

CREATED = "The code snippet was successfully created."
UPDATED = "The code snippet was updated successfully!"
UNCHANGED = "No changes were made to the code snippet."
UPDATE_FAILED = "The code snippet failed to update"
DELETED = "Code snippet was deleted."
NOT_FOUND = "The code snippet was not found."
EDIT_DENIED = "You must be logged in as this user to edit!"
DELETE_DENIED = "You must be logged in as this user to delete snippets!"


@dataclass(frozen=True)
class Render:
    """Show a page."""

    template: str
    data: dict[str, Any] = field(default_factory=dict)
    errors: tuple[str, ...] = ()


@dataclass(frozen=True)
class Redirect:
    """Redirect, queuing an optional flash for the next page."""

    target: str
    flash: Flash | None = None


@dataclass(frozen=True)
class Forbidden:
    """Bare 403 with no body and no flash."""


Outcome = Render | Redirect | Forbidden


def _form_data(snippet) -> dict[str, Any]:
    return {"snippet": SnippetFormData(id=snippet.id, code=snippet.code, author=snippet.owner)}


class SnippetHandler:
    """Handler for snippet pages and form submissions."""

    def __init__(self, store: SnippetStore):
        self.store = store

    def list_snippets(self) -> Render:
        """List every snippet. Store errors propagate to the application error handler."""
        snippets = [SnippetListEntry.model_validate(s) for s in self.store.find_all()]
        return Render("snippets/index.html", {"snippets": snippets})

    def request_create_form(self, ctx: RequestContext) -> Outcome:
        if not ctx.is_authenticated:
            return Forbidden()
        return Render("snippets/new.html", {"code": ""})

    def create(self, ctx: RequestContext, code: str | None) -> Outcome:
        """Create a snippet owned by the request identity."""
        if not ctx.is_authenticated:
            logger.warning("Denied anonymous snippet creation")
            return Forbidden()

        try:
            snippet = self.store.insert(code=code, owner=ctx.identity)
        except SnippetValidationError as e:
            return Render("snippets/new.html", {"code": code or ""}, errors=(str(e),))
        except SnippetStoreError as e:
            return Redirect(LISTING, Flash.fail(str(e)))

        logger.info(f"User '{ctx.identity}' created snippet {snippet.id}")
        return Redirect(LISTING, Flash.success(CREATED))

    def request_edit_form(
        self, ctx: RequestContext, snippet_id: str, claimed_owner: str | None = None
    ) -> Outcome:
        """Show the edit form to the snippet's owner."""
        if not ctx.is_authenticated:
            return Redirect(LISTING, Flash.fail(EDIT_DENIED))

        try:
            snippet = self.store.find_by_id(snippet_id)
        except SnippetStoreError as e:
            return Redirect(REFERRER, Flash.fail(str(e)))

        self._check_claim(ctx, snippet, claimed_owner)
        if not can_act_as(ctx, snippet.owner):
            return Redirect(LISTING, Flash.fail(EDIT_DENIED))
        return Render("snippets/edit.html", _form_data(snippet))

    def update(
        self,
        ctx: RequestContext,
        snippet_id: str,
        new_code: str | None,
        claimed_author: str | None = None,
    ) -> Outcome:
        """Replace a snippet's code.

        Not found, unchanged and zero-modified are reported separately; all of
        them end in a single redirect to the listing.
        """
        if not ctx.is_authenticated:
            logger.warning(f"Denied anonymous update of snippet {snippet_id}")
            return Forbidden()

        try:
            snippet = self.store.find_by_id(snippet_id)
            self._check_claim(ctx, snippet, claimed_author)
            if not can_act_as(ctx, snippet.owner):
                logger.warning(f"Denied update of snippet {snippet_id} by '{ctx.identity}'")
                return Forbidden()

            if new_code == snippet.code:
                return Redirect(LISTING, Flash.success(UNCHANGED))

            modified = self.store.update_by_id(snippet_id, new_code)
        except SnippetNotFoundError:
            return Redirect(LISTING, Flash.fail(NOT_FOUND))
        except SnippetStoreError as e:
            return Redirect(ROOT, Flash.fail(str(e)))

        if modified != 1:
            logger.warning(f"Update of snippet {snippet_id} modified {modified} records")
            return Redirect(LISTING, Flash.fail(UPDATE_FAILED))

        logger.info(f"User '{ctx.identity}' updated snippet {snippet_id}")
        return Redirect(LISTING, Flash.success(UPDATED))

    def request_delete_form(self, ctx: RequestContext, snippet_id: str) -> Outcome:
        """Show the delete confirmation to the snippet's owner."""
        if not ctx.is_authenticated:
            return Redirect(LISTING, Flash.fail(DELETE_DENIED))

        try:
            snippet = self.store.find_by_id(snippet_id)
        except SnippetStoreError as e:
            return Redirect(REFERRER, Flash.fail(str(e)))

        if not can_act_as(ctx, snippet.owner):
            return Redirect(LISTING, Flash.fail(DELETE_DENIED))
        return Render("snippets/delete.html", _form_data(snippet))

    def delete(
        self, ctx: RequestContext, snippet_id: str, claimed_author: str | None = None
    ) -> Outcome:
        """Permanently delete a snippet. Deleting a missing snippet is reported, not raised."""
        if not ctx.is_authenticated:
            logger.warning(f"Denied anonymous delete of snippet {snippet_id}")
            return Forbidden()

        try:
            snippet = self.store.find_by_id(snippet_id)
            self._check_claim(ctx, snippet, claimed_author)
            if not can_act_as(ctx, snippet.owner):
                logger.warning(f"Denied delete of snippet {snippet_id} by '{ctx.identity}'")
                return Forbidden()

            deleted = self.store.delete_by_id(snippet_id)
        except SnippetNotFoundError:
            return Redirect(LISTING, Flash.fail(NOT_FOUND))
        except SnippetStoreError as e:
            return Redirect(REFERRER, Flash.fail(str(e)))

        if deleted != 1:
            return Redirect(LISTING, Flash.fail(NOT_FOUND))

        logger.info(f"User '{ctx.identity}' deleted snippet {snippet_id}")
        return Redirect(LISTING, Flash.success(DELETED))

    @staticmethod
    def _check_claim(ctx: RequestContext, snippet, claimed: str | None) -> None:
        if claimed is not None and claimed != snippet.owner:
            logger.warning(
                f"Ignoring claimed owner '{claimed}' for snippet {snippet.id} "
                f"(stored owner '{snippet.owner}', request from '{ctx.identity}')"
            )
