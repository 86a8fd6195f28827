"""Snippet pages and form endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request

from src.api.dependencies import get_request_context, get_snippet_handler
from src.api.pages import to_response
from src.services.identity import RequestContext
from src.services.snippet_handler import SnippetHandler

router = APIRouter(prefix="/snippets", tags=["snippets"])


@router.get("")
async def list_snippets(
    request: Request,
    handler: Annotated[SnippetHandler, Depends(get_snippet_handler)],
):
    """Show all snippets. Open to anonymous visitors."""
    return to_response(request, handler.list_snippets())


@router.get("/new")
async def new_snippet(
    request: Request,
    ctx: Annotated[RequestContext, Depends(get_request_context)],
    handler: Annotated[SnippetHandler, Depends(get_snippet_handler)],
):
    """Show the create form."""
    return to_response(request, handler.request_create_form(ctx))


@router.post("")
async def create_snippet(
    request: Request,
    ctx: Annotated[RequestContext, Depends(get_request_context)],
    handler: Annotated[SnippetHandler, Depends(get_snippet_handler)],
    code: Annotated[str | None, Form()] = None,
):
    """Create a snippet."""
    return to_response(request, handler.create(ctx, code))


@router.get("/{snippet_id}/edit")
async def edit_snippet(
    snippet_id: str,
    request: Request,
    ctx: Annotated[RequestContext, Depends(get_request_context)],
    handler: Annotated[SnippetHandler, Depends(get_snippet_handler)],
    author: str | None = None,
):
    """Show the edit form."""
    return to_response(request, handler.request_edit_form(ctx, snippet_id, author))


@router.post("/{snippet_id}/update")
async def update_snippet(
    snippet_id: str,
    request: Request,
    ctx: Annotated[RequestContext, Depends(get_request_context)],
    handler: Annotated[SnippetHandler, Depends(get_snippet_handler)],
    code: Annotated[str | None, Form()] = None,
    author: Annotated[str | None, Form()] = None,
):
    """Update a snippet's code."""
    return to_response(request, handler.update(ctx, snippet_id, code, author))


@router.get("/{snippet_id}/delete")
async def confirm_delete_snippet(
    snippet_id: str,
    request: Request,
    ctx: Annotated[RequestContext, Depends(get_request_context)],
    handler: Annotated[SnippetHandler, Depends(get_snippet_handler)],
):
    """Show the delete confirmation."""
    return to_response(request, handler.request_delete_form(ctx, snippet_id))


@router.post("/{snippet_id}/delete")
async def delete_snippet(
    snippet_id: str,
    request: Request,
    ctx: Annotated[RequestContext, Depends(get_request_context)],
    handler: Annotated[SnippetHandler, Depends(get_snippet_handler)],
    author: Annotated[str | None, Form()] = None,
):
    """Delete a snippet."""
    return to_response(request, handler.delete(ctx, snippet_id, author))
