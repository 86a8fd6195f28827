"""Template rendering and outcome-to-response mapping shared by the page routers."""

from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

from fastapi import Request, Response, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from src.services.flash import Flash, flash_as_dict, pop_flash, push_flash
from src.services.identity import RequestContext
from src.services.snippet_handler import LISTING, REFERRER, Forbidden, Outcome, Redirect, Render

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def render(
    request: Request,
    template: str,
    context: dict[str, Any] | None = None,
    errors: list[str] | tuple[str, ...] = (),
    status_code: int = status.HTTP_200_OK,
) -> Response:
    """Render a page, consuming the pending flash."""
    page_context = {
        "identity": RequestContext.from_session(request.session).identity,
        "flash": flash_as_dict(pop_flash(request.session)),
        "errors": list(errors),
        **(context or {}),
    }
    return templates.TemplateResponse(request, template, page_context, status_code=status_code)


def redirect(request: Request, target: str, flash: Flash | None = None) -> RedirectResponse:
    """Redirect with 303 See Other, queuing an optional flash."""
    if flash is not None:
        push_flash(request.session, flash)
    if target == REFERRER:
        target = referrer_path(request)
    return RedirectResponse(url=target, status_code=status.HTTP_303_SEE_OTHER)


def referrer_path(request: Request) -> str:
    """Path of the referring page, falling back to the listing.

    Only the path and query are kept so the redirect stays on this site.
    """
    referer = request.headers.get("referer")
    if not referer:
        return LISTING
    parts = urlsplit(referer)
    if not parts.path.startswith("/") or parts.path.startswith("//"):
        return LISTING
    return f"{parts.path}?{parts.query}" if parts.query else parts.path


def to_response(request: Request, outcome: Outcome) -> Response:
    """Turn a handler outcome into exactly one HTTP response."""
    if isinstance(outcome, Render):
        return render(request, outcome.template, outcome.data, errors=outcome.errors)
    if isinstance(outcome, Redirect):
        return redirect(request, outcome.target, outcome.flash)
    if isinstance(outcome, Forbidden):
        return Response(status_code=status.HTTP_403_FORBIDDEN)
    raise TypeError(f"Unknown outcome: {outcome!r}")
