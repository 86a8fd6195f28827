"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from src.api import auth, snippets
from src.api.pages import templates
from src.config import get_settings
from src.database import init_db
from src.services.identity import SESSION_IDENTITY_KEY
from src.services.snippet_handler import LISTING

settings = get_settings()

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    setup_logging()
    init_db()
    logger.info(f"Snippet share started ({settings.environment})")
    yield


app = FastAPI(
    title="Snippet Share",
    description="Store and share short code snippets",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    session_cookie=settings.session_cookie,
    max_age=settings.session_max_age,
    same_site="lax",
    https_only=settings.is_production,
)

# Register routers
app.include_router(auth.router)
app.include_router(snippets.router)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    """Render the error page for anything the handlers did not recover from."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    session = request.scope.get("session") or {}
    return templates.TemplateResponse(
        request,
        "error.html",
        {"identity": session.get(SESSION_IDENTITY_KEY), "flash": None, "errors": []},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


@app.get("/", include_in_schema=False)
async def index():
    """Send visitors to the snippet listing."""
    return RedirectResponse(url=LISTING, status_code=status.HTTP_303_SEE_OTHER)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
