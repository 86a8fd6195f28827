"""Registration, login and logout pages."""

from typing import Annotated

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from src.api.dependencies import get_request_context
from src.api.pages import redirect, render
from src.database import get_db
from src.schemas.auth import UserLogin, UserRegister
from src.services.auth import UsernameTakenError, authenticate_user, create_user
from src.services.flash import Flash
from src.services.identity import SESSION_IDENTITY_KEY, RequestContext
from src.services.snippet_handler import LISTING

router = APIRouter(prefix="/users", tags=["auth"])

LOGIN_PAGE = "/users/login"


def validation_messages(error: ValidationError) -> list[str]:
    """Readable messages from a pydantic validation error."""
    messages = []
    for err in error.errors():
        message = err["msg"].removeprefix("Value error, ")
        if err["type"] in ("missing", "string_type"):
            message = f"{str(err['loc'][-1]).capitalize()} is required."
        messages.append(message)
    return messages


@router.get("/register")
async def register_form(request: Request):
    """Show the registration form."""
    return render(request, "users/register.html", {"username": ""})


@router.post("/create")
async def register(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    username: Annotated[str | None, Form()] = None,
    password: Annotated[str | None, Form()] = None,
):
    """Register a new user."""
    try:
        user_data = UserRegister(username=username, password=password)
        create_user(db, user_data.username, user_data.password)
    except ValidationError as e:
        return render(
            request,
            "users/register.html",
            {"username": username or ""},
            errors=validation_messages(e),
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    except UsernameTakenError as e:
        return render(
            request,
            "users/register.html",
            {"username": username or ""},
            errors=[str(e)],
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    return redirect(request, LOGIN_PAGE, Flash.success("Your account was created. Please log in."))


@router.get("/login")
async def login_form(
    request: Request,
    ctx: Annotated[RequestContext, Depends(get_request_context)],
):
    """Show the login form."""
    if ctx.is_authenticated:
        return redirect(request, LISTING)
    return render(request, "users/login.html", {"username": ""})


@router.post("/login")
async def login(
    request: Request,
    ctx: Annotated[RequestContext, Depends(get_request_context)],
    db: Annotated[Session, Depends(get_db)],
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
):
    """Login with username and password."""
    if ctx.is_authenticated:
        return redirect(request, LISTING)

    try:
        credentials = UserLogin(username=username.strip(), password=password)
        user = authenticate_user(db, credentials.username, credentials.password)
    except ValidationError:
        user = None

    if not user:
        return render(
            request,
            "users/login.html",
            {"username": username},
            errors=["Wrong username or password."],
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    request.session[SESSION_IDENTITY_KEY] = user.username
    return redirect(request, LISTING, Flash.success(f"Welcome, {user.username}!"))


@router.get("/logout")
async def logout(
    request: Request,
    ctx: Annotated[RequestContext, Depends(get_request_context)],
):
    """Logout and clear the session."""
    if not ctx.is_authenticated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not logged in")

    request.session.clear()
    return redirect(request, LISTING, Flash.success("You are logged out."))
