"""Authentication schemas."""

from pydantic import BaseModel, Field, field_validator

from src.config import get_settings


class UserRegister(BaseModel):
    """User registration form."""

    username: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)

    @field_validator("username")
    @classmethod
    def strip_username(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Username is required.")
        return value

    @field_validator("password")
    @classmethod
    def check_password_length(cls, value: str) -> str:
        min_length = get_settings().password_min_length
        if len(value) < min_length:
            raise ValueError(f"Your password needs to be at least {min_length} characters long.")
        return value


class UserLogin(BaseModel):
    """User login form."""

    username: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)

