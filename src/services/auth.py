"""Authentication service for password handling and user lookup."""

import logging

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.models.user import User

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class UsernameTakenError(Exception):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str):
        super().__init__(f"The username '{username}' is already taken.")
        self.username = username


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def authenticate_user(db: Session, username: str, password: str) -> User | None:
    """Authenticate a user by username and password."""
    user = get_user_by_username(db, username)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username."""
    return db.query(User).filter(User.username == username).first()


def create_user(db: Session, username: str, password: str) -> User:
    """Create a new user."""
    if get_user_by_username(db, username):
        raise UsernameTakenError(username)

    user = User(username=username, password_hash=get_password_hash(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration
        db.rollback()
        raise UsernameTakenError(username) from e
    db.refresh(user)
    logger.info(f"Registered user '{username}'")
    return user
