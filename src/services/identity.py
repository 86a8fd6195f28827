"""Request identity and the ownership check shared by mutating snippet operations."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

SESSION_IDENTITY_KEY = "logged_in"


@dataclass(frozen=True)
class RequestContext:
    """Who is making the current request. ``identity`` is None for anonymous visitors."""

    identity: str | None = None

    @classmethod
    def from_session(cls, session: Mapping[str, Any]) -> "RequestContext":
        """Build a context from the session's logged-in username."""
        return cls(identity=session.get(SESSION_IDENTITY_KEY) or None)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.identity)


def can_act_as(ctx: RequestContext, owner: str | None) -> bool:
    """Check that the request identity is present and equals ``owner``.

    ``owner`` must come from the stored snippet, never from request input.
    """
    return ctx.is_authenticated and ctx.identity == owner
