"""One-shot flash notifications carried across a redirect."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

SESSION_FLASH_KEY = "flash"


class FlashType(str, Enum):
    """Flash notification kinds."""

    SUCCESS = "success"
    FAIL = "fail"


@dataclass(frozen=True)
class Flash:
    """A notification shown once on the next rendered page."""

    type: FlashType
    text: str

    @classmethod
    def success(cls, text: str) -> "Flash":
        return cls(FlashType.SUCCESS, text)

    @classmethod
    def fail(cls, text: str) -> "Flash":
        return cls(FlashType.FAIL, text)


def push_flash(session: dict[str, Any], flash: Flash) -> None:
    """Queue a flash for the next rendered page, replacing any pending one."""
    session[SESSION_FLASH_KEY] = {"type": flash.type.value, "text": flash.text}


def pop_flash(session: dict[str, Any]) -> Flash | None:
    """Remove and return the pending flash, if any."""
    data = session.pop(SESSION_FLASH_KEY, None)
    if not data:
        return None
    return Flash(FlashType(data["type"]), data["text"])


def flash_as_dict(flash: Flash | None) -> dict[str, str] | None:
    """Template-friendly form of a flash."""
    if flash is None:
        return None
    data = asdict(flash)
    data["type"] = flash.type.value
    return data
