"""Snippet schemas."""

from pydantic import BaseModel, ConfigDict


class SnippetListEntry(BaseModel):
    """A snippet as shown on the listing page."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    code: str
    owner: str


class SnippetFormData(BaseModel):
    """A snippet as shown on the edit and delete forms."""

    id: str
    code: str
    author: str
