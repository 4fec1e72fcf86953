"""User / organisation account model."""

from pydantic import Field

from .base import GithubObject


class User(GithubObject):
    """A GitHub account (user or organisation)."""

    login: str = Field(..., min_length=1)
    id: int
    type: str | None = None
    name: str | None = None
    html_url: str | None = None
    site_admin: bool = False
