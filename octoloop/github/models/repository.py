"""Repository model."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import GithubObject
from .user import User


class Repository(GithubObject):
    """A repository as returned by listing endpoints."""

    id: int
    name: str = Field(..., min_length=1)
    full_name: str | None = None
    owner: User | None = None
    private: bool = False
    fork: bool = False
    description: str | None = None
    html_url: str | None = None
    default_branch: str | None = None
    updated_at: datetime | None = None

    @property
    def owner_login(self) -> str | None:
        if self.owner is not None:
            return self.owner.login
        if self.full_name and "/" in self.full_name:
            return self.full_name.split("/", 1)[0]
        return None
