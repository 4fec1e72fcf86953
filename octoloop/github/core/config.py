"""Client configuration model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_URI = "https://api.github.com"
DEFAULT_MIME_TYPE = "application/vnd.github.v3+json"
FULL_MIME_TYPE = "application/vnd.github.v3.full+json"
DEFAULT_USER_AGENT = "Mozilla/4.0 (python; octoloop-github)"


class ClientConfig(BaseModel):
    """Settings for a single GithubClient instance.

    Attributes:
        token: OAuth token, sent as ``Authorization: token <token>``
        api_key: Credential sent as HTTP Basic username with an empty password
        base_uri: Root of the REST API
        mime_type: Value for the ``Accept`` header
        page_cache_size: Number of GET responses to cache (0 disables caching)
        connections_per_host: Maximum simultaneous read connections
        updates_per_host: Maximum simultaneous state-modifying calls
        update_interval: Minimum spacing in seconds between state-modifying calls
        timeout: Total request timeout in seconds
        user_agent: Value for the ``User-Agent`` header
    """

    token: str | None = None
    api_key: str | None = None
    base_uri: str = DEFAULT_BASE_URI
    mime_type: str = DEFAULT_MIME_TYPE
    page_cache_size: int = Field(default=1000, ge=0)
    connections_per_host: int = Field(default=4, ge=1)
    updates_per_host: int = Field(default=1, ge=1, le=1)
    update_interval: float = Field(default=1.0, ge=0)
    timeout: float = Field(default=60.0, gt=0)
    user_agent: str = DEFAULT_USER_AGENT

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("base_uri")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key or self.token)
