"""Data models.

Architecture:
    - RawResponse: transport-level response shared by cache and executor
    - Observable: change-notifying value used for rate limit fields
    - GithubObject subclasses (User, Repository): Pydantic v2 item models that
      keep unknown API fields and a weak back-reference to the client
    - RateLimit / RateLimitSnapshot: rate limit data
"""

from .base import ClientRef, GithubObject, ItemFactory, client_ref, model_factory
from .observable import Observable
from .rate_limit import RateLimit, RateLimitResource, RateLimitSnapshot
from .repository import Repository
from .response import RawResponse
from .user import User

__all__ = [
    "ClientRef",
    "GithubObject",
    "ItemFactory",
    "client_ref",
    "model_factory",
    "Observable",
    "RateLimit",
    "RateLimitResource",
    "RateLimitSnapshot",
    "RawResponse",
    "Repository",
    "User",
]
