"""Base class for typed API objects."""

from __future__ import annotations

import weakref
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ConfigDict, PrivateAttr

if TYPE_CHECKING:
    from ..client import GithubClient

ClientRef = Callable[[], "GithubClient | None"]
ItemFactory = Callable[[Any, Mapping[str, Any], ClientRef], Any]

M = TypeVar("M", bound="GithubObject")


class GithubObject(BaseModel):
    """An object returned by the API.

    Unknown fields are kept (``extra="allow"``) so nothing the API sends is
    lost. Each instance holds a weak reference to the client that fetched it,
    available as ``.github`` for follow-up calls; the item never keeps the
    client alive.
    """

    model_config = ConfigDict(extra="allow", str_strip_whitespace=True)

    _github_ref: ClientRef | None = PrivateAttr(default=None)

    @classmethod
    def from_api(
        cls: type[M],
        data: Mapping[str, Any],
        extra: Mapping[str, Any] | None = None,
        client_ref: ClientRef | None = None,
    ) -> M:
        """Build an instance from a decoded JSON object plus static extra fields."""
        obj = cls.model_validate({**data, **(extra or {})})
        obj._github_ref = client_ref
        return obj

    @property
    def github(self) -> GithubClient | None:
        """The issuing client, or None if it has been garbage collected."""
        if self._github_ref is None:
            return None
        return self._github_ref()


def model_factory(model: type[M]) -> ItemFactory:
    """Adapt a GithubObject subclass to the paginator's item factory signature."""

    def build(data: Any, extra: Mapping[str, Any], client_ref: ClientRef) -> M:
        return model.from_api(data, extra, client_ref)

    build.__name__ = f"build_{model.__name__}"
    return build


def client_ref(client: GithubClient) -> ClientRef:
    return weakref.ref(client)
