"""Endpoint catalog: logical endpoint name -> URI template.

The catalog is the injected configuration collaborator that maps names such as
``current_user_repositories`` to RFC 6570 URI templates. Templates are
resolved once per call into absolute URIs; everything downstream (executor,
paginator) only sees resolved URIs.

Supported template expressions:
    - ``{var}``   simple expansion, value percent-encoded
    - ``{+var}``  reserved expansion, ``/`` and other reserved chars kept
    - ``{/var}``  path segment expansion, skipped when undefined
    - ``{?a,b}``  query expansion, undefined names dropped
    - ``{&a,b}``  query continuation

Simple and reserved variables are required; a missing value raises
EndpointError instead of producing an empty path segment.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import quote

from .config import DEFAULT_BASE_URI
from .exceptions import EndpointError

_EXPRESSION = re.compile(r"\{([+/?&]?)([^}]+)\}")
_RESERVED_SAFE = ":/?#[]@!$&'()*+,;="

# Relative templates are joined onto the client's base URI.
DEFAULT_ENDPOINTS: dict[str, str] = {
    "current_user": "/user",
    "current_user_repositories": "/user/repos{?type,page,per_page,sort}",
    "rate_limit": "/rate_limit",
    "user": "/users/{user}",
    "user_repositories": "/users/{user}/repos{?type,page,per_page,sort}",
    "organization": "/orgs/{org}",
    "organization_repositories": "/orgs/{org}/repos{?type,page,per_page,sort}",
    "repository": "/repos/{owner}/{repo}",
    "pull_requests": "/repos/{owner}/{repo}/pulls{?state,head,base,sort,direction}",
    "pull_request": "/repos/{owner}/{repo}/pulls/{id}",
    "branch_head": "/repos/{owner}/{repo}/git/refs/heads/{+branch}",
    "merges": "/repos/{owner}/{repo}/merges",
}


def expand_template(template: str, variables: Mapping[str, Any]) -> str:
    """Expand a URI template with the given variables.

    Raises:
        EndpointError: If a required (simple or reserved) variable is missing
    """

    def replace(match: re.Match[str]) -> str:
        operator, names = match.group(1), match.group(2).split(",")
        present = [(n, variables[n]) for n in names if variables.get(n) is not None]

        if operator in ("?", "&"):
            if not present:
                return ""
            pairs = "&".join(f"{n}={quote(str(v), safe='')}" for n, v in present)
            return f"{operator}{pairs}"
        if operator == "/":
            return "".join("/" + quote(str(v), safe="") for _, v in present)

        missing = [n for n in names if variables.get(n) is None]
        if missing:
            raise EndpointError(
                f"Template {template!r} requires value(s) for: {', '.join(missing)}"
            )
        safe = _RESERVED_SAFE if operator == "+" else ""
        return ",".join(quote(str(v), safe=safe) for _, v in present)

    return _EXPRESSION.sub(replace, template)


class EndpointCatalog:
    """Resolves logical endpoint names into absolute URIs."""

    def __init__(
        self,
        templates: Mapping[str, str] | None = None,
        *,
        base_uri: str = DEFAULT_BASE_URI,
    ) -> None:
        self._base_uri = base_uri.rstrip("/")
        self._templates: dict[str, str] = {}
        for name, template in (templates if templates is not None else DEFAULT_ENDPOINTS).items():
            self._templates[self._normalize_name(name)] = template

    @staticmethod
    def _normalize_name(name: str) -> str:
        # API root documents name their links "<name>_url"
        return name[:-4] if name.endswith("_url") else name

    @classmethod
    def from_json(cls, path: str | Path, *, base_uri: str = DEFAULT_BASE_URI) -> EndpointCatalog:
        """Load templates from a JSON object of ``name -> template`` pairs.

        The shape of the API root document (``GET /``) is accepted as-is.
        """
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise EndpointError(f"Endpoint file {path} must contain a JSON object")
        return cls({k: v for k, v in data.items() if isinstance(v, str)}, base_uri=base_uri)

    @property
    def names(self) -> list[str]:
        return sorted(self._templates)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._normalize_name(name) in self._templates

    def template(self, name: str) -> str:
        try:
            return self._templates[self._normalize_name(name)]
        except KeyError:
            raise EndpointError(f"Unknown endpoint '{name}'") from None

    def resolve(self, name: str, **variables: Any) -> str:
        """Expand the named template into an absolute URI."""
        expanded = expand_template(self.template(name), variables)
        if expanded.startswith("/"):
            return f"{self._base_uri}{expanded}"
        return expanded
