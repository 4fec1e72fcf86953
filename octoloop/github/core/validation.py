"""Validation of caller-supplied identifiers.

Owner, repository and branch names are checked before they are spliced into
request paths, so malformed input fails synchronously and never reaches the
network.

Rules:
    - Owner (user/organisation): at most 39 characters of ``[A-Za-z0-9-]``,
      no leading, trailing or doubled hyphen.
    - Repository: at most 100 characters of ``[A-Za-z0-9-]``.
    - Branch: the subset of ``git check-ref-format`` rules that matter for
      API paths (no ``/.`` component prefix, no ``..``, no control or space
      characters, none of ``~^:\\``, no trailing ``/``, no ``.lock`` suffix).
"""

from __future__ import annotations

import re
from typing import Any

from .exceptions import ValidationError

OWNER_MAX_LENGTH = 39
REPO_MAX_LENGTH = 100

_OWNER_INVALID = re.compile(r"[^a-z0-9-]", re.IGNORECASE)
_REPO_INVALID = re.compile(r"[^a-z0-9-]", re.IGNORECASE)
_BRANCH_INVALID = re.compile(r"[\x00-\x1f\x7f\s~^:\\]")


def _fail(field: str, value: Any, reason: str) -> None:
    raise ValidationError(f"{field} {reason}", field=field, value=value)


def validate_owner_name(owner: str | None) -> str:
    """Validate a user or organisation name.

    Returns:
        The owner name unchanged

    Raises:
        ValidationError: If the name breaks any of the owner rules
    """
    if owner is None:
        _fail("owner name", owner, "not defined")
    if len(owner) > OWNER_MAX_LENGTH:
        _fail("owner name", owner, "too long")
    if _OWNER_INVALID.search(owner):
        _fail("owner name", owner, "contains invalid characters")
    if "--" in owner:
        _fail("owner name", owner, "contains double hyphens")
    if owner.startswith("-"):
        _fail("owner name", owner, "contains leading hyphen")
    if owner.endswith("-"):
        _fail("owner name", owner, "contains trailing hyphen")
    return owner


def validate_repo_name(repo: str | None) -> str:
    """Validate a repository name."""
    if repo is None:
        _fail("repo name", repo, "not defined")
    if _REPO_INVALID.search(repo):
        _fail("repo name", repo, "contains invalid characters")
    if len(repo) > REPO_MAX_LENGTH:
        _fail("repo name", repo, "too long")
    return repo


def validate_branch_name(branch: str | None) -> str:
    """Validate a branch name against the ref-format rules above."""
    if branch is None:
        _fail("branch", branch, "not defined")
    if "/." in branch:
        _fail("branch", branch, "contains path component with leading .")
    if ".." in branch:
        _fail("branch", branch, "contains double .")
    if _BRANCH_INVALID.search(branch):
        _fail("branch", branch, "contains invalid character(s)")
    if branch.endswith("/"):
        _fail("branch", branch, "ends with /")
    if branch.endswith(".lock"):
        _fail("branch", branch, "ends with .lock")
    return branch


def validate_args(**kwargs: Any) -> None:
    """Apply validation to the common ``owner``/``repo``/``branch`` parameters.

    Parameters that are not present are skipped; anything else is ignored.
    """
    if "branch" in kwargs:
        validate_branch_name(kwargs["branch"])
    if "owner" in kwargs:
        validate_owner_name(kwargs["owner"])
    if "repo" in kwargs:
        validate_repo_name(kwargs["repo"])


def is_valid_owner_name(owner: str) -> bool:
    try:
        validate_owner_name(owner)
        return True
    except ValidationError:
        return False


def is_valid_branch_name(branch: str) -> bool:
    try:
        validate_branch_name(branch)
        return True
    except ValidationError:
        return False
