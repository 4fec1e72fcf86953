"""Unit tests for owner, repository and branch name validation."""

import pytest

from octoloop.github.core import (
    ValidationError,
    is_valid_branch_name,
    is_valid_owner_name,
    validate_args,
    validate_branch_name,
    validate_owner_name,
    validate_repo_name,
)


class TestOwnerName:
    """Test owner (user/organisation) name rules."""

    @pytest.mark.parametrize("owner", ["abc", "a", "a-b", "ABC123", "a" * 39])
    def test_valid(self, owner):
        assert validate_owner_name(owner) == owner

    @pytest.mark.parametrize(
        "owner,reason",
        [
            ("-abc", "leading hyphen"),
            ("abc-", "trailing hyphen"),
            ("a--b", "double hyphens"),
            ("a" * 40, "too long"),
            ("ab_c", "invalid characters"),
            ("a.b", "invalid characters"),
        ],
    )
    def test_invalid(self, owner, reason):
        with pytest.raises(ValidationError, match=reason) as exc_info:
            validate_owner_name(owner)
        assert exc_info.value.value == owner

    def test_none(self):
        with pytest.raises(ValidationError, match="not defined"):
            validate_owner_name(None)

    def test_predicate(self):
        assert is_valid_owner_name("abc")
        assert not is_valid_owner_name("-abc")


class TestBranchName:
    """Test git ref-format rules for branch names."""

    @pytest.mark.parametrize("branch", ["feature/x", "main", "release-1.2", "a.b/c"])
    def test_valid(self, branch):
        assert validate_branch_name(branch) == branch

    @pytest.mark.parametrize(
        "branch,reason",
        [
            ("a/.b", "leading \\."),
            ("a..b", "double \\."),
            ("refs/heads/x.lock", "\\.lock"),
            ("feature/", "ends with /"),
            ("has space", "invalid character"),
            ("a~1", "invalid character"),
            ("a^b", "invalid character"),
            ("a:b", "invalid character"),
            ("a\\b", "invalid character"),
            ("tab\there", "invalid character"),
        ],
    )
    def test_invalid(self, branch, reason):
        with pytest.raises(ValidationError, match=reason):
            validate_branch_name(branch)

    def test_predicate(self):
        assert is_valid_branch_name("feature/x")
        assert not is_valid_branch_name("a..b")


class TestRepoName:
    def test_valid(self):
        assert validate_repo_name("my-repo") == "my-repo"

    def test_too_long(self):
        with pytest.raises(ValidationError, match="too long"):
            validate_repo_name("r" * 101)

    def test_invalid_characters(self):
        with pytest.raises(ValidationError, match="invalid characters"):
            validate_repo_name("repo/other")


class TestValidateArgs:
    def test_checks_present_fields_only(self):
        validate_args(owner="abc", unrelated="--anything--")

    def test_branch_checked(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_args(owner="abc", repo="repo", branch="bad/")
        assert exc_info.value.field == "branch"

    def test_owner_checked(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_args(owner="-abc")
        assert exc_info.value.field == "owner name"
