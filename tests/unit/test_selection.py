"""Unit tests for PR/commit selection and run resolution."""

from __future__ import annotations

import pytest

from deno_pr.config import GitHubSettings
from deno_pr.errors import ErrorCode, InvalidArgumentsError, UnresolvedRunError
from deno_pr.github import GitHubClient
from deno_pr.selection import (
    SelectionMode,
    resolve_run,
    resolve_selection,
    resolve_sha,
)
from tests.unit.helpers import API, FakeResponse, FakeSession, pull_payload, runs_payload


@pytest.mark.unit
def test_pr_is_the_default_mode() -> None:
    """Without flags the reference is a PR number."""
    selection = resolve_selection("42")

    assert selection.mode == SelectionMode.PR
    assert selection.number == 42
    assert selection.sha is None


@pytest.mark.unit
def test_hash_prefixed_pr_number_is_accepted() -> None:
    """``#42`` reads as PR 42."""
    assert resolve_selection("#42", pr=True).number == 42


@pytest.mark.unit
def test_commit_mode_keeps_sha() -> None:
    """``--commit`` takes the reference as a SHA."""
    selection = resolve_selection("deadbeef", commit=True)

    assert selection.mode == SelectionMode.COMMIT
    assert selection.sha == "deadbeef"
    assert selection.number is None


@pytest.mark.unit
def test_pr_and_commit_together_are_rejected() -> None:
    """Both modes at once fail with invalid_arguments."""
    with pytest.raises(InvalidArgumentsError, match="cannot exist together") as exc_info:
        resolve_selection("42", pr=True, commit=True)

    assert exc_info.value.code == ErrorCode.INVALID_ARGUMENTS


@pytest.mark.unit
def test_no_pr_without_commit_is_unresolvable() -> None:
    """Disabling PR mode without commit mode leaves nothing to resolve."""
    with pytest.raises(InvalidArgumentsError, match="Unresolvable"):
        resolve_selection("42", pr=False)


@pytest.mark.unit
@pytest.mark.parametrize(
    "reference", ["abc", "4.2", "0", "-3", "  ", "4_2", "\u0664\u0662", "+7"]
)
def test_malformed_pr_numbers_are_rejected(reference: str) -> None:
    """PR references must be positive integers."""
    with pytest.raises(InvalidArgumentsError):
        resolve_selection(reference)


@pytest.mark.unit
def test_resolve_sha_commit_mode_skips_network(github_settings: GitHubSettings) -> None:
    """Commit mode never calls the API."""
    session = FakeSession({})
    client = GitHubClient(github_settings, session=session)

    sha, pull = resolve_sha(client, resolve_selection("cafe", commit=True))

    assert (sha, pull) == ("cafe", None)
    assert session.calls == []


@pytest.mark.unit
def test_resolve_sha_pr_mode_uses_head_sha(github_settings: GitHubSettings) -> None:
    """PR mode resolves the PR head commit."""
    session = FakeSession(
        {f"{API}/pulls/42": FakeResponse(payload=pull_payload(42, "f00d"))}
    )
    client = GitHubClient(github_settings, session=session)

    sha, pull = resolve_sha(client, resolve_selection("42"))

    assert sha == "f00d"
    assert pull is not None
    assert pull.title == "fix: something"


@pytest.mark.unit
def test_resolve_run_raises_when_commit_has_no_ci_run(
    github_settings: GitHubSettings,
) -> None:
    """Missing CI run is an unresolved_run failure."""
    session = FakeSession(
        {f"{API}/actions/runs": FakeResponse(payload=runs_payload())}
    )
    client = GitHubClient(github_settings, session=session)

    with pytest.raises(UnresolvedRunError, match="f00d") as exc_info:
        resolve_run(client, "f00d")

    assert exc_info.value.data == {"sha": "f00d"}
