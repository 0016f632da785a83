"""PR/commit selection and CI run resolution."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import StrEnum

from deno_pr.errors import InvalidArgumentsError, UnresolvedRunError
from deno_pr.github.client import GitHubClient
from deno_pr.github.models import PullRequest, WorkflowRun

_LOGGER = logging.getLogger(__name__)

_PR_NUMBER = re.compile(r"[0-9]+")


class SelectionMode(StrEnum):
    """How the positional reference is interpreted."""

    PR = "pr"
    COMMIT = "commit"


@dataclass(frozen=True)
class Selection:
    """Validated lookup request. ``sha`` is unknown until a PR is resolved."""

    mode: SelectionMode
    sha: str | None = None
    number: int | None = None


def resolve_selection(
    reference: str, *, pr: bool | None = None, commit: bool = False
) -> Selection:
    """Validate selection flags without touching the network.

    Args:
        reference: Positional PR number or commit SHA.
        pr: Explicit ``--pr/--no-pr`` value, None when not given.
        commit: Whether ``--commit`` was given.

    Returns:
        Validated selection.

    Raises:
        InvalidArgumentsError: For conflicting, unresolvable or malformed input.
    """
    reference = reference.strip()
    if pr is True and commit:
        raise InvalidArgumentsError("`--pr` and `--commit` cannot exist together")
    if not reference:
        raise InvalidArgumentsError(
            "Require a positional argument for pr number or commit sha"
        )
    if commit:
        return Selection(mode=SelectionMode.COMMIT, sha=reference)
    if pr is not False:
        digits = reference.removeprefix("#")
        if not _PR_NUMBER.fullmatch(digits):
            raise InvalidArgumentsError(
                f"PR number must be an integer, got {reference!r}"
            )
        number = int(digits)
        if number <= 0:
            raise InvalidArgumentsError(f"PR number must be positive, got {number}")
        return Selection(mode=SelectionMode.PR, number=number)
    raise InvalidArgumentsError(
        "Unresolvable args: pass a PR number or use --commit",
        data={"reference": reference, "pr": pr, "commit": commit},
    )


def resolve_sha(
    client: GitHubClient, selection: Selection
) -> tuple[str, PullRequest | None]:
    """Resolve a selection to its commit SHA.

    Args:
        client: GitHub client.
        selection: Validated selection.

    Returns:
        Commit SHA and the fetched pull request (None in commit mode).
    """
    if selection.mode == SelectionMode.COMMIT:
        assert selection.sha is not None
        return selection.sha, None
    assert selection.number is not None
    _LOGGER.debug("Fetching PR %s", selection.number)
    pull = client.get_pull(selection.number)
    return pull.head_sha, pull


def resolve_run(client: GitHubClient, sha: str) -> WorkflowRun:
    """Find the CI run for a commit.

    Raises:
        UnresolvedRunError: If the commit has no CI run.
    """
    run = client.find_ci_run(sha)
    if run is None:
        raise UnresolvedRunError(
            f"Could not find ci run for commit {sha}", data={"sha": sha}
        )
    return run
