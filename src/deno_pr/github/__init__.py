"""GitHub REST access for PRs, workflow runs and artifacts."""

from deno_pr.github.client import GitHubClient, build_session
from deno_pr.github.models import Artifact, PullRequest, WorkflowRun

__all__ = [
    "Artifact",
    "GitHubClient",
    "PullRequest",
    "WorkflowRun",
    "build_session",
]
