"""Thin GitHub REST client for the PR -> run -> artifact lookups."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from types import TracebackType
from typing import Any

import requests

from deno_pr import __version__
from deno_pr.config import GitHubSettings
from deno_pr.errors import (
    EmptyResponseBodyError,
    GitHubApiError,
    MissingCredentialError,
)
from deno_pr.github.models import Artifact, PullRequest, WorkflowRun

_LOGGER = logging.getLogger(__name__)

TOKEN_ENV_VAR = "GITHUB_TOKEN"  # nosec B105
_PAGE_SIZE = 100
_BODYLESS_STATUSES = frozenset({204, 205, 304})


def build_session(token: str | None, *, api_version: str) -> requests.Session:
    """Create a requests session carrying GitHub API headers.

    Args:
        token: Optional bearer token.
        api_version: Value for the ``X-GitHub-Api-Version`` header.

    Returns:
        Configured session.
    """
    session = requests.Session()
    session.headers["Accept"] = "application/vnd.github+json"
    session.headers["X-GitHub-Api-Version"] = api_version
    session.headers["User-Agent"] = (
        f"python-requests/{requests.__version__} deno-pr/{__version__}"
    )
    if token:
        session.headers["Authorization"] = f"Bearer {token}"
    return session


class GitHubClient:
    """Read-only access to one repository's pulls, runs and artifacts."""

    def __init__(
        self,
        settings: GitHubSettings,
        *,
        token: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """Store settings and the HTTP session.

        Args:
            settings: Repository and API coordinates.
            token: Optional GitHub token; required for downloads.
            session: Optional pre-built session (tests inject fakes).
        """
        self._settings = settings
        self._token = token
        self._session = session or build_session(
            token, api_version=settings.api_version
        )

    def require_token(self) -> str:
        """Return the download token.

        Returns:
            Configured token.

        Raises:
            MissingCredentialError: If no token is configured.
        """
        if not self._token:
            raise MissingCredentialError(
                f"{TOKEN_ENV_VAR} is required to download artifacts from API"
            )
        return self._token

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _repo_url(self, path: str) -> str:
        api_url = self._settings.api_url.rstrip("/")
        return f"{api_url}/repos/{self._settings.owner}/{self._settings.repo}/{path}"

    def _get(
        self, url: str, *, what: str, params: dict[str, Any] | None = None
    ) -> requests.Response:
        _LOGGER.debug("GET %s params=%s", url, params)
        try:
            response = self._session.get(
                url, params=params, timeout=self._settings.timeout_seconds
            )
        except requests.RequestException as exc:
            raise GitHubApiError(
                f"Failed to retrieve {what}: {exc}", data={"url": url}
            ) from exc
        if response.status_code != 200:
            raise GitHubApiError(
                f"Failed to retrieve {what} (status code: {response.status_code})",
                data={"url": url, "status": response.status_code},
            )
        return response

    def _paginate(
        self, path: str, *, key: str, what: str, params: dict[str, Any]
    ) -> Iterator[dict[str, Any]]:
        """Yield items under ``key`` across ``Link: next`` pages.

        Args:
            path: Repository-relative API path.
            key: Payload key holding the item list.
            what: Resource label for error messages.
            params: Query parameters for the first page.

        Yields:
            Raw item payloads.
        """
        url: str | None = self._repo_url(path)
        page_params: dict[str, Any] | None = {**params, "per_page": _PAGE_SIZE}
        while url:
            response = self._get(url, what=what, params=page_params)
            yield from response.json().get(key, [])
            url = response.links.get("next", {}).get("url")
            page_params = None

    def get_pull(self, number: int) -> PullRequest:
        """Fetch one pull request.

        Args:
            number: Pull request number.

        Returns:
            Parsed pull request.
        """
        response = self._get(self._repo_url(f"pulls/{number}"), what="PR info")
        return PullRequest.model_validate(response.json())

    def list_runs_for_sha(self, sha: str) -> list[WorkflowRun]:
        """List workflow runs triggered for a head commit.

        Args:
            sha: Head commit SHA.

        Returns:
            Runs in API order.
        """
        return [
            WorkflowRun.model_validate(item)
            for item in self._paginate(
                "actions/runs",
                key="workflow_runs",
                what="workflow runs",
                params={"head_sha": sha},
            )
        ]

    def find_ci_run(self, sha: str) -> WorkflowRun | None:
        """Return the first run named after the configured CI workflow.

        Args:
            sha: Head commit SHA.

        Returns:
            Matching run, or None when the commit has no CI run.
        """
        for run in self.list_runs_for_sha(sha):
            if run.name == self._settings.workflow_name:
                return run
            _LOGGER.debug("Skipping run %s (%s)", run.id, run.name)
        return None

    def list_artifacts(self, run_id: int) -> list[Artifact]:
        """List artifacts uploaded by one run.

        Args:
            run_id: Workflow run id.

        Returns:
            Artifacts in API order.
        """
        return [
            Artifact.model_validate(item)
            for item in self._paginate(
                f"actions/runs/{run_id}/artifacts",
                key="artifacts",
                what="run artifacts",
                params={},
            )
        ]

    def artifact_archive_url(self, run_id: int, artifact_id: int) -> str:
        """Build the browser URL of an artifact archive.

        Args:
            run_id: Workflow run id.
            artifact_id: Artifact id.

        Returns:
            Web UI URL.
        """
        web_url = self._settings.web_url.rstrip("/")
        return (
            f"{web_url}/{self._settings.owner}/{self._settings.repo}"
            f"/actions/runs/{run_id}/artifacts/{artifact_id}"
        )

    def open_download(self, url: str) -> requests.Response:
        """Open an authenticated, streamed artifact download.

        Args:
            url: Archive download URL from the artifact payload.

        Returns:
            Streaming response with a readable body. Caller must close it.

        Raises:
            MissingCredentialError: If no token is configured.
            GitHubApiError: If the server answers with a failure status.
            EmptyResponseBodyError: If the response carries no body.
        """
        token = self.require_token()
        _LOGGER.debug("Downloading %s", url)
        try:
            response = self._session.get(
                url,
                headers={"Authorization": f"Bearer {token}"},
                stream=True,
                timeout=self._settings.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise GitHubApiError(f"Download failed: {exc}", data={"url": url}) from exc
        if not response.ok:
            response.close()
            raise GitHubApiError(
                f"Download failed (status code: {response.status_code})",
                data={"url": url, "status": response.status_code},
            )
        if response.status_code in _BODYLESS_STATUSES or response.raw is None:
            response.close()
            raise EmptyResponseBodyError(
                "Download failed, body is null",
                data={"url": url, "status": response.status_code},
            )
        return response
