"""Test-only fakes for the requests session used by GitHubClient."""

from __future__ import annotations

import hashlib
from collections.abc import Iterator
from typing import Any

API = "https://api.github.com/repos/denoland/deno"


class FakeResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(
        self,
        *,
        status_code: int = 200,
        payload: Any = None,
        body: bytes | None = None,
        links: dict[str, dict[str, str]] | None = None,
        chunk_size: int | None = None,
        has_raw: bool = True,
        stream_error: Exception | None = None,
    ) -> None:
        self.status_code = status_code
        self._payload = payload
        self._body = body if body is not None else b""
        self.links = links or {}
        self._forced_chunk_size = chunk_size
        self.raw = object() if has_raw else None
        self._stream_error = stream_error
        self.closed = False

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        return self._payload

    def iter_content(self, chunk_size: int | None = 1) -> Iterator[bytes]:
        size = self._forced_chunk_size or chunk_size or len(self._body) or 1
        for start in range(0, len(self._body), size):
            yield self._body[start : start + size]
        if self._stream_error is not None:
            raise self._stream_error

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """Route GETs by URL to queued fake responses and record every call."""

    def __init__(
        self, routes: dict[str, FakeResponse | Exception | list[FakeResponse]]
    ) -> None:
        self._routes = {
            url: list(value) if isinstance(value, list) else [value]
            for url, value in routes.items()
        }
        self.calls: list[dict[str, Any]] = []
        self.headers: dict[str, str] = {}
        self.closed = False

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        queue = self._routes.get(url)
        if not queue:
            raise AssertionError(f"unexpected GET {url}")
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True

    @property
    def urls(self) -> list[str]:
        return [call["url"] for call in self.calls]


def artifact_payload(
    name: str,
    *,
    artifact_id: int = 1,
    body: bytes = b"",
    digest: str | None = "auto",
) -> dict[str, Any]:
    """Build one artifact payload; ``digest="auto"`` derives sha256 of body."""
    if digest == "auto":
        digest = f"sha256:{hashlib.sha256(body).hexdigest()}"
    return {
        "id": artifact_id,
        "name": name,
        "size_in_bytes": len(body),
        "digest": digest,
        "archive_download_url": f"{API}/actions/artifacts/{artifact_id}/zip",
        "expired": False,
    }


def pull_payload(
    number: int = 42, sha: str = "abc123", *, title: str = "fix: something"
) -> dict[str, Any]:
    """Build a pull request payload in GitHub's nested shape."""
    return {
        "number": number,
        "title": title,
        "draft": False,
        "head": {"sha": sha, "ref": "fix-branch"},
        "user": {
            "login": "octocat",
            "url": "https://api.github.com/users/octocat",
            "html_url": "https://github.com/octocat",
        },
    }


def runs_payload(*runs: tuple[int, str, str]) -> dict[str, Any]:
    """Build a workflow runs payload from ``(id, name, sha)`` tuples."""
    return {
        "total_count": len(runs),
        "workflow_runs": [
            {"id": run_id, "name": name, "head_sha": sha} for run_id, name, sha in runs
        ],
    }
