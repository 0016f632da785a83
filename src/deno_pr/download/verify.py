"""Stream an artifact to disk while checking its declared digest."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

import requests

from deno_pr.download.digest import canonical_algorithm, new_hasher, parse_digest
from deno_pr.errors import DigestMismatchError, GitHubApiError
from deno_pr.github.client import GitHubClient

_LOGGER = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 65536


@dataclass(frozen=True)
class DigestMismatch:
    """Expected and computed digests of a failed verification."""

    path: Path
    algorithm: str
    expected: str
    actual: str


@dataclass(frozen=True)
class DownloadResult:
    """Outcome of one completed download."""

    path: Path
    bytes_written: int
    algorithm: str | None = None
    expected_digest: str | None = None
    actual_digest: str | None = None

    @property
    def verified(self) -> bool:
        """Whether a declared digest was checked and matched."""
        return self.expected_digest is not None and (
            self.expected_digest == self.actual_digest
        )


def write_verified(
    chunks: Iterable[bytes],
    destination: Path,
    *,
    expected_digest: str | None = None,
    on_progress: Callable[[int], None] | None = None,
    keep_on_mismatch: Callable[[DigestMismatch], bool] | None = None,
) -> DownloadResult:
    """Write chunks to ``destination`` and verify them incrementally.

    The destination is created or truncated. When ``expected_digest`` is set,
    every chunk also feeds a rolling hash context; on mismatch
    ``keep_on_mismatch`` decides whether the written file survives.

    Args:
        chunks: Byte chunks in stream order.
        destination: Output file path.
        expected_digest: Optional ``algorithm:hex`` digest.
        on_progress: Called with cumulative bytes written after each chunk.
        keep_on_mismatch: Decides whether to keep a file that failed checks.

    Returns:
        Download outcome.

    Raises:
        DigestMismatchError: If the computed digest differs from the declared one.
    """
    algorithm: str | None = None
    expected: str | None = None
    hasher = None
    if expected_digest:
        token, expected = parse_digest(expected_digest)
        algorithm = canonical_algorithm(token)
        hasher = new_hasher(algorithm)

    written = 0
    try:
        with destination.open("wb") as handle:
            for chunk in chunks:
                if not chunk:
                    continue
                handle.write(chunk)
                if hasher is not None:
                    hasher.update(chunk)
                written += len(chunk)
                if on_progress is not None:
                    on_progress(written)
    except BaseException:
        # A truncated stream is never left behind as if it were the artifact.
        destination.unlink(missing_ok=True)
        raise
    _LOGGER.debug("Wrote %d bytes to %s", written, destination)

    if hasher is None:
        return DownloadResult(path=destination, bytes_written=written)

    actual = hasher.hexdigest()
    if actual != expected:
        mismatch = DigestMismatch(
            path=destination,
            algorithm=algorithm or "",
            expected=expected or "",
            actual=actual,
        )
        keep = keep_on_mismatch(mismatch) if keep_on_mismatch is not None else False
        if not keep:
            destination.unlink(missing_ok=True)
        raise DigestMismatchError(
            "Artifact Digest verification failed",
            data={
                "path": str(destination),
                "algorithm": mismatch.algorithm,
                "expected": mismatch.expected,
                "actual": mismatch.actual,
                "kept": keep,
            },
        )
    return DownloadResult(
        path=destination,
        bytes_written=written,
        algorithm=algorithm,
        expected_digest=expected,
        actual_digest=actual,
    )


def download_and_verify(  # noqa: PLR0913
    client: GitHubClient,
    url: str,
    destination: Path,
    *,
    expected_digest: str | None = None,
    on_progress: Callable[[int], None] | None = None,
    keep_on_mismatch: Callable[[DigestMismatch], bool] | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> DownloadResult:
    """Download ``url`` to ``destination`` and verify its digest.

    The response body is checked before the destination is touched, so a
    bodyless response never leaves an output file behind.

    Args:
        client: GitHub client holding the download credential.
        url: Archive download URL.
        destination: Output file path.
        expected_digest: Optional ``algorithm:hex`` digest.
        on_progress: Called with cumulative bytes written after each chunk.
        keep_on_mismatch: Decides whether to keep a file that failed checks.
        chunk_size: Read size for the response stream.

    Returns:
        Download outcome.
    """
    response = client.open_download(url)
    try:
        return write_verified(
            response.iter_content(chunk_size=chunk_size),
            destination,
            expected_digest=expected_digest,
            on_progress=on_progress,
            keep_on_mismatch=keep_on_mismatch,
        )
    except requests.RequestException as exc:
        raise GitHubApiError(
            f"Download interrupted: {exc}", data={"url": url}
        ) from exc
    finally:
        response.close()
