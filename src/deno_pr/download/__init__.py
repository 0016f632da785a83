"""Download-and-verify for CI artifacts."""

from deno_pr.download.digest import (
    ALGORITHMS,
    FALLBACK_ALGORITHM,
    canonical_algorithm,
    new_hasher,
    parse_digest,
    verify_bytes,
)
from deno_pr.download.verify import (
    DigestMismatch,
    DownloadResult,
    download_and_verify,
    write_verified,
)

__all__ = [
    "ALGORITHMS",
    "FALLBACK_ALGORITHM",
    "DigestMismatch",
    "DownloadResult",
    "canonical_algorithm",
    "download_and_verify",
    "new_hasher",
    "parse_digest",
    "verify_bytes",
    "write_verified",
]
