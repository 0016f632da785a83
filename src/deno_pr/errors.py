"""Deterministic deno-pr error contracts."""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Stable failure codes surfaced by the CLI."""

    INVALID_ARGUMENTS = "invalid_arguments"
    UNRESOLVED_RUN = "unresolved_run"
    NO_ARTIFACT_MATCH = "no_artifact_match"
    MISSING_CREDENTIAL = "missing_credential"
    EMPTY_RESPONSE_BODY = "empty_response_body"
    DIGEST_MISMATCH = "digest_mismatch"
    API_REQUEST_FAILED = "api_request_failed"
    CONFIG_INVALID = "config_invalid"


class DenoPrError(RuntimeError):
    """Fatal deno-pr failure with stable deterministic code."""

    code: ErrorCode = ErrorCode.INVALID_ARGUMENTS

    def __init__(
        self,
        message: str,
        *,
        data: dict[str, object] | None = None,
    ) -> None:
        """Create failure.

        Args:
            message: Human-readable error message.
            data: Optional structured payload for diagnostics.
        """
        super().__init__(message)
        self.data = data or {}


class InvalidArgumentsError(DenoPrError):
    """Raised when the PR/commit selection cannot be resolved."""

    code = ErrorCode.INVALID_ARGUMENTS


class UnresolvedRunError(DenoPrError):
    """Raised when no CI workflow run exists for a commit."""

    code = ErrorCode.UNRESOLVED_RUN


class NoArtifactMatchError(DenoPrError):
    """Raised when no artifact name starts with the requested pattern."""

    code = ErrorCode.NO_ARTIFACT_MATCH


class MissingCredentialError(DenoPrError):
    """Raised when an authenticated download is requested without a token."""

    code = ErrorCode.MISSING_CREDENTIAL


class EmptyResponseBodyError(DenoPrError):
    """Raised when a download response carries no readable body."""

    code = ErrorCode.EMPTY_RESPONSE_BODY


class DigestMismatchError(DenoPrError):
    """Raised when the downloaded bytes do not match the declared digest."""

    code = ErrorCode.DIGEST_MISMATCH


class GitHubApiError(DenoPrError):
    """Raised when the GitHub REST API answers with a failure status."""

    code = ErrorCode.API_REQUEST_FAILED


class ConfigError(DenoPrError):
    """Raised when the config file cannot be decoded or validated."""

    code = ErrorCode.CONFIG_INVALID
