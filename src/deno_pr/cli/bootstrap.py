"""CLI bootstrap helpers: logging, config and client wiring."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from rich.logging import RichHandler

from deno_pr.config import DenoPrConfig, default_config_path, load_config
from deno_pr.github import GitHubClient
from deno_pr.github.client import TOKEN_ENV_VAR

_LOGGING_CONFIGURED = False


def configure_logging(*, verbose: bool = False) -> None:
    """Configure Rich-backed logging once for CLI commands.

    Args:
        verbose: Emit debug records when true.
    """
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    level = logging.DEBUG if verbose else logging.INFO
    if _LOGGING_CONFIGURED:
        logging.getLogger().setLevel(level)
        return
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
    )
    # urllib3 debug output duplicates our own request tracing.
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    _LOGGING_CONFIGURED = True


def resolve_config(config_file: Path | None) -> DenoPrConfig:
    """Load config from an explicit path or the default location.

    Args:
        config_file: Optional explicit config path.

    Returns:
        Parsed config, defaults when no file exists.
    """
    return load_config(config_file or default_config_path())


def build_client(config: DenoPrConfig) -> GitHubClient:
    """Build a GitHub client using the token from the environment.

    Args:
        config: Effective configuration.

    Returns:
        Client bound to the configured repository.
    """
    token = os.environ.get(TOKEN_ENV_VAR) or None
    return GitHubClient(config.github, token=token)
