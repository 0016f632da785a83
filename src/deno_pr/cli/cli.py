"""Typer CLI entrypoint for deno-pr."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from deno_pr import __version__
from deno_pr.artifacts import artifact_name, default_target, match_artifacts
from deno_pr.cli import bootstrap
from deno_pr.cli.rendering import (
    DownloadProgress,
    render_artifact,
    render_digest_mismatch,
    render_download,
    render_error,
    render_pull,
)
from deno_pr.config import DenoPrConfig
from deno_pr.download import DigestMismatch, download_and_verify
from deno_pr.errors import DenoPrError, NoArtifactMatchError
from deno_pr.github import GitHubClient
from deno_pr.selection import Selection, resolve_run, resolve_selection, resolve_sha

_LOGGER = logging.getLogger(__name__)

app = typer.Typer(
    name="deno-pr",
    help="Download and verify Deno CI build artifacts for a PR or commit.",
    add_completion=False,
)
_CONSOLE = Console()


def _build_client(config: DenoPrConfig) -> GitHubClient:
    return bootstrap.build_client(config)


def _confirm_keep(mismatch: DigestMismatch, progress: DownloadProgress) -> bool:
    """Show mismatch details and ask whether to keep the file.

    Args:
        mismatch: Failed verification details.
        progress: Active progress bar, stopped before prompting.

    Returns:
        True when the operator keeps the file.
    """
    progress.stop()
    _LOGGER.error("Invalid digest. File may be corrupted or being hijacked")
    render_digest_mismatch(_CONSOLE, mismatch)
    return typer.confirm("Do you want to save the file", default=False)


def _execute(
    *,
    selection: Selection,
    target: str,
    output: Path | None,
    assume_yes: bool,
    config: DenoPrConfig,
) -> None:
    """Run the resolve -> list -> match -> download pipeline.

    Args:
        selection: Validated PR/commit selection.
        target: ``<os>-<arch>`` artifact target.
        output: Optional output path; prompts when absent.
        assume_yes: Skip the download confirmation.
        config: Effective configuration.

    Raises:
        NoArtifactMatchError: If no artifact matches the computed name.
    """
    with _build_client(config) as client:
        sha, pull = resolve_sha(client, selection)
        if pull is not None:
            render_pull(_CONSOLE, pull)
        _LOGGER.debug("Commit SHA:   %s", sha)
        _LOGGER.debug("Event Number: %s", selection.number or "<none>")

        _LOGGER.info("Fetching Workflows with %s", sha)
        run = resolve_run(client, sha)
        pattern = artifact_name(
            target, selection.number, prefix=config.download.artifact_prefix
        )
        _LOGGER.info("Search for Artifact with name: %s", pattern)

        _LOGGER.debug("Fetching Artifacts with Run %s", run.id)
        artifacts = client.list_artifacts(run.id)
        for candidate in artifacts:
            _LOGGER.debug("Checking Artifact [%s]", candidate.name)
        matches = match_artifacts(artifacts, pattern)
        if not matches:
            _LOGGER.warning("No artifacts matches.")
            raise NoArtifactMatchError(
                "No artifact matches found.",
                data={"pattern": pattern, "run_id": run.id},
            )

        artifact = matches[0]
        render_artifact(
            _CONSOLE, artifact, client.artifact_archive_url(run.id, artifact.id)
        )
        if not assume_yes and not typer.confirm(
            "Do you want to download", default=False
        ):
            return

        client.require_token()
        destination = output or Path(typer.prompt("Download Path", default=pattern))
        with DownloadProgress(
            _CONSOLE, title=pattern, total=artifact.size_in_bytes
        ) as progress:
            result = download_and_verify(
                client,
                artifact.archive_download_url,
                destination,
                expected_digest=artifact.digest,
                on_progress=progress,
                keep_on_mismatch=lambda mismatch: _confirm_keep(mismatch, progress),
                chunk_size=config.download.chunk_size,
            )
        if result.verified:
            _LOGGER.info("Digest is okay")
        render_download(_CONSOLE, result)


def _version_callback(value: bool) -> None:
    if value:
        _CONSOLE.print(f"deno-pr {__version__}")
        raise typer.Exit()


@app.command()
def main(  # noqa: PLR0913
    reference: Annotated[
        str, typer.Argument(help="PR number or commit SHA.", show_default=False)
    ],
    pr: Annotated[
        bool | None,
        typer.Option(
            "--pr/--no-pr",
            help="Treat REFERENCE as a PR number (default unless --commit).",
            show_default=False,
        ),
    ] = None,
    commit: Annotated[
        bool,
        typer.Option("--commit", help="Treat REFERENCE as a commit SHA."),
    ] = False,
    target: Annotated[
        str | None,
        typer.Option(help="Artifact target, defaults to host <os>-<arch>."),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            file_okay=True,
            dir_okay=False,
            help="Download path; prompts when omitted.",
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Download without confirmation."),
    ] = False,
    config_file: Annotated[
        Path | None,
        typer.Option(
            file_okay=True,
            dir_okay=False,
            help="Path to deno-pr config YAML/JSON file.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Resolve a PR or commit to its CI artifact, then download and verify it.

    Args:
        reference: PR number or commit SHA.
        pr: Explicit PR mode flag.
        commit: Commit mode flag.
        target: Optional artifact target override.
        output: Optional download path.
        yes: Skip the download confirmation.
        config_file: Optional config file override.
        verbose: Enable debug logging.
        version: Show version and exit.

    Raises:
        Exit: Raised with status 1 on any deno-pr failure.
    """
    del version
    bootstrap.configure_logging(verbose=verbose)
    try:
        selection = resolve_selection(reference, pr=pr, commit=commit)
        config = bootstrap.resolve_config(config_file)
        _execute(
            selection=selection,
            target=target or default_target(),
            output=output,
            assume_yes=yes,
            config=config,
        )
    except DenoPrError as exc:
        render_error(_CONSOLE, exc)
        raise typer.Exit(code=1) from exc


if __name__ == "__main__":
    app()
