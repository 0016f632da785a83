"""Rich views for PR details, artifacts, progress and failures."""

from __future__ import annotations

from types import TracebackType

from rich.console import Console
from rich.json import JSON
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)
from rich.table import Table

from deno_pr.download import DigestMismatch, DownloadResult
from deno_pr.errors import DenoPrError, ErrorCode
from deno_pr.github import Artifact, PullRequest

_SECURITY_ALERT_CODES = frozenset({ErrorCode.DIGEST_MISMATCH})


def render_pull(console: Console, pull: PullRequest) -> None:
    """Render pull request summary.

    Args:
        console: Target console.
        pull: Fetched pull request.
    """
    draft = "<unknown>" if pull.draft is None else str(pull.draft).lower()
    console.print(
        Panel(
            (
                f"Title:    {escape(pull.title)}\n"
                f"User:     {escape(pull.user_login)} ({escape(pull.user_url)})\n"
                f"Is Draft: {escape(draft)}\n"
                f"Head SHA: {escape(pull.head_sha)}"
            ),
            title=f"PR #{pull.number}",
            border_style="cyan",
            expand=True,
        )
    )


def render_artifact(console: Console, artifact: Artifact, archive_url: str) -> None:
    """Render matched artifact details as a key/value table."""
    table = Table(title="Found artifact", show_header=False, header_style="bold cyan")
    table.add_column("Field", style="bold")
    table.add_column("Value", overflow="fold")
    table.add_row("Name", escape(artifact.name))
    table.add_row("Archive URL", escape(archive_url))
    table.add_row("Archive URL (API)", escape(artifact.archive_download_url))
    table.add_row("Archive Size", str(artifact.size_in_bytes))
    table.add_row("Archive Digest", escape(artifact.digest or "<none>"))
    console.print(table)


def render_digest_mismatch(console: Console, mismatch: DigestMismatch) -> None:
    """Render expected vs actual digests of a failed verification."""
    console.print(
        Panel(
            (
                "[bold white on red] SECURITY ALERT [/bold white on red]\n"
                "Invalid digest. File may be corrupted or being hijacked.\n\n"
                f"Algorithm:     {escape(mismatch.algorithm)}\n"
                f"Expect digest: {escape(mismatch.expected)}\n"
                f"Actual digest: {escape(mismatch.actual)}"
            ),
            title="Digest Mismatch",
            border_style="bold bright_red",
            expand=True,
        )
    )


def render_download(console: Console, result: DownloadResult) -> None:
    """Render completed download summary."""
    if result.expected_digest is None:
        status = "[yellow]not declared[/yellow]"
    else:
        status = f"[green]ok[/green] ({escape(result.algorithm or '')})"
    console.print(
        Panel(
            (
                f"Path:   {escape(str(result.path))}\n"
                f"Bytes:  {result.bytes_written}\n"
                f"Digest: {status}"
            ),
            title="Downloaded",
            border_style="green",
            expand=True,
        )
    )


def render_error(console: Console, error: DenoPrError) -> None:
    """Render a fatal error panel with optional diagnostics payload.

    Args:
        console: Target console.
        error: Raised deno-pr error.
    """
    alert = error.code in _SECURITY_ALERT_CODES
    label = "SECURITY ALERT" if alert else "Error"
    console.print(
        Panel(
            escape(str(error)),
            title=escape(f"{label} [{error.code}]"),
            border_style="bold bright_red" if alert else "bold red",
            expand=True,
        )
    )
    if error.data:
        console.print(
            Panel(
                JSON.from_data(error.data, default=str),
                title="Data",
                border_style="cyan",
                expand=True,
            )
        )


class DownloadProgress:
    """Transfer progress bar fed with cumulative byte counts."""

    def __init__(self, console: Console, *, title: str, total: int) -> None:
        """Create the bar without starting it.

        Args:
            console: Target console.
            title: Bar label.
            total: Expected byte count; 0 renders an indeterminate bar.
        """
        self._progress = Progress(
            TextColumn("{task.description}", style="bold cyan", markup=False),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
            console=console,
        )
        self._task_id = self._progress.add_task(title, total=total or None)

    def __enter__(self) -> DownloadProgress:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()

    def __call__(self, completed: int) -> None:
        self._progress.update(self._task_id, completed=completed)

    def stop(self) -> None:
        """Stop live rendering, e.g. before prompting the operator."""
        self._progress.stop()
