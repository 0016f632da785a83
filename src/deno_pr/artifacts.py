"""Artifact naming and prefix matching."""

from __future__ import annotations

import platform
from collections.abc import Iterable

from deno_pr.github.models import Artifact

_OS_NAMES = {
    "darwin": "darwin",
    "linux": "linux",
    "windows": "windows",
}
_ARCH_NAMES = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "x64": "x86_64",
    "aarch64": "aarch64",
    "arm64": "aarch64",
}


def default_target() -> str:
    """Return the host ``<os>-<arch>`` target string, e.g. ``linux-x86_64``."""
    system = platform.system().lower()
    machine = platform.machine().lower()
    return f"{_OS_NAMES.get(system, system)}-{_ARCH_NAMES.get(machine, machine)}"


def artifact_name(target: str, number: int | None, *, prefix: str = "deno") -> str:
    """Build the artifact name pattern for a target and optional PR number.

    Args:
        target: ``<os>-<arch>`` target string.
        number: PR number, or None for commit lookups.
        prefix: Artifact name prefix.

    Returns:
        Pattern such as ``deno-linux-x86_64-42`` or ``deno-linux-x86_64-``.
    """
    return f"{prefix}-{target}-{number or ''}"


def match_artifacts(artifacts: Iterable[Artifact], pattern: str) -> list[Artifact]:
    """Keep artifacts whose name starts with ``pattern``, in input order."""
    return [artifact for artifact in artifacts if artifact.name.startswith(pattern)]
