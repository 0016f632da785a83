"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from deno_pr.config import GitHubSettings


@pytest.fixture
def github_settings() -> GitHubSettings:
    """Default repository coordinates (denoland/deno on api.github.com)."""
    return GitHubSettings()


@pytest.fixture
def download_dir(tmp_path: Path) -> Path:
    """Empty directory for downloaded artifacts."""
    target = tmp_path / "downloads"
    target.mkdir()
    return target


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep real tokens and config files out of tests."""
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.setenv("DENO_PR_CONFIG", str(tmp_path / "missing-config.yaml"))
