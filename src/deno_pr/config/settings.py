"""deno-pr config models and loading helpers."""

from __future__ import annotations

import json
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from deno_pr.errors import ConfigError

CONFIG_ENV_VAR = "DENO_PR_CONFIG"
DEFAULT_CONFIG_FILE = ".deno-pr.yaml"


class GitHubSettings(BaseModel):
    """Repository and REST API coordinates."""

    model_config = ConfigDict(extra="forbid")

    owner: str = Field(default="denoland", min_length=1)
    repo: str = Field(default="deno", min_length=1)
    api_url: str = "https://api.github.com"
    web_url: str = "https://github.com"
    api_version: str = "2022-11-28"
    workflow_name: str = Field(default="ci", min_length=1)
    timeout_seconds: float = Field(default=30.0, gt=0, le=600)


class DownloadSettings(BaseModel):
    """Artifact naming and streaming configuration."""

    model_config = ConfigDict(extra="forbid")

    chunk_size: int = Field(default=65536, ge=1024, le=16 * 1024 * 1024)
    artifact_prefix: str = Field(default="deno", min_length=1)


class DenoPrConfig(BaseModel):
    """Root deno-pr configuration model."""

    model_config = ConfigDict(extra="forbid")

    github: GitHubSettings = GitHubSettings()
    download: DownloadSettings = DownloadSettings()


def default_config_path() -> Path:
    """Return config path from the environment or the working directory.

    Returns:
        Config file path (may not exist).
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path.cwd() / DEFAULT_CONFIG_FILE


def _decode_config_payload(path: Path) -> dict[str, object]:
    """Decode config payload from JSON or YAML.

    Args:
        path: Config file path.

    Returns:
        Parsed mapping payload.

    Raises:
        ConfigError: If decode fails or payload is not an object.
    """
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid config JSON: {exc}") from exc
    else:
        try:
            payload = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid config YAML: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigError("Invalid config payload: root must be an object")
    return payload


def load_config(path: Path) -> DenoPrConfig:
    """Load deno-pr config from disk, defaulting when missing.

    Args:
        path: Config file path.

    Returns:
        Parsed config payload, or defaults when file does not exist.

    Raises:
        ConfigError: If payload decode or validation fails.
    """
    if not path.exists():
        return DenoPrConfig()
    payload = _decode_config_payload(path)
    try:
        return DenoPrConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(
            f"Invalid config payload: {exc}", data={"path": str(path)}
        ) from exc
