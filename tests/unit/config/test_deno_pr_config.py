"""Unit tests for deno-pr config loading."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from deno_pr.config import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_FILE,
    default_config_path,
    load_config,
)
from deno_pr.errors import ConfigError, ErrorCode


@pytest.mark.unit
def test_load_config_defaults_when_missing(tmp_path: Path) -> None:
    """Missing config file should yield deterministic defaults."""
    config = load_config(tmp_path / "missing.yaml")

    assert config.github.owner == "denoland"
    assert config.github.repo == "deno"
    assert config.github.api_url == "https://api.github.com"
    assert config.github.web_url == "https://github.com"
    assert config.github.api_version == "2022-11-28"
    assert config.github.workflow_name == "ci"
    assert config.github.timeout_seconds == 30.0
    assert config.download.chunk_size == 65536
    assert config.download.artifact_prefix == "deno"


@pytest.mark.unit
def test_load_config_reads_yaml_overrides(tmp_path: Path) -> None:
    """YAML payload overrides nested sections."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.safe_dump(
            {
                "github": {"owner": "me", "repo": "deno-fork"},
                "download": {"chunk_size": 4096},
            }
        ),
        encoding="utf-8",
    )

    config = load_config(config_path)

    assert config.github.owner == "me"
    assert config.github.repo == "deno-fork"
    assert config.github.workflow_name == "ci"
    assert config.download.chunk_size == 4096


@pytest.mark.unit
def test_load_config_reads_json(tmp_path: Path) -> None:
    """JSON files decode by suffix."""
    config_path = tmp_path / "config.json"
    config_path.write_text('{"github":{"workflow_name":"release"}}', encoding="utf-8")

    assert load_config(config_path).github.workflow_name == "release"


@pytest.mark.unit
def test_load_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    """Empty YAML documents are treated as no overrides."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text("", encoding="utf-8")

    assert load_config(config_path).github.owner == "denoland"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("name", "content", "match"),
    [
        ("bad.json", "{", "Invalid config JSON"),
        ("bad.yaml", "github: [", "Invalid config YAML"),
        ("list.yaml", "- 1\n- 2\n", "root must be an object"),
        ("extra.yaml", "unknown: 1\n", "Invalid config payload"),
        ("small.yaml", "download:\n  chunk_size: 10\n", "Invalid config payload"),
    ],
)
def test_load_config_rejects_invalid_payloads(
    tmp_path: Path, name: str, content: str, match: str
) -> None:
    """Decode and validation failures raise config_invalid."""
    config_path = tmp_path / name
    config_path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=match) as exc_info:
        load_config(config_path)

    assert exc_info.value.code == ErrorCode.CONFIG_INVALID


@pytest.mark.unit
def test_default_config_path_prefers_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Environment override wins over the working directory file."""
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "custom.yaml"))

    assert default_config_path() == tmp_path / "custom.yaml"


@pytest.mark.unit
def test_default_config_path_falls_back_to_cwd(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Without override the working directory file is used."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)

    assert default_config_path().resolve() == (tmp_path / DEFAULT_CONFIG_FILE).resolve()
