"""deno-pr configuration loading."""

from deno_pr.config.settings import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_FILE,
    DenoPrConfig,
    DownloadSettings,
    GitHubSettings,
    default_config_path,
    load_config,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_FILE",
    "DenoPrConfig",
    "DownloadSettings",
    "GitHubSettings",
    "default_config_path",
    "load_config",
]
