"""Configuration management for podindex.

Handles TOML configuration loading from local and global paths, with an
environment variable override for the feed URL. Command-line flags are
applied on top by the CLI.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from podindex.core.errors import ConfigError

# Configuration file paths
LOCAL_CONFIG_PATH = Path(".podindex/config")
GLOBAL_CONFIG_PATH = Path.home() / ".podindex" / "config"

URL_ENV_VAR = "PODINDEX_URL"

DEFAULT_OUTPUT = "index.xml"

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    "feed": {
        "url": "",
        "title": "",
        "description": "",
        "output": DEFAULT_OUTPUT,
    },
}


class Verbosity(Enum):
    """How much the CLI prints."""

    QUIET = 0
    NORMAL = 1
    VERBOSE = 2


@dataclass
class FeedConfig:
    """Feed settings."""

    url: str = ""
    title: str = ""
    description: str = ""
    output: str = DEFAULT_OUTPUT


@dataclass
class Config:
    """Main configuration container.

    Holds the feed settings loaded from local and global config files.
    """

    feed: FeedConfig = field(default_factory=FeedConfig)

    def get_url(self) -> str:
        """Get the base feed URL with environment variable precedence.

        Returns:
            The URL from PODINDEX_URL if set, otherwise the value from
            config file.
        """
        env_url = os.environ.get(URL_ENV_VAR, "")
        if env_url:
            return env_url
        return self.feed.url

    def get_output_path(self) -> Path:
        """Get the output file as a Path object."""
        return Path(self.feed.output)


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load and parse a TOML configuration file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed configuration dictionary, empty if the file does not exist.

    Raises:
        ConfigError: If the file exists but cannot be read or parsed.
    """
    if not path.exists():
        return {}

    try:
        content = path.read_text()
        return tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in config file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _validate_config(config_dict: dict[str, Any]) -> None:
    """Validate configuration values.

    Raises:
        ConfigError: If configuration values are invalid.
    """
    feed_config = config_dict.get("feed", {})
    if not isinstance(feed_config, dict):
        raise ConfigError(f"feed must be a table, got {type(feed_config).__name__}")

    for key in ("url", "title", "description", "output"):
        value = feed_config.get(key)
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"feed.{key} must be a string, got {type(value).__name__}")

    if not feed_config.get("output"):
        raise ConfigError("feed.output cannot be empty")


def _dict_to_config(config_dict: dict[str, Any]) -> Config:
    feed_dict = config_dict.get("feed", {})
    return Config(
        feed=FeedConfig(
            url=feed_dict.get("url", ""),
            title=feed_dict.get("title", ""),
            description=feed_dict.get("description", ""),
            output=feed_dict.get("output", DEFAULT_OUTPUT),
        ),
    )


def load_config(
    config_path: Path | None = None,
    local_path: Path | None = None,
    global_path: Path | None = None,
) -> Config:
    """Load configuration from config files.

    Configuration priority (highest to lowest):
    1. Explicit config file (``--config``), which must exist
    2. Local config file (.podindex/config in current directory)
    3. Global config file ($HOME/.podindex/config)
    4. Default values

    Args:
        config_path: Explicit config file given on the command line.
        local_path: Override path for local config file.
        global_path: Override path for global config file.

    Returns:
        Config object with merged configuration values.

    Raises:
        ConfigError: If a configuration file is missing or invalid.
    """
    local_path = local_path or LOCAL_CONFIG_PATH
    global_path = global_path or GLOBAL_CONFIG_PATH

    merged_config = {"feed": DEFAULT_CONFIG["feed"].copy()}

    for path in (global_path, local_path):
        file_config = _load_toml_file(path)
        if file_config:
            merged_config = _deep_merge(merged_config, file_config)

    if config_path is not None:
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
        merged_config = _deep_merge(merged_config, _load_toml_file(config_path))

    _validate_config(merged_config)

    return _dict_to_config(merged_config)
