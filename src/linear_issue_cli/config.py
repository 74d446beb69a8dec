"""Configuration for linear-issue-cli."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, ClassVar

import yaml
from pydantic import BaseModel, Field, field_validator

from .api.client import LINEAR_API_URL
from .core.editor import DEFAULT_EDITOR, EDITOR_SENTINEL
from .core.listing import TITLE_WIDTH
from .errors import ConfigError

# Handle tomllib/tomli imports for TOML support
try:
    import tomllib  # type: ignore[import-not-found]
except ImportError:
    # Python < 3.11
    try:
        import tomli as tomllib  # type: ignore[import-untyped]
    except ImportError:
        tomllib = None

logger = logging.getLogger(__name__)

ENV_API_KEY = "LINEAR_API_KEY"
ENV_API_URL = "LINEAR_API_URL"
USER_CONFIG_PATH = Path("~/.config/linear-issue/config.yml")


def default_editor() -> str:
    """Editor from $VISUAL or $EDITOR, falling back to vi."""
    return os.environ.get("VISUAL") or os.environ.get("EDITOR") or DEFAULT_EDITOR


class CliConfig(BaseModel):
    """Settings passed into the flows."""

    api_key: str | None = None
    api_url: str = LINEAR_API_URL
    editor: str = Field(default_factory=default_editor)
    editor_sentinel: str = EDITOR_SENTINEL
    title_width: int = TITLE_WIDTH
    default_assignee: str = "@me"

    @field_validator("editor_sentinel")
    @classmethod
    def validate_sentinel(cls, v: str) -> str:
        """The sentinel must be a non-empty answer."""
        if not v.strip():
            raise ValueError("editor_sentinel must not be empty")
        return v.strip()

    @field_validator("title_width")
    @classmethod
    def validate_title_width(cls, v: int) -> int:
        """Leave room for at least one character plus the ellipsis."""
        if v < 2:
            raise ValueError("title_width must be at least 2")
        return v

    def require_api_key(self) -> str:
        """Return the API key or fail with a hint on how to set it."""
        if not self.api_key:
            raise ConfigError(
                f"No API key configured. Set {ENV_API_KEY} or add 'api_key' to {USER_CONFIG_PATH}"
            )
        return self.api_key


class ConfigLoader:
    """Loads the CLI configuration from files and the environment."""

    DEFAULT_CONFIG_FILES: ClassVar[list[str]] = [
        ".linear-issue.yml",
        ".linear-issue.yaml",
        ".linear-issue.json",
        "pyproject.toml",  # Support for pyproject.toml [tool.linear-issue] section
    ]

    def __init__(self, user_config_path: Path | None = None) -> None:
        self.config: CliConfig | None = None
        self.config_path: Path | None = None
        self.user_config_path = (user_config_path or USER_CONFIG_PATH).expanduser()

    def load_config(self, config_path: str | Path | None = None) -> CliConfig:
        """
        Load configuration from file, then apply environment overrides.

        Args:
            config_path: Explicit path to config file, or None to auto-discover

        Returns:
            Loaded configuration
        """
        data: dict[str, Any] | None = None
        if config_path:
            config_path = Path(config_path)
            if not config_path.exists():
                raise FileNotFoundError(f"Config file not found: {config_path}")

            data = self._load_from_file(config_path)
            self.config_path = config_path

        else:
            data = self._auto_discover_config()

        if data is None:
            logger.info("No configuration file found, using defaults")
            data = {}

        data = self._apply_environment(data)

        try:
            self.config = CliConfig(**data)
        except ValueError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

        logger.info("Loaded configuration from %s", self.config_path or "defaults")
        return self.config

    def _auto_discover_config(self) -> dict[str, Any] | None:
        """Look for a config file in the current directory, then the user's config."""
        current_dir = Path.cwd()

        for config_file in self.DEFAULT_CONFIG_FILES:
            config_path = current_dir / config_file
            if config_path.exists():
                data = self._load_from_file(config_path)
                if config_path.name == "pyproject.toml" and not data:
                    continue
                logger.info("Found configuration file: %s", config_path)
                self.config_path = config_path
                return data

        if self.user_config_path.exists():
            logger.info("Found configuration file: %s", self.user_config_path)
            self.config_path = self.user_config_path
            return self._load_from_file(self.user_config_path)

        return None

    def _load_from_file(self, config_path: Path) -> dict[str, Any]:
        """Load raw configuration data from a specific file."""
        try:
            if config_path.name == "pyproject.toml":
                if tomllib is None:
                    raise ConfigError("TOML support requires 'tomli' package for Python < 3.11")

                with config_path.open("rb") as toml_file:
                    toml_data = tomllib.load(toml_file)
                data = toml_data.get("tool", {}).get("linear-issue", {})
            else:
                with config_path.open(encoding="utf-8") as f:
                    if config_path.suffix in [".yml", ".yaml"]:
                        data = yaml.safe_load(f)
                    elif config_path.suffix == ".json":
                        data = json.load(f)
                    else:
                        raise ConfigError(f"Unsupported config file format: {config_path.suffix}")

        except ConfigError:
            raise
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.debug("Failed to load config from %s: %s", config_path, e)
            raise ConfigError(f"Failed to load config from {config_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config root must be a mapping: {config_path}")
        return data

    @staticmethod
    def _apply_environment(data: dict[str, Any]) -> dict[str, Any]:
        """Environment variables take precedence over file settings."""
        merged = dict(data)
        if os.environ.get(ENV_API_KEY):
            merged["api_key"] = os.environ[ENV_API_KEY]
        if os.environ.get(ENV_API_URL):
            merged["api_url"] = os.environ[ENV_API_URL]
        return merged


def load_config(config_path: str | Path | None = None) -> CliConfig:
    """Shortcut for ``ConfigLoader().load_config(config_path)``."""
    return ConfigLoader().load_config(config_path)


def create_default_config() -> str:
    """Create a default configuration file content."""
    config = {
        "api_key": None,
        "api_url": LINEAR_API_URL,
        "editor_sentinel": EDITOR_SENTINEL,
        "title_width": TITLE_WIDTH,
        "default_assignee": "@me",
    }

    return yaml.dump(config, default_flow_style=False, indent=2, sort_keys=False)
