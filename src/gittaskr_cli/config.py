"""Configuration management for gittaskr."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir
from pydantic import BaseModel, Field

from gittaskr_cli.adapters.sqlite.connection import default_db_path
from gittaskr_cli.models import ValidationError
from gittaskr_cli.utils.ui.formatters import OUTPUT_FORMATS

DB_ENV_VAR = "GITTASKR_DB"


class DatabaseConfig(BaseModel):
    """Database configuration."""

    path: str | None = Field(default=None)


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="pretty")


class Config(BaseModel):
    """Main configuration."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


class ConfigManager:
    """Manages gittaskr configuration."""

    def __init__(self, config_dir: str | Path | None = None):
        self.config_dir = (
            Path(config_dir) if config_dir is not None else Path(user_config_dir("gittaskr-cli"))
        )
        self.config_file = self.config_dir / "config.json"
        # Set from the --db flag; wins over every other source
        self.db_override: str | None = None

        self._config: Config | None = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file."""
        if self.config_file.exists():
            try:
                with open(self.config_file, encoding="utf-8") as f:
                    data = json.load(f)
                return Config(**data)
            except (OSError, ValueError):
                # If config is corrupted, return default
                return Config()
        return Config()

    def save_config(self, config: Config | None = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name an existing setting
        """
        keys = key.split(".")
        config_dict = self.config.model_dump()

        # Navigate to the nested dictionary
        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise KeyError(key)
            current = current[k]
        if keys[-1] not in current:
            raise KeyError(key)

        current[keys[-1]] = value

        # Reload config from the modified dictionary
        self._config = Config(**config_dict)
        self.save_config()

    def reset(self, key: str | None = None) -> None:
        """Reset configuration to defaults."""
        if key is None:
            self._config = Config()
        else:
            default_config = Config()
            self.set(key, self.get_from_config(default_config, key))
        self.save_config()

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        keys = key.split(".")
        value: Any = config
        for k in keys:
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value

    def database_path(self) -> Path:
        """Resolve the database file location.

        Precedence: --db flag, GITTASKR_DB, database.path in config, default.
        """
        if self.db_override:
            return Path(self.db_override).expanduser()
        env_path = os.environ.get(DB_ENV_VAR)
        if env_path:
            return Path(env_path).expanduser()
        if self.config.database.path:
            return Path(self.config.database.path).expanduser()
        return default_db_path()

    def output_format(self, override: str | None = None) -> str:
        """Output format for commands; an explicit --output wins.

        Raises:
            ValidationError: If the chosen format is not a known one
        """
        output_format = override or self.config.output.format
        if output_format not in OUTPUT_FORMATS:
            raise ValidationError(
                f"Output format must be one of: {', '.join(OUTPUT_FORMATS)}"
            )
        return output_format


# Global config manager instance
_config_manager: ConfigManager | None = None


def get_config_manager() -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager
