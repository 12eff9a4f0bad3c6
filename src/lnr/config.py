"""Configuration management for lnr using Pydantic."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from lnr.core.exceptions import ConfigError
from lnr.core.logging import LogLevel
from lnr.core.output import OutputFormat

TOKEN_ENV_VARS = ("LNR_API_KEY", "LINEAR_API_KEY")


def token_from_env() -> str | None:
    """Get a Linear API key from the environment."""
    for name in TOKEN_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None


class LinearConfig(BaseModel):
    """Linear API configuration."""

    url: str = "https://api.linear.app/graphql"
    timeout: int = 30

    def get_url(self) -> str:
        """Get API URL from config or environment."""
        return os.environ.get("LNR_LINEAR_URL") or self.url


class OrganizationConfig(BaseModel):
    """A Linear organization and its API key."""

    token: str | None = None

    def get_token(self) -> str | None:
        """Get API key from config or environment."""
        token = self.token
        if token == "from_env" or token is None:
            token = token_from_env()
        return token


class GlobalConfig(BaseModel):
    """Global settings."""

    output_format: OutputFormat = OutputFormat.TABLE
    color: str = "auto"  # auto, always, never
    verbosity: LogLevel = LogLevel.WARNING
    dry_run: bool = False
    spinners: bool = True

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        if v not in ("auto", "always", "never"):
            raise ValueError("color must be 'auto', 'always', or 'never'")
        return v


class LnrConfig(BaseModel):
    """Main configuration model."""

    model_config = {"populate_by_name": True}

    version: str = "1"
    global_settings: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    linear: LinearConfig = Field(default_factory=LinearConfig)
    organizations: dict[str, OrganizationConfig] = Field(default_factory=dict)

    def organization_names(self) -> list[str]:
        """Configured organization names, sorted."""
        return sorted(self.organizations)

    def get_organization(self, name: str) -> OrganizationConfig:
        """Get an organization by name."""
        if name not in self.organizations:
            options = ", ".join(self.organization_names()) or "none configured"
            raise ConfigError(f"Organization '{name}' not found (options: {options})")
        return self.organizations[name]


class ConfigLoader:
    """Loads and merges configuration from multiple sources."""

    CONFIG_FILENAMES = ["lnr.yaml", "lnr.yml", ".lnr.yaml", ".lnr.yml"]

    def __init__(self, user_config_path: Path | None = None):
        self._user_config_path = user_config_path or Path.home() / ".lnr" / "config.yaml"
        self._config: LnrConfig | None = None

    def load(self, config_file: str | Path | None = None) -> LnrConfig:
        """Load configuration from files.

        Priority (highest to lowest):
        1. Explicitly specified config file
        2. Project config (./lnr.yaml, searched upwards)
        3. User config (~/.lnr/config.yaml)

        Args:
            config_file: Optional explicit config file path

        Returns:
            Merged configuration
        """
        configs: list[dict[str, Any]] = []

        if self._user_config_path.exists():
            configs.append(self._load_yaml_file(self._user_config_path))

        project_config = self._find_project_config()
        if project_config:
            configs.append(self._load_yaml_file(project_config))

        if config_file:
            config_path = Path(config_file)
            if not config_path.exists():
                raise ConfigError(f"Config file not found: {config_file}")
            configs.append(self._load_yaml_file(config_path))

        merged = self._merge_configs(configs)

        try:
            self._config = LnrConfig(**merged)
        except PydanticValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}")
        return self._config

    def _find_project_config(self) -> Path | None:
        """Find project config file in current or parent directories."""
        current = Path.cwd()

        while current != current.parent:
            for filename in self.CONFIG_FILENAMES:
                config_path = current / filename
                if config_path.exists():
                    return config_path
            current = current.parent

        return None

    def _load_yaml_file(self, path: Path) -> dict[str, Any]:
        """Load a YAML config file."""
        try:
            with open(path) as f:
                content = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}")
        except OSError as e:
            raise ConfigError(f"Cannot read {path}: {e}")

        if not isinstance(content, dict):
            raise ConfigError(f"Expected a mapping at the top of {path}")
        return content

    def _merge_configs(self, configs: list[dict[str, Any]]) -> dict[str, Any]:
        """Deep merge multiple configuration dictionaries."""
        result: dict[str, Any] = {}
        for config in configs:
            result = self._deep_merge(result, config)
        return result

    def _deep_merge(
        self,
        base: dict[str, Any],
        override: dict[str, Any],
    ) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result


def load_config(config_file: str | Path | None = None) -> LnrConfig:
    """Load lnr configuration.

    Args:
        config_file: Optional explicit config file path

    Returns:
        Loaded configuration
    """
    return ConfigLoader().load(config_file)


def get_default_config() -> LnrConfig:
    """Get default configuration without loading from files."""
    return LnrConfig()
