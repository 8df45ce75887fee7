from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from phpcheck.constants import (
    DEFAULT_LINE_WIDTH,
    DEFAULT_PHP_BINARY,
    DEFAULT_PROBE_TIMEOUT,
)
from phpcheck.exceptions import ConfigError
from phpcheck.logging import get_logger

__all__ = [
    "PhpCheckConfig",
    "load_config",
    "get_project_config_path",
    "get_user_config_path",
]

logger = get_logger(__name__)

PROJECT_CONFIG_FILENAME = "phpcheck.yaml"

# Project config file chosen by load_config(); read by settings_customise_sources
_project_config_path: ContextVar[Path | None] = ContextVar(
    "phpcheck_project_config_path", default=None
)


class YamlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from YAML files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                ) from e
            if loaded is None:
                logger.warning("config_file_empty", path=str(yaml_file))
            elif not isinstance(loaded, dict):
                raise ConfigError(
                    message=f"Expected a mapping at the top of {yaml_file}",
                    value=loaded,
                )
            else:
                self._config_data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get value for a specific field from the YAML config."""
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return the complete config data."""
        return self._config_data


class PhpCheckConfig(BaseSettings):
    """Root configuration object containing all phpcheck settings.

    Attributes:
        php_binary: PHP executable to probe (name on PATH or full path).
        probe_timeout: Maximum seconds the probe script may run.
        line_width: Column at which failure messages are wrapped.
        color: Colour policy; "auto" asks the terminal.
        verbosity: Log level of the diagnostics written to stderr.
    """

    model_config = SettingsConfigDict(
        env_prefix="PHPCHECK_",
        extra="ignore",
    )

    php_binary: str = DEFAULT_PHP_BINARY
    probe_timeout: float = Field(default=DEFAULT_PROBE_TIMEOUT, gt=0.0, le=120.0)
    line_width: int = Field(default=DEFAULT_LINE_WIDTH, ge=40, le=200)
    color: Literal["auto", "always", "never"] = "auto"
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    @field_validator("php_binary")
    @classmethod
    def check_php_binary_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("php_binary must not be empty")
        return v.strip()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources.

        Priority (highest to lowest):
        1. Init arguments (explicit overrides)
        2. Environment variables (PHPCHECK_*)
        3. Project YAML config (./phpcheck.yaml or --config)
        4. User YAML config (~/.config/phpcheck/config.yaml)
        5. Field defaults
        """
        project_config_path = _project_config_path.get() or get_project_config_path()

        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_project_config_path() -> Path:
    """Get the path to the project configuration file.

    Returns:
        Path to ./phpcheck.yaml in the current working directory.
    """
    return Path.cwd() / PROJECT_CONFIG_FILENAME


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/phpcheck/config.yaml
    """
    return Path.home() / ".config" / "phpcheck" / "config.yaml"


def load_config(
    config_path: Path | None = None, **overrides: Any
) -> PhpCheckConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional path to the project config file. Defaults to
            ./phpcheck.yaml
        **overrides: Explicit values (e.g. from CLI options) that win over
            every other source.

    Returns:
        PhpCheckConfig instance with merged configuration.

    Raises:
        ConfigError: If the configuration is invalid or the explicit
            config_path does not exist.
    """
    if config_path is not None and not config_path.exists():
        raise ConfigError(
            message=f"Configuration file not found: {config_path}",
            field="config",
            value=str(config_path),
        )

    effective_path = config_path or get_project_config_path()
    if not effective_path.exists():
        logger.debug("project_config_missing", path=str(effective_path))

    token = _project_config_path.set(effective_path)
    try:
        return PhpCheckConfig(**overrides)
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
    finally:
        _project_config_path.reset(token)
