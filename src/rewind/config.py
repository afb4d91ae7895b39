from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from rewind.exceptions import ConfigError
from rewind.logging import get_logger

__all__ = [
    "RewindConfig",
    "TimelineConfig",
    "VcsConfig",
    "load_config",
    "get_user_config_path",
    "PROJECT_CONFIG_FILENAME",
]

logger = get_logger(__name__)

PROJECT_CONFIG_FILENAME = "rewind.yaml"


class TimelineConfig(BaseModel):
    """Settings for the timeline tree.

    Attributes:
        max_commits: Maximum commits listed per repository (default: all).
        elide_single_repository: With exactly one workspace folder, show its
            commits as the top level instead of a single repository row.
    """

    max_commits: int | None = Field(default=None, ge=1)
    elide_single_repository: bool = True


class VcsConfig(BaseModel):
    """Settings for the version-control backend."""

    backend: Literal["git"] = "git"


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
                    if loaded is None:
                        logger.warning(
                            f"Config file {yaml_file} is empty, using defaults."
                        )
                    elif isinstance(loaded, dict):
                        self._config_data = loaded
                    else:
                        raise ConfigError(
                            message=f"Config file {yaml_file} must contain a mapping",
                            field=None,
                            value=loaded,
                        )
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                    field=None,
                    value=None,
                ) from e

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


class RewindConfig(BaseSettings):
    """Root configuration object containing all Rewind settings."""

    model_config = SettingsConfigDict(
        env_prefix="REWIND_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    timeline: TimelineConfig = Field(default_factory=TimelineConfig)
    vcs: VcsConfig = Field(default_factory=VcsConfig)
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

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
        1. Init arguments
        2. Environment variables (REWIND_*)
        3. Project YAML config (./rewind.yaml or --config)
        4. User YAML config (~/.config/rewind/config.yaml)
        5. Defaults
        """
        project_config_path = _active_project_config_path()

        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


# Set by load_config() for the duration of a single RewindConfig() build.
_project_config_path: ContextVar[Path | None] = ContextVar(
    "rewind_project_config_path", default=None
)


def _active_project_config_path() -> Path:
    override = _project_config_path.get()
    if override is not None:
        return override
    return Path.cwd() / PROJECT_CONFIG_FILENAME


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/rewind/config.yaml
    """
    return Path.home() / ".config" / "rewind" / "config.yaml"


def load_config(config_path: Path | None = None) -> RewindConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional path to the project config file.
            Defaults to ./rewind.yaml

    Returns:
        RewindConfig instance with merged configuration

    Raises:
        ConfigError: If a config file is unparseable or a value is invalid
    """
    if config_path is None:
        config_path = Path.cwd() / PROJECT_CONFIG_FILENAME

    if not config_path.exists():
        logger.info("No project configuration found, using defaults.")

    token = _project_config_path.set(config_path)
    try:
        return RewindConfig()
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
