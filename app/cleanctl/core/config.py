"""Cleanup configuration and settings.

This module provides the configuration model and I/O functions that let
users change the manifest name, add excluded directories, and add or
drop cleanup targets.

Configuration is stored in ~/.config/cleanctl/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cleanctl.core.paths import get_config_path
from cleanctl.core.targets import DEFAULT_MANIFEST, DEFAULT_TARGETS
from cleanctl.filesystem.exclusions import build_exclusions
from cleanctl.models.target import CleanupTarget, TargetScope

logger = logging.getLogger(__name__)


def _check_basename(value: str) -> str:
    """Validate that a configured name is a plain directory or file name."""
    name = value.strip()
    if not name:
        msg = "name cannot be empty"
        raise ValueError(msg)
    if "/" in name or "\\" in name or name in (".", ".."):
        msg = f"'{name}' must be a plain name, not a path"
        raise ValueError(msg)
    return name


class TargetConfig(BaseModel):
    """An additional cleanup target declared in the configuration file.

    Attributes:
        name: Directory basename to remove.
        description: Human-readable description for reporting.
        scope: "projects" (next to each manifest) or "global" (anywhere).
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    description: str = ""
    scope: TargetScope = TargetScope.GLOBAL

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate that the target is a plain directory name."""
        return _check_basename(v)

    def to_target(self) -> CleanupTarget:
        """Convert to a CleanupTarget."""
        return CleanupTarget(self.name, self.description or self.name, self.scope)


class CleanConfig(BaseModel):
    """Configuration for a cleanup pass.

    Attributes:
        manifest: Manifest file name that marks a project directory.
        exclude: Directory names excluded from traversal, added to the defaults.
        skip: Default target names that should not be cleaned.
        targets: Extra targets, cleaned after the defaults.
    """

    model_config = ConfigDict(extra="forbid")

    manifest: Annotated[
        str,
        Field(description="Manifest file marking a project directory"),
    ] = DEFAULT_MANIFEST
    exclude: Annotated[
        list[str],
        Field(description="Additional directory names never descended into"),
    ] = []
    skip: Annotated[
        list[str],
        Field(description="Default target names to leave alone"),
    ] = []
    targets: Annotated[
        list[TargetConfig],
        Field(description="Additional cleanup targets"),
    ] = []

    @field_validator("manifest")
    @classmethod
    def validate_manifest(cls, v: str) -> str:
        """Validate that the manifest is a plain file name."""
        return _check_basename(v)

    @field_validator("exclude", "skip")
    @classmethod
    def validate_names(cls, v: list[str]) -> list[str]:
        """Validate that every listed entry is a plain directory name."""
        return [_check_basename(name) for name in v]

    def resolve_targets(self) -> tuple[CleanupTarget, ...]:
        """Build the ordered target list for a cleanup pass.

        Default targets named in ``skip`` are dropped. Extra targets are
        appended in file order; an extra target whose name matches a kept
        default replaces it in place.

        Returns:
            Tuple of cleanup targets in processing order.
        """
        extra = {t.name: t.to_target() for t in self.targets}
        skipped = set(self.skip)

        resolved: list[CleanupTarget] = []
        for target in DEFAULT_TARGETS:
            if target.name in skipped:
                continue
            resolved.append(extra.pop(target.name, target))
        resolved.extend(extra.values())
        return tuple(resolved)

    def resolve_exclusions(self) -> frozenset[str]:
        """Build the exclusion set for a cleanup pass."""
        return build_exclusions(self.exclude)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when an explicitly requested config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when a config file cannot be parsed."""


def load_config(path: Path | None = None) -> CleanConfig:
    """Load cleanup configuration from a TOML file.

    The default config file is optional: when it does not exist the
    built-in defaults are returned. An explicitly given file must exist.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated CleanConfig object.

    Raises:
        ConfigNotFoundError: If an explicit config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        if path is not None:
            raise ConfigNotFoundError(f"Config file not found: {config_path}")
        logger.debug("No config file at %s, using defaults", config_path)
        return CleanConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        config = CleanConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e

    logger.debug("Loaded config from %s", config_path)
    return config


def save_config(config: CleanConfig, path: Path | None = None) -> Path:
    """Save cleanup configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The CleanConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    data = config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        # os.replace() is atomic on POSIX
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: CleanConfig) -> dict[str, object]:
    """Convert CleanConfig to a dictionary for TOML serialization.

    Args:
        config: The CleanConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {
        "manifest": config.manifest,
        "exclude": list(config.exclude),
        "skip": list(config.skip),
    }
    if config.targets:
        result["targets"] = [
            {"name": t.name, "description": t.description, "scope": t.scope.value}
            for t in config.targets
        ]
    return result
