"""Settings model and TOML I/O.

Settings describe the monorepo layout: where connectors live, which
directory prefixes mark a connector, which files never count as a change,
and which branch and remote a PR branch is compared against.

Lookup order used by :func:`resolve_settings`:

1. An explicit ``--config`` file.
2. ``connectorctl.toml`` at the repository root.
3. ``$XDG_CONFIG_HOME/connectorctl/config.toml``.
4. Built-in defaults.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from connectorctl.core.paths import get_repo_config_path, get_user_config_path

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (".coveragerc", "poe_tasks.toml", "README.md")


class Settings(BaseModel):
    """Repository layout and comparison settings.

    Attributes:
        default_branch: Branch a PR branch is compared against.
        remotes: Remote names tried in order; the first one configured wins.
        connectors_dir: Connectors root, relative to the repository root.
        connector_prefixes: Directory name prefixes that mark a connector.
        ignore_patterns: Basename globs whose changes never select a connector.
        fetch: Fetch the default branch before diffing against it.
    """

    model_config = ConfigDict(extra="forbid")

    default_branch: Annotated[str, Field(min_length=1, description="Branch to diff against")] = (
        "master"
    )
    remotes: Annotated[
        list[str],
        Field(min_length=1, description="Remote names in order of preference"),
    ] = ["upstream", "origin"]
    connectors_dir: Annotated[
        str,
        Field(min_length=1, description="Connectors root relative to the repository"),
    ] = "airbyte-integrations/connectors"
    connector_prefixes: Annotated[
        list[str],
        Field(min_length=1, description="Directory prefixes that mark a connector"),
    ] = ["source-", "destination-"]
    ignore_patterns: Annotated[
        list[str],
        Field(description="Basename globs ignored when detecting changes"),
    ] = list(DEFAULT_IGNORE_PATTERNS)
    fetch: Annotated[bool, Field(description="Fetch the default branch before diffing")] = True

    @field_validator("connectors_dir")
    @classmethod
    def normalize_connectors_dir(cls, v: str) -> str:
        """Store the connectors root without surrounding slashes."""
        value = v.strip().strip("/")
        if not value:
            msg = "connectors_dir cannot be empty"
            raise ValueError(msg)
        if Path(value).is_absolute() or ".." in Path(value).parts:
            msg = f"connectors_dir must be relative to the repository: {v!r}"
            raise ValueError(msg)
        return value

    @field_validator("connector_prefixes")
    @classmethod
    def validate_prefixes(cls, v: list[str]) -> list[str]:
        """Reject prefixes that would match across directories."""
        for prefix in v:
            if not prefix or "/" in prefix:
                msg = f"Invalid connector prefix: {prefix!r}"
                raise ValueError(msg)
        return v

    def connectors_root(self, repo_root: Path) -> Path:
        """Absolute connectors directory for a repository."""
        return repo_root / self.connectors_dir


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsNotFoundError(SettingsError):
    """Raised when an explicitly requested settings file is missing."""


class SettingsParseError(SettingsError):
    """Raised when a settings file is not valid TOML."""


class SettingsValidationError(SettingsError):
    """Raised when settings content doesn't match the schema."""


def load_settings(path: Path) -> Settings:
    """Load and validate settings from a TOML file.

    Args:
        path: Path to the settings file.

    Returns:
        Validated Settings object.

    Raises:
        SettingsNotFoundError: If the file doesn't exist.
        SettingsParseError: If the TOML syntax is invalid.
        SettingsValidationError: If the content doesn't match the schema.
    """
    if not path.exists():
        raise SettingsNotFoundError(f"Settings file not found: {path}")

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings {path}: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsValidationError(f"Invalid settings in {path}: {e}") from e


def resolve_settings(repo_root: Path, explicit: Path | None = None) -> tuple[Settings, Path | None]:
    """Find and load the settings that apply to a repository.

    Args:
        repo_root: Repository root directory.
        explicit: Settings file given on the command line, if any.

    Returns:
        Tuple of (settings, source path). The path is None for built-in defaults.

    Raises:
        SettingsError: If a settings file exists but cannot be loaded.
    """
    if explicit is not None:
        return load_settings(explicit), explicit

    for candidate in (get_repo_config_path(repo_root), get_user_config_path()):
        if candidate.is_file():
            logger.debug("Using settings from %s", candidate)
            return load_settings(candidate), candidate

    logger.debug("No settings file found, using defaults")
    return Settings(), None


def settings_to_toml(settings: Settings) -> str:
    """Render settings as a TOML document."""
    return tomli_w.dumps(_settings_to_dict(settings))


def save_settings(settings: Settings, path: Path) -> Path:
    """Save settings to a TOML file.

    The file is written to a temporary sibling first and moved into place
    with os.replace().

    Args:
        settings: The Settings object to save.
        path: Destination file.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(mode="wb", dir=path.parent, delete=False, suffix=".tmp") as f:
            tmp_path = Path(f.name)
            tomli_w.dump(_settings_to_dict(settings), f)
        os.replace(str(tmp_path), str(path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return path


def _settings_to_dict(settings: Settings) -> dict[str, Any]:
    return settings.model_dump(mode="json")
