"""Shared types and helpers for CLI commands.

Commands read the repository root and settings chosen by the global
options through these helpers, so error reporting for an unreadable
settings file is the same everywhere.
"""

from enum import Enum
from pathlib import Path
from typing import Any

import typer

from connectorctl.core.settings import Settings, SettingsError, resolve_settings
from connectorctl.utils.formatting import print_error


class ModifierWord(str, Enum):
    """Bare-word spellings accepted in place of the ``modified`` flags."""

    JAVA = "java"
    NO_JAVA = "no-java"
    JSON = "json"
    LOCAL_CDK = "local-cdk"


def _state(ctx: typer.Context) -> dict[str, Any]:
    ctx.ensure_object(dict)
    return ctx.obj


def get_repo_root(ctx: typer.Context) -> Path:
    """Repository root selected with ``--repo`` (default: current directory)."""
    repo: Path | None = _state(ctx).get("repo")
    return (repo or Path.cwd()).resolve()


def get_settings(ctx: typer.Context) -> Settings:
    """Load the settings that apply to the selected repository.

    The result is cached on the context so nested helpers share one load.

    Raises:
        typer.Exit: If a settings file exists but is invalid.
    """
    state = _state(ctx)
    cached: Settings | None = state.get("settings")
    if cached is not None:
        return cached

    try:
        settings, source = resolve_settings(get_repo_root(ctx), state.get("config_path"))
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    state["settings"] = settings
    state["settings_source"] = source
    return settings


def get_settings_source(ctx: typer.Context) -> Path | None:
    """File the active settings were loaded from, None for defaults."""
    get_settings(ctx)
    return _state(ctx).get("settings_source")


def is_quiet(ctx: typer.Context) -> bool:
    """Check whether ``--quiet`` was given."""
    return bool(_state(ctx).get("quiet", False))
