"""Config command implementation.

Shows and initializes connectorctl settings files.
"""

from pathlib import Path
from typing import Annotated

import typer

from connectorctl.cli.types import get_repo_root, get_settings, get_settings_source
from connectorctl.core.paths import ensure_config_dir, get_repo_config_path, get_user_config_path
from connectorctl.core.settings import Settings, SettingsError, save_settings, settings_to_toml
from connectorctl.utils.formatting import print_error, print_info, print_success

app = typer.Typer(
    help="Show or create connectorctl settings.",
    no_args_is_help=True,
)


@app.command("show")
def show(ctx: typer.Context) -> None:
    """Print the effective settings as TOML."""
    settings = get_settings(ctx)
    source = get_settings_source(ctx)

    print_info(f"# Source: {source if source is not None else 'built-in defaults'}")
    typer.echo(settings_to_toml(settings), nl=False)


@app.command("init")
def init(
    ctx: typer.Context,
    user: Annotated[
        bool,
        typer.Option(
            "--user",
            help="Write the user-level settings file instead of the repository one.",
        ),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write to this path instead."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing file."),
    ] = False,
) -> None:
    """Write a settings file with the default values.

    Examples:
        connectorctl config init              # ./connectorctl.toml
        connectorctl config init --user       # ~/.config/connectorctl/config.toml
    """
    if output is not None:
        target = output
    elif user:
        try:
            ensure_config_dir()
        except RuntimeError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        target = get_user_config_path()
    else:
        target = get_repo_config_path(get_repo_root(ctx))

    if target.exists() and not force:
        print_error(f"{target} already exists. Use --force to overwrite.")
        raise typer.Exit(code=1)

    try:
        save_settings(Settings(), target)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {target}")
