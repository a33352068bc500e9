"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from connectorctl import __version__
from connectorctl.cli.commands import config, info, modified
from connectorctl.utils.log import configure_logging

# Create main Typer app
app = typer.Typer(
    name="connectorctl",
    help="Find the connectors touched by a change set.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"connectorctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log git invocations and skipped paths to stderr.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    repo: Annotated[
        Path | None,
        typer.Option(
            "--repo",
            "-C",
            help="Repository root (default: current directory).",
            file_okay=False,
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Settings file to use instead of the discovered one.",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """connectorctl - find the connectors touched by a change set.

    Compares the working tree with the default branch and reports the
    connector directories that changed, ready to feed a CI matrix.
    """
    configure_logging(verbose=verbose, quiet=quiet)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["repo"] = repo
    ctx.obj["config_path"] = config_path


# Register commands
app.command("modified")(modified.modified)
app.command("info")(info.info)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
