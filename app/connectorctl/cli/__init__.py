"""CLI package for connectorctl.

This package contains the Typer application and all subcommands.
"""

from connectorctl.cli.main import app

__all__ = ["app"]
