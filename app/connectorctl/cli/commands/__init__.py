"""CLI commands for connectorctl.

This package contains all subcommand implementations.
"""

from connectorctl.cli.commands import config, info, modified

__all__ = ["config", "info", "modified"]
