"""Rich console formatting utilities.

Human-facing output goes through these consoles. Machine-readable output
(connector lists, matrix JSON) is written with ``typer.echo`` instead so it
stays free of markup.
"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from connectorctl.core.theme import get_theme


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_metadata_table(title: str) -> Table:
    """Create a two-column key/value table for connector metadata.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for metadata display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    table.add_column("Field", style="muted", no_wrap=True)
    table.add_column("Value", style="text", overflow="fold")
    return table


def format_language(language: str) -> str:
    """Wrap a connector language name in its theme style."""
    return f"[lang.{language}]{language}[/]"


def print_info(message: str) -> None:
    """Print an info message to stderr."""
    err_console.print(f"[info]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")
