"""Info command implementation.

Shows the build and test descriptor of a single connector.
"""

import json
from typing import Annotated, Any

import typer
from rich.markup import escape

from connectorctl.cli.types import get_repo_root, get_settings
from connectorctl.core.metadata import MetadataError, get_metadata_path, load_metadata
from connectorctl.models.metadata import ConnectorMetadata
from connectorctl.utils.formatting import (
    console,
    create_metadata_table,
    format_language,
    print_error,
)


def metadata_summary(name: str, metadata: ConnectorMetadata) -> dict[str, Any]:
    """Flatten the fields shown by ``info`` into a JSON-friendly dict."""
    data = metadata.data
    build = data.connector_build_options
    return {
        "connector": name,
        "name": data.name,
        "language": metadata.language.value,
        "type": data.connector_type,
        "subtype": data.connector_subtype,
        "docker_image": metadata.docker_image,
        "base_image": build.base_image if build else None,
        "support_level": data.support_level,
        "release_stage": data.release_stage,
        "license": data.license,
        "tags": list(data.tags),
        "registries": metadata.enabled_registries,
        "allowed_hosts": list(data.allowed_hosts.hosts) if data.allowed_hosts else [],
        "test_suites": [suite.suite for suite in data.test_suites if suite.suite],
        "documentation_url": data.documentation_url,
    }


def _display(value: object) -> str:
    if value is None or value == []:
        return "[muted]-[/]"
    if isinstance(value, list):
        return escape(", ".join(str(v) for v in value))
    return escape(str(value))


def info(
    ctx: typer.Context,
    connector: Annotated[
        str,
        typer.Argument(help="Connector directory name, e.g. source-postgres."),
    ],
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the summary as JSON."),
    ] = False,
) -> None:
    """Show a connector's metadata summary.

    Examples:
        connectorctl info source-coinmarketcap
        connectorctl info destination-postgres --json
    """
    if connector in ("", ".", "..") or "/" in connector or "\\" in connector:
        print_error(f"Invalid connector name: {connector!r}")
        raise typer.Exit(code=1)

    settings = get_settings(ctx)
    connector_dir = settings.connectors_root(get_repo_root(ctx)) / connector

    if not connector_dir.is_dir():
        print_error(f"Connector not found: {connector_dir}")
        raise typer.Exit(code=1)

    try:
        metadata = load_metadata(connector_dir)
    except MetadataError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    summary = metadata_summary(connector, metadata)

    if as_json:
        typer.echo(json.dumps(summary, indent=2))
        return

    table = create_metadata_table(connector)
    for key, value in summary.items():
        if key == "connector":
            continue
        if key == "language":
            table.add_row(key, format_language(str(value)))
        else:
            table.add_row(key, _display(value))

    console.print(table)
    console.print(f"\n[dim]{get_metadata_path(connector_dir)}[/]")
