"""Modified command implementation.

Lists the connectors touched by the current branch (or by the last commit),
optionally narrowed to Java or non-Java connectors, as plain lines or as a
CI matrix object.
"""

import logging
from typing import Annotated

import typer

from connectorctl.cli.types import ModifierWord, get_repo_root, get_settings, is_quiet
from connectorctl.core.changes import collect_changes
from connectorctl.core.classify import partition_by_language
from connectorctl.core.discovery import local_cdk_connectors, merge_connectors, modified_connectors
from connectorctl.core.git import GitError, GitRepository
from connectorctl.core.metadata import MetadataError
from connectorctl.models.selection import ConnectorSelection, LanguageFilter
from connectorctl.utils.formatting import print_error, print_info, print_warning

logger = logging.getLogger(__name__)


def _warn_missing_dir(name: str) -> None:
    print_warning(
        f"'{name}' directory was not found. "
        "This can happen if a connector is removed. Skipping."
    )


def _warn_unreadable_metadata(name: str, error: MetadataError) -> None:
    print_warning(str(error))


def _language_filter(java: bool, no_java: bool) -> LanguageFilter:
    # --java takes precedence when both are given.
    if java:
        return LanguageFilter.JAVA
    if no_java:
        return LanguageFilter.NON_JAVA
    return LanguageFilter.ALL


def emit_selection(selection: ConnectorSelection, as_json: bool) -> None:
    """Write a selection to stdout without styling.

    Args:
        selection: Connectors to print.
        as_json: Print the CI matrix object instead of one name per line.
    """
    if as_json:
        typer.echo(selection.to_json())
        return
    for name in selection.connectors:
        typer.echo(name)


def modified(
    ctx: typer.Context,
    words: Annotated[
        list[ModifierWord] | None,
        typer.Argument(
            help="Bare-word aliases: java, no-java, json, local-cdk.",
            show_default=False,
        ),
    ] = None,
    java: Annotated[
        bool,
        typer.Option("--java", help="Only list Java connectors."),
    ] = False,
    no_java: Annotated[
        bool,
        typer.Option("--no-java", help="Only list connectors that are not Java."),
    ] = False,
    as_json: Annotated[
        bool,
        typer.Option("--json", help='Print a CI matrix object: {"connector": [...]}.'),
    ] = False,
    prev_commit: Annotated[
        bool,
        typer.Option(
            "--prev-commit",
            "--compare-prev",
            help="Only consider files changed by the HEAD commit.",
        ),
    ] = False,
    local_cdk: Annotated[
        bool,
        typer.Option(
            "--local-cdk",
            help="Also include Java bulk-CDK connectors built against the local CDK.",
        ),
    ] = False,
    no_fetch: Annotated[
        bool,
        typer.Option("--no-fetch", help="Diff against the remote branch without fetching it."),
    ] = False,
    base_branch: Annotated[
        str | None,
        typer.Option("--base-branch", "-b", help="Branch to compare against."),
    ] = None,
) -> None:
    """List connectors modified on the current branch.

    Combines committed, staged, unstaged and untracked changes relative to
    the remote default branch and prints the connector directories they
    touch.

    Examples:
        connectorctl modified                     # One name per line
        connectorctl modified --json              # CI matrix object
        connectorctl modified --no-java --json    # Non-Java connectors only
        connectorctl modified --prev-commit       # Files in HEAD only
        connectorctl modified java json           # Bare-word aliases
    """
    for word in words or []:
        if word == ModifierWord.JAVA:
            java = True
        elif word == ModifierWord.NO_JAVA:
            no_java = True
        elif word == ModifierWord.JSON:
            as_json = True
        elif word == ModifierWord.LOCAL_CDK:
            local_cdk = True

    repo_root = get_repo_root(ctx)
    settings = get_settings(ctx)
    if base_branch:
        settings = settings.model_copy(update={"default_branch": base_branch})

    repo = GitRepository(repo_root)
    try:
        changes = collect_changes(
            repo,
            settings,
            compare_prev=prev_commit,
            fetch=False if no_fetch else None,
        )
    except GitError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    connectors = modified_connectors(
        changes.all_paths,
        repo_root,
        settings,
        on_missing=_warn_missing_dir,
    )
    logger.debug("Modified connectors: %s", connectors)

    if local_cdk:
        if not is_quiet(ctx):
            print_info("Finding Java Bulk CDK connectors with version = local...")
        connectors = merge_connectors(connectors, local_cdk_connectors(repo_root, settings))

    language = _language_filter(java, no_java)
    if language != LanguageFilter.ALL:
        java_connectors, non_java_connectors = partition_by_language(
            connectors,
            repo_root,
            settings,
            on_unreadable=_warn_unreadable_metadata,
        )
        connectors = java_connectors if language == LanguageFilter.JAVA else non_java_connectors

    emit_selection(ConnectorSelection(connectors=tuple(connectors)), as_json)
