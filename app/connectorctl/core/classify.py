"""Split connectors by implementation language.

Java connectors build and test through Gradle while every other language
goes through the Python tooling, so CI runs the two groups separately.
"""

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from connectorctl.core.metadata import MetadataError, read_language
from connectorctl.core.settings import Settings
from connectorctl.models.metadata import ConnectorLanguage

logger = logging.getLogger(__name__)


def is_java_connector(connector_dir: Path) -> bool:
    """Check a connector's metadata for the ``language:java`` tag.

    Raises:
        MetadataError: If the metadata cannot be loaded.
    """
    return read_language(connector_dir) == ConnectorLanguage.JAVA


def partition_by_language(
    connectors: Sequence[str],
    repo_root: Path,
    settings: Settings,
    *,
    on_unreadable: Callable[[str, MetadataError], None] | None = None,
) -> tuple[list[str], list[str]]:
    """Partition connectors into Java and non-Java groups.

    A connector whose metadata is missing or unreadable cannot be shown to
    be Java, so it lands in the non-Java group.

    Args:
        connectors: Connector names.
        repo_root: Repository root.
        settings: Layout settings.
        on_unreadable: Called with the connector name and error for each
            connector whose metadata could not be loaded.

    Returns:
        Tuple of (java, non_java), each in input order.
    """
    connectors_root = settings.connectors_root(repo_root)
    java: list[str] = []
    non_java: list[str] = []

    for name in connectors:
        try:
            java_connector = is_java_connector(connectors_root / name)
        except MetadataError as e:
            logger.debug("Cannot classify %s: %s", name, e)
            if on_unreadable is not None:
                on_unreadable(name, e)
            java_connector = False

        (java if java_connector else non_java).append(name)

    return java, non_java
