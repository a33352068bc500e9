"""Map changed paths to connector directories.

A path selects a connector when it lies under the connectors root in a
directory whose name starts with one of the configured prefixes
(``source-``/``destination-`` by default). Changes to ignored files such as
a connector's README never select it.
"""

import logging
import re
from collections.abc import Callable, Iterable
from fnmatch import fnmatchcase
from pathlib import Path, PurePosixPath

from connectorctl.core.settings import Settings

logger = logging.getLogger(__name__)

# Build files checked for a local CDK reference, in order of preference.
_GRADLE_BUILD_FILES: tuple[str, ...] = ("build.gradle.kts", "build.gradle")

_BULK_CONNECTOR_MARKER = "airbyteBulkConnector"
_LOCAL_CDK_PATTERN = re.compile(r"""cdk *= *['"]local['"]""")


def is_ignored(path: str, patterns: Iterable[str]) -> bool:
    """Check whether a changed path should not count as a change.

    Only paths inside a directory are considered; the basename is matched
    against each glob.

    Args:
        path: Repository-relative path.
        patterns: Basename globs (e.g. "README.md", "*.md").

    Returns:
        True if the path is ignored.
    """
    if "/" not in path:
        return False
    name = PurePosixPath(path).name
    return any(fnmatchcase(name, pattern) for pattern in patterns)


def connector_name_from_path(path: str, settings: Settings) -> str | None:
    """Extract the connector directory name from a changed path.

    Args:
        path: Repository-relative path, e.g.
            "airbyte-integrations/connectors/source-foo/metadata.yaml".
        settings: Layout settings.

    Returns:
        The connector directory name ("source-foo"), or None when the path
        is not inside a connector.
    """
    root = settings.connectors_dir + "/"
    if not path.startswith(root):
        return None

    name = path[len(root) :].split("/", 1)[0]
    for prefix in settings.connector_prefixes:
        if name.startswith(prefix) and len(name) > len(prefix):
            return name
    return None


def modified_connectors(
    paths: Iterable[str],
    repo_root: Path,
    settings: Settings,
    *,
    on_missing: Callable[[str], None] | None = None,
) -> list[str]:
    """Resolve changed paths to the sorted set of existing connectors.

    Args:
        paths: Changed repository-relative paths.
        repo_root: Repository root used to check that connectors exist.
        settings: Layout settings.
        on_missing: Called with each connector name whose directory no longer
            exists (for instance, a removed connector).

    Returns:
        Sorted, unique connector names with an existing directory.
    """
    names: set[str] = set()
    for path in paths:
        if is_ignored(path, settings.ignore_patterns):
            logger.debug("Ignoring %s", path)
            continue
        name = connector_name_from_path(path, settings)
        if name is not None:
            names.add(name)

    connectors_root = settings.connectors_root(repo_root)
    connectors: list[str] = []
    for name in sorted(names):
        if (connectors_root / name).is_dir():
            connectors.append(name)
            continue
        logger.debug("Connector directory missing: %s", connectors_root / name)
        if on_missing is not None:
            on_missing(name)
    return connectors


def find_gradle_build_file(connector_dir: Path) -> Path | None:
    """Return the connector's Gradle build file, preferring the Kotlin DSL."""
    for filename in _GRADLE_BUILD_FILES:
        candidate = connector_dir / filename
        if candidate.is_file():
            return candidate
    return None


def uses_local_cdk(build_file: Path) -> bool:
    """Check whether a Gradle build pins the bulk CDK to the local checkout.

    Args:
        build_file: Path to build.gradle or build.gradle.kts.

    Returns:
        True if the build declares an ``airbyteBulkConnector`` block and
        sets ``cdk = 'local'`` (either quote style).
    """
    try:
        text = build_file.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("Cannot read %s: %s", build_file, e)
        return False
    return _BULK_CONNECTOR_MARKER in text and _LOCAL_CDK_PATTERN.search(text) is not None


def local_cdk_connectors(repo_root: Path, settings: Settings) -> list[str]:
    """Find Java bulk-CDK connectors built against the local CDK.

    These are rebuilt whenever the CDK itself changes, so they are selected
    regardless of whether their own files changed.

    Args:
        repo_root: Repository root.
        settings: Layout settings.

    Returns:
        Sorted connector names.
    """
    connectors_root = settings.connectors_root(repo_root)
    if not connectors_root.is_dir():
        logger.warning("Connectors directory not found: %s", connectors_root)
        return []

    found: list[str] = []
    for connector_dir in sorted(connectors_root.iterdir()):
        if connector_dir.name.startswith(".") or not connector_dir.is_dir():
            continue
        build_file = find_gradle_build_file(connector_dir)
        if build_file is not None and uses_local_cdk(build_file):
            found.append(connector_dir.name)
    return found


def merge_connectors(*groups: Iterable[str]) -> list[str]:
    """Union connector name groups into one sorted, unique list."""
    return sorted({name for group in groups for name in group})
