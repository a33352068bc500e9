"""Load connector ``metadata.yaml`` files."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from connectorctl.models.metadata import ConnectorLanguage, ConnectorMetadata

logger = logging.getLogger(__name__)

METADATA_FILENAME = "metadata.yaml"


class MetadataError(Exception):
    """Base exception for connector metadata errors."""


class MetadataNotFoundError(MetadataError):
    """Raised when a connector has no metadata.yaml."""


class MetadataParseError(MetadataError):
    """Raised when metadata.yaml is not valid YAML."""


class MetadataValidationError(MetadataError):
    """Raised when metadata.yaml doesn't have the expected shape."""


def get_metadata_path(connector_dir: Path) -> Path:
    """Path of a connector's metadata file."""
    return connector_dir / METADATA_FILENAME


def read_metadata_document(connector_dir: Path) -> dict[str, Any]:
    """Parse a connector's metadata.yaml without validating its fields.

    Raises:
        MetadataNotFoundError: If metadata.yaml doesn't exist.
        MetadataParseError: If the YAML syntax is invalid.
        MetadataValidationError: If the document is not a mapping.
    """
    path = get_metadata_path(connector_dir)
    if not path.is_file():
        raise MetadataNotFoundError(f"metadata.yaml not found for '{connector_dir.name}' ({path})")

    try:
        with open(path, encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise MetadataParseError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise MetadataError(f"Failed to read {path}: {e}") from e

    if not isinstance(document, dict):
        raise MetadataValidationError(f"Expected a mapping at the top of {path}")
    return document


def read_language(connector_dir: Path) -> ConnectorLanguage:
    """Read the ``language:`` tag only.

    Fields other than ``data.tags`` are not validated, so a connector is
    classified even when unrelated parts of its metadata are malformed.

    Raises:
        MetadataError: If the file is missing, unparseable or not a mapping.
    """
    data = read_metadata_document(connector_dir).get("data")
    tags = data.get("tags") if isinstance(data, dict) else None
    if not isinstance(tags, list):
        return ConnectorLanguage.UNKNOWN
    return ConnectorLanguage.from_tags([tag for tag in tags if isinstance(tag, str)])


def load_metadata(connector_dir: Path) -> ConnectorMetadata:
    """Load and validate a connector's metadata.yaml.

    Args:
        connector_dir: The connector's directory.

    Returns:
        Validated ConnectorMetadata.

    Raises:
        MetadataNotFoundError: If metadata.yaml doesn't exist.
        MetadataParseError: If the YAML syntax is invalid.
        MetadataValidationError: If the content doesn't match the model.
    """
    document = read_metadata_document(connector_dir)
    try:
        return ConnectorMetadata.model_validate(document)
    except ValidationError as e:
        path = get_metadata_path(connector_dir)
        raise MetadataValidationError(f"Invalid metadata in {path}: {e}") from e
