"""Data models for connectorctl."""

from connectorctl.models.changes import ChangeSet
from connectorctl.models.metadata import ConnectorLanguage, ConnectorMetadata
from connectorctl.models.selection import ConnectorSelection, LanguageFilter

__all__ = [
    "ChangeSet",
    "ConnectorLanguage",
    "ConnectorMetadata",
    "ConnectorSelection",
    "LanguageFilter",
]
