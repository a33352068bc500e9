"""Connector selection output.

A selection is the final list printed by ``connectorctl modified``, either
one name per line or as a CI matrix object keyed by ``connector``.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

MATRIX_KEY = "connector"

# Emitted verbatim for an empty selection
EMPTY_MATRIX_JSON = '{"connector": [""]}'


class LanguageFilter(str, Enum):
    """Which part of the language partition to emit."""

    ALL = "all"
    JAVA = "java"
    NON_JAVA = "non-java"


@dataclass(frozen=True, slots=True)
class ConnectorSelection:
    """Ordered, unique connector names selected by one run.

    Attributes:
        connectors: Connector directory names.
    """

    connectors: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        """Validate selection entries."""
        if len(set(self.connectors)) != len(self.connectors):
            msg = "Connector selection cannot contain duplicates"
            raise ValueError(msg)
        if any(not name for name in self.connectors):
            msg = "Connector names cannot be empty"
            raise ValueError(msg)

    def to_matrix(self) -> dict[str, Any]:
        """Convert to a CI matrix object.

        An empty selection yields a single empty entry so the matrix job still
        runs once as a no-op and required checks complete.
        """
        return {MATRIX_KEY: list(self.connectors) or [""]}

    def to_json(self) -> str:
        """Serialize the matrix object as compact single-line JSON."""
        if not self.connectors:
            return EMPTY_MATRIX_JSON
        return json.dumps(self.to_matrix(), separators=(",", ":"))
