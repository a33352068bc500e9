"""Connector metadata models.

Each connector directory carries a ``metadata.yaml`` consumed by the
registry and the connector build/test harness. These models cover the
fields connectorctl reads; everything else in the file is preserved as
extra data and otherwise ignored.
"""

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

LANGUAGE_TAG_PREFIX = "language:"


class ConnectorLanguage(str, Enum):
    """Implementation language declared by a ``language:`` tag."""

    JAVA = "java"
    PYTHON = "python"
    MANIFEST_ONLY = "manifest-only"
    UNKNOWN = "unknown"

    @classmethod
    def from_tags(cls, tags: list[str]) -> "ConnectorLanguage":
        """Derive the language from a connector's tag list.

        Args:
            tags: Tags such as ["cdk:low-code", "language:manifest-only"].

        Returns:
            The first recognised language tag, or UNKNOWN.
        """
        for tag in tags:
            if not tag.startswith(LANGUAGE_TAG_PREFIX):
                continue
            value = tag[len(LANGUAGE_TAG_PREFIX) :].strip()
            try:
                return cls(value)
            except ValueError:
                continue
        return cls.UNKNOWN


class _MetadataSection(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class AllowedHosts(_MetadataSection):
    """Hosts a connector may reach at runtime."""

    hosts: list[str] = Field(default_factory=list)

    @field_validator("hosts", mode="before")
    @classmethod
    def empty_hosts(cls, v: object) -> object:
        """A bare ``hosts:`` key reads as null."""
        return [] if v is None else v


class RegistryToggle(_MetadataSection):
    """Whether a connector is published to one registry."""

    enabled: bool = False


class RegistryOverrides(_MetadataSection):
    """Per-registry publication settings."""

    oss: RegistryToggle | None = None
    cloud: RegistryToggle | None = None


class ConnectorBuildOptions(_MetadataSection):
    """Options for building the connector image."""

    base_image: Annotated[str | None, Field(alias="baseImage")] = None


class SuiteOptions(_MetadataSection):
    """One entry of ``connectorTestSuitesOptions``."""

    suite: str | None = None
    test_secrets: Annotated[
        list[dict[str, Any]], Field(default_factory=list, alias="testSecrets")
    ]
    test_connections: Annotated[
        list[dict[str, Any]], Field(default_factory=list, alias="testConnections")
    ]


class ConnectorData(_MetadataSection):
    """The ``data`` section of ``metadata.yaml``."""

    name: str | None = None
    connector_type: Annotated[str | None, Field(alias="connectorType")] = None
    connector_subtype: Annotated[str | None, Field(alias="connectorSubtype")] = None
    definition_id: Annotated[str | None, Field(alias="definitionId")] = None
    docker_repository: Annotated[str | None, Field(alias="dockerRepository")] = None
    docker_image_tag: Annotated[str | None, Field(alias="dockerImageTag")] = None
    support_level: Annotated[str | None, Field(alias="supportLevel")] = None
    release_stage: Annotated[str | None, Field(alias="releaseStage")] = None
    license: str | None = None
    documentation_url: Annotated[str | None, Field(alias="documentationUrl")] = None
    tags: list[str] = Field(default_factory=list)
    allowed_hosts: Annotated[AllowedHosts | None, Field(alias="allowedHosts")] = None
    registry_overrides: Annotated[RegistryOverrides | None, Field(alias="registryOverrides")] = (
        None
    )
    connector_build_options: Annotated[
        ConnectorBuildOptions | None, Field(alias="connectorBuildOptions")
    ] = None
    test_suites: Annotated[
        list[SuiteOptions],
        Field(default_factory=list, alias="connectorTestSuitesOptions"),
    ]
    ab_internal: dict[str, Any] | None = None

    @field_validator("docker_image_tag", mode="before")
    @classmethod
    def coerce_image_tag(cls, v: object) -> object:
        """YAML reads tags such as 1.0 as numbers."""
        if isinstance(v, int | float) and not isinstance(v, bool):
            return str(v)
        return v


class ConnectorMetadata(_MetadataSection):
    """A parsed ``metadata.yaml`` file."""

    data: ConnectorData
    metadata_spec_version: Annotated[str | None, Field(alias="metadataSpecVersion")] = None

    @field_validator("metadata_spec_version", mode="before")
    @classmethod
    def coerce_spec_version(cls, v: object) -> object:
        if isinstance(v, int | float) and not isinstance(v, bool):
            return str(v)
        return v

    @property
    def language(self) -> ConnectorLanguage:
        """Implementation language from the ``language:`` tag."""
        return ConnectorLanguage.from_tags(self.data.tags)

    @property
    def is_java(self) -> bool:
        """Check if this is a Java connector."""
        return self.language == ConnectorLanguage.JAVA

    @property
    def docker_image(self) -> str | None:
        """Full ``repository:tag`` image reference, when both are known."""
        if self.data.docker_repository and self.data.docker_image_tag:
            return f"{self.data.docker_repository}:{self.data.docker_image_tag}"
        return self.data.docker_repository

    @property
    def enabled_registries(self) -> list[str]:
        """Names of registries this connector is published to."""
        overrides = self.data.registry_overrides
        if overrides is None:
            return []
        return [
            name
            for name, toggle in (("oss", overrides.oss), ("cloud", overrides.cloud))
            if toggle is not None and toggle.enabled
        ]
