"""Unit tests for metadata.yaml loading."""

from pathlib import Path

import pytest
from connectorctl.core.metadata import (
    MetadataError,
    MetadataNotFoundError,
    MetadataParseError,
    MetadataValidationError,
    get_metadata_path,
    load_metadata,
    read_language,
)
from connectorctl.models.metadata import ConnectorLanguage

CONNECTORS = "airbyte-integrations/connectors"


class TestLoadMetadata:
    """Tests for load_metadata."""

    def test_loads_manifest_only_connector(self, repo_root: Path) -> None:
        """A full metadata file is parsed into the model."""
        metadata = load_metadata(repo_root / CONNECTORS / "source-coinmarketcap")

        assert metadata.data.name == "CoinMarketCap"
        assert metadata.data.connector_type == "source"
        assert metadata.data.docker_image_tag == "0.2.23"
        assert metadata.language == ConnectorLanguage.MANIFEST_ONLY
        assert metadata.is_java is False
        assert metadata.metadata_spec_version == "1.0"
        assert [s.suite for s in metadata.data.test_suites] == ["liveTests", "acceptanceTests"]

    def test_loads_java_connector(self, repo_root: Path) -> None:
        """The language:java tag marks a Java connector."""
        metadata = load_metadata(repo_root / CONNECTORS / "destination-postgres")

        assert metadata.is_java is True

    def test_missing_file(self, tmp_path: Path) -> None:
        """A connector without metadata.yaml raises MetadataNotFoundError."""
        with pytest.raises(MetadataNotFoundError, match="metadata.yaml not found for 'source-x'"):
            load_metadata(tmp_path / "source-x")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Broken YAML raises MetadataParseError."""
        (tmp_path / "metadata.yaml").write_text("data: [unclosed\n")

        with pytest.raises(MetadataParseError, match="Invalid YAML"):
            load_metadata(tmp_path)

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        """A YAML list at top level raises MetadataValidationError."""
        (tmp_path / "metadata.yaml").write_text("- a\n- b\n")

        with pytest.raises(MetadataValidationError, match="Expected a mapping"):
            load_metadata(tmp_path)

    def test_empty_document(self, tmp_path: Path) -> None:
        """An empty file raises MetadataValidationError."""
        (tmp_path / "metadata.yaml").write_text("")

        with pytest.raises(MetadataValidationError):
            load_metadata(tmp_path)

    def test_missing_data_section(self, tmp_path: Path) -> None:
        """A mapping without a data section raises MetadataValidationError."""
        (tmp_path / "metadata.yaml").write_text('metadataSpecVersion: "1.0"\n')

        with pytest.raises(MetadataValidationError, match="Invalid metadata"):
            load_metadata(tmp_path)

    def test_errors_share_base_class(self) -> None:
        """All loader errors derive from MetadataError."""
        for error in (MetadataNotFoundError, MetadataParseError, MetadataValidationError):
            assert issubclass(error, MetadataError)


class TestReadLanguage:
    """Tests for read_language."""

    def test_reads_tag(self, repo_root: Path) -> None:
        """The language comes from data.tags."""
        assert read_language(repo_root / CONNECTORS / "source-stripe") == ConnectorLanguage.PYTHON

    def test_ignores_invalid_fields(self, tmp_path: Path) -> None:
        """Fields that fail model validation do not hide the language."""
        (tmp_path / "metadata.yaml").write_text(
            "data:\n  dockerImageTag: {bad: value}\n  tags:\n    - language:java\n"
        )

        with pytest.raises(MetadataValidationError):
            load_metadata(tmp_path)
        assert read_language(tmp_path) == ConnectorLanguage.JAVA

    @pytest.mark.parametrize(
        "content",
        ['metadataSpecVersion: "1.0"\n', "data: []\n", "data:\n  name: x\n"],
    )
    def test_unknown_without_tags(self, tmp_path: Path, content: str) -> None:
        """Missing data or tags yield UNKNOWN."""
        (tmp_path / "metadata.yaml").write_text(content)

        assert read_language(tmp_path) == ConnectorLanguage.UNKNOWN

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file still raises MetadataNotFoundError."""
        with pytest.raises(MetadataNotFoundError):
            read_language(tmp_path)


def test_get_metadata_path(tmp_path: Path) -> None:
    """Metadata lives in metadata.yaml inside the connector directory."""
    assert get_metadata_path(tmp_path) == tmp_path / "metadata.yaml"
