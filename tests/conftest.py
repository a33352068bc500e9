"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from connectorctl.utils.shell import CommandResult

CONNECTORS_DIR = "airbyte-integrations/connectors"

MANIFEST_METADATA = """\
data:
  allowedHosts:
    hosts:
      - pro-api.coinmarketcap.com
  registryOverrides:
    oss:
      enabled: true
    cloud:
      enabled: true
  connectorBuildOptions:
    baseImage: docker.io/airbyte/source-declarative-manifest:6.58.1
  connectorSubtype: api
  connectorType: source
  definitionId: 239463f5-64bb-4d88-b4bd-18ce673fd572
  dockerImageTag: 0.2.23
  dockerRepository: airbyte/source-coinmarketcap
  githubIssueLabel: source-coinmarketcap
  license: MIT
  name: CoinMarketCap
  releaseDate: 2022-10-29
  releaseStage: alpha
  documentationUrl: https://docs.airbyte.com/integrations/sources/coinmarketcap
  tags:
    - cdk:low-code
    - language:manifest-only
  ab_internal:
    sl: 100
    ql: 100
  supportLevel: community
  connectorTestSuitesOptions:
    - suite: liveTests
      testConnections:
        - name: coinmarketcap_config_dev_null
          id: 61df0386-edca-48a4-b589-7228c0d6a081
    - suite: acceptanceTests
      testSecrets:
        - name: SECRET_SOURCE-COINMARKETCAP__CREDS
          fileName: config.json
metadataSpecVersion: "1.0"
"""

JAVA_METADATA = """\
data:
  connectorType: destination
  dockerRepository: airbyte/destination-postgres
  dockerImageTag: "2.0.1"
  name: Postgres
  tags:
    - language:java
  supportLevel: certified
"""

PYTHON_METADATA = """\
data:
  connectorType: source
  dockerRepository: airbyte/source-stripe
  dockerImageTag: 5.4.0
  name: Stripe
  tags:
    - language:python
    - cdk:python
"""

LOCAL_CDK_BUILD = """\
plugins {
    id 'airbyte-bulk-connector'
}

airbyteBulkConnector {
    core = 'extract'
    toolkits = ['extract-jdbc']
    cdk = 'local'
}
"""

PINNED_CDK_BUILD = """\
airbyteBulkConnector {
    core = 'load'
    cdk = '0.1.82'
}
"""


@pytest.fixture(autouse=True)
def isolated_config_home(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory for every test."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def make_connector(tmp_path: Path) -> Callable[..., Path]:
    """Factory creating a connector directory under a temporary repo."""

    def _make(
        name: str,
        metadata: str | None = None,
        build_file: tuple[str, str] | None = None,
    ) -> Path:
        connector_dir = tmp_path / CONNECTORS_DIR / name
        connector_dir.mkdir(parents=True, exist_ok=True)
        if metadata is not None:
            (connector_dir / "metadata.yaml").write_text(metadata)
        if build_file is not None:
            filename, content = build_file
            (connector_dir / filename).write_text(content)
        return connector_dir

    return _make


@pytest.fixture
def repo_root(tmp_path: Path, make_connector: Callable[..., Path]) -> Path:
    """A repository with one connector per language and a local-CDK Java connector."""
    make_connector("source-coinmarketcap", MANIFEST_METADATA)
    make_connector("source-stripe", PYTHON_METADATA)
    make_connector(
        "destination-postgres",
        JAVA_METADATA,
        ("build.gradle", PINNED_CDK_BUILD),
    )
    make_connector(
        "source-mysql",
        JAVA_METADATA.replace("destination-postgres", "source-mysql"),
        ("build.gradle.kts", LOCAL_CDK_BUILD),
    )
    return tmp_path


class FakeGit:
    """Stand-in for ``run_command`` answering git invocations from a table.

    Keys are argument tuples after ``git``; unknown invocations succeed with
    empty output. Every call is recorded in ``calls``.
    """

    def __init__(self, responses: dict[tuple[str, ...], CommandResult] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[list[str]] = []

    def __call__(self, args: list[str], **kwargs: object) -> CommandResult:
        self.calls.append(list(args))
        return self.responses.get(tuple(args[1:]), CommandResult("", "", 0))

    def set_output(
        self, *args: str, stdout: str = "", stderr: str = "", returncode: int = 0
    ) -> None:
        self.responses[args] = CommandResult(stdout, stderr, returncode)

    def called(self, *args: str) -> bool:
        return ["git", *args] in self.calls


@pytest.fixture
def fake_git(monkeypatch: pytest.MonkeyPatch) -> Iterator[FakeGit]:
    """Patch git execution with a FakeGit where only ``upstream`` is missing."""
    fake = FakeGit()
    fake.set_output("remote", "get-url", "upstream", stderr="error: No such remote", returncode=2)
    fake.set_output("remote", "get-url", "origin", stdout="git@example.com:org/repo.git\n")
    monkeypatch.setattr("connectorctl.core.git.run_command", fake)
    yield fake
