"""Contains unit tests for loading and dumping the configuration file."""

from pathlib import Path

import pytest
from pytest import MonkeyPatch

from depcheck.configuration.exceptions import ConfigurationError
from depcheck.configuration.loader import dump_config, load_config
from depcheck.configuration.models import DepcheckConfig

FULL_CONFIG = """\
issue_repository: octocat/tracker
issue_title_template: "Bump {{.Name}} to {{.LatestVersion}}"
outdated_label: dependencies
go_modules:
  - github.com/prometheus/prometheus
  - name: github.com/grafana/loki
    ignore_version_pattern: "-rc\\\\."
github_repos:
  - github.com/grafana/agent v0.1.0
  - project: github.com/grafana/tempo
    version: v1.0.0
    ignore_version_pattern: "^v0\\\\."
"""


@pytest.fixture(autouse=True)
def clear_github_repository(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """Keep the environment and any local .env file out of these tests."""
    monkeypatch.delenv("GITHUB_REPOSITORY", raising=False)
    monkeypatch.chdir(tmp_path)


def write_config(tmp_path: Path, content: str) -> Path:
    """Write a config file and return its path."""
    path = tmp_path / "depcheck.yml"
    path.write_text(content, encoding="utf-8")
    return path


def test_load_config_full(tmp_path: Path) -> None:
    """Test loading a config using both dependency shapes."""
    config = load_config(write_config(tmp_path, FULL_CONFIG))
    assert config.issue_repository == "octocat/tracker"
    assert config.issue_title_template == "Bump {{.Name}} to {{.LatestVersion}}"
    assert config.outdated_label == "dependencies"
    assert [module.name for module in config.go_modules] == ["github.com/prometheus/prometheus", "github.com/grafana/loki"]
    assert config.go_modules[1].ignores("v2.0.0-rc.1")
    assert [(repo.project, repo.version) for repo in config.github_repos] == [
        ("github.com/grafana/agent", "v0.1.0"),
        ("github.com/grafana/tempo", "v1.0.0"),
    ]
    assert config.github_repos[1].ignores("v0.9.0")


def test_load_config_repository_from_environment(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    """Test that GITHUB_REPOSITORY is used when issue_repository is absent."""
    monkeypatch.setenv("GITHUB_REPOSITORY", "octocat/from-env")
    config = load_config(write_config(tmp_path, "go_modules:\n  - example.com/a\n"))
    assert config.issue_repository == "octocat/from-env"


def test_load_config_file_value_wins_over_environment(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    """Test that the environment is only a fallback."""
    monkeypatch.setenv("GITHUB_REPOSITORY", "octocat/from-env")
    config = load_config(write_config(tmp_path, "issue_repository: octocat/from-file\n"))
    assert config.issue_repository == "octocat/from-file"


def test_load_config_missing_repository(tmp_path: Path) -> None:
    """Test that loading fails when no issue repository can be determined."""
    with pytest.raises(ConfigurationError, match="GITHUB_REPOSITORY"):
        load_config(write_config(tmp_path, "go_modules:\n  - example.com/a\n"))


def test_load_config_empty_file(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    """Test that an empty document is an empty config."""
    monkeypatch.setenv("GITHUB_REPOSITORY", "octocat/tracker")
    config = load_config(write_config(tmp_path, ""))
    assert config == DepcheckConfig(issue_repository="octocat/tracker")


def test_load_config_missing_file(tmp_path: Path) -> None:
    """Test that a missing file is a configuration error."""
    with pytest.raises(ConfigurationError, match="failed to open config"):
        load_config(tmp_path / "missing.yml")


@pytest.mark.parametrize(
    "content,match",
    [
        pytest.param("issue_repository: [unclosed\n", "failed to parse config", id="malformed yaml"),
        pytest.param("- a\n- b\n", "must be a YAML mapping", id="sequence document"),
        pytest.param(
            "issue_repository: octocat/tracker\ngo_modules:\n  - name: a\n    ignore_version_pattern: '('\n",
            "invalid config",
            id="bad regex",
        ),
    ],
)
def test_load_config_invalid(tmp_path: Path, content: str, match: str) -> None:
    """Test that malformed configs are configuration errors."""
    with pytest.raises(ConfigurationError, match=match):
        load_config(write_config(tmp_path, content))


def test_load_config_unknown_keys_are_ignored(tmp_path: Path) -> None:
    """Test that unknown top-level keys do not fail loading."""
    config = load_config(write_config(tmp_path, "issue_repository: octocat/tracker\nunknown_key: 1\n"))
    assert config.issue_repository == "octocat/tracker"


def test_dump_config_round_trip_defaults(tmp_path: Path) -> None:
    """Test that a config built from its defaults survives a round trip."""
    config = DepcheckConfig(issue_repository="octocat/tracker")
    path = tmp_path / "dumped.yml"
    dump_config(config, path)
    assert load_config(path) == config


def test_dump_config_round_trip_full(tmp_path: Path) -> None:
    """Test that dependencies and ignore patterns survive a round trip."""
    config = load_config(write_config(tmp_path, FULL_CONFIG))
    path = tmp_path / "dumped.yml"
    dump_config(config, path)
    reloaded = load_config(path)
    assert reloaded == config
    assert reloaded.go_modules[1].ignore_version_pattern is not None
    assert reloaded.go_modules[1].ignore_version_pattern.pattern == r"-rc\."


@pytest.mark.parametrize("repository", ["octocat/tracker/", "/octocat/tracker", "/octocat/tracker/"])
def test_load_config_normalizes_issue_repository(tmp_path: Path, repository: str) -> None:
    """Test that surrounding slashes are dropped so issue searches are scoped to the right repository."""
    config = load_config(write_config(tmp_path, f"issue_repository: {repository}\n"))
    assert config.issue_repository == "octocat/tracker"


def test_load_config_normalizes_repository_from_environment(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    """Test that the GITHUB_REPOSITORY fallback is normalized too."""
    monkeypatch.setenv("GITHUB_REPOSITORY", "octocat/from-env/")
    config = load_config(write_config(tmp_path, ""))
    assert config.issue_repository == "octocat/from-env"
