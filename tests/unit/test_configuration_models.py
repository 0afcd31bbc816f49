"""Contains unit tests for the configuration models."""

from typing import Any

import pytest
from pydantic import ValidationError

from depcheck.configuration.models import DepcheckConfig, HostedDependency, ModuleDependency
from depcheck.utils.constants import DEFAULT_ISSUE_TEXT_TEMPLATE, DEFAULT_ISSUE_TITLE_TEMPLATE, DEFAULT_OUTDATED_LABEL


def test_module_dependency_from_string() -> None:
    """Test that a bare string is the module path."""
    module = ModuleDependency.model_validate("github.com/prometheus/prometheus")
    assert module.name == "github.com/prometheus/prometheus"
    assert module.ignore_version_pattern is None


def test_module_dependency_from_mapping() -> None:
    """Test the mapping form with an ignore pattern."""
    module = ModuleDependency.model_validate({"name": "github.com/grafana/loki", "ignore_version_pattern": r"-rc\."})
    assert module.name == "github.com/grafana/loki"
    assert module.ignores("v2.0.0-rc.1") is True
    assert module.ignores("v2.0.0") is False


@pytest.mark.parametrize(
    "data,project,version",
    [
        pytest.param("github.com/grafana/loki v1.2.3", "github.com/grafana/loki", "v1.2.3", id="string"),
        pytest.param("grafana/loki v1.2.3 extra", "grafana/loki", "v1.2.3 extra", id="version keeps everything after first space"),
        pytest.param({"project": "grafana/loki", "version": "v1.2.3"}, "grafana/loki", "v1.2.3", id="mapping"),
    ],
)
def test_hosted_dependency_shapes(data: Any, project: str, version: str) -> None:
    """Test the string and mapping forms of a hosted dependency."""
    hosted = HostedDependency.model_validate(data)
    assert hosted.project == project
    assert hosted.version == version


@pytest.mark.parametrize(
    "data",
    [
        pytest.param("grafana/loki", id="string without version"),
        pytest.param(["grafana/loki", "v1.2.3"], id="sequence"),
        pytest.param(42, id="number"),
        pytest.param({"project": "grafana/loki"}, id="mapping without version"),
    ],
)
def test_hosted_dependency_invalid(data: Any) -> None:
    """Test that other shapes are rejected."""
    with pytest.raises(ValidationError):
        HostedDependency.model_validate(data)


def test_module_dependency_invalid_mentions_both_shapes() -> None:
    """Test that the error explains both accepted shapes."""
    with pytest.raises(ValidationError, match="as a string .* or an object"):
        ModuleDependency.model_validate(["github.com/grafana/loki"])


def test_invalid_ignore_pattern() -> None:
    """Test that an uncompilable ignore pattern is rejected."""
    with pytest.raises(ValidationError):
        ModuleDependency.model_validate({"name": "github.com/grafana/loki", "ignore_version_pattern": "(unclosed"})


def test_config_defaults() -> None:
    """Test the defaults applied to a minimal config."""
    config = DepcheckConfig.model_validate({"issue_repository": "octocat/tracker"})
    assert config.issue_title_template == DEFAULT_ISSUE_TITLE_TEMPLATE
    assert config.issue_text_template == DEFAULT_ISSUE_TEXT_TEMPLATE
    assert config.outdated_label == DEFAULT_OUTDATED_LABEL
    assert config.go_modules == []
    assert config.github_repos == []


def test_config_empty_values_use_defaults() -> None:
    """Test that empty YAML values fall back to the defaults."""
    config = DepcheckConfig.model_validate(
        {
            "issue_repository": "octocat/tracker",
            "issue_title_template": "",
            "issue_text_template": None,
            "outdated_label": "",
            "go_modules": None,
            "github_repos": None,
        }
    )
    assert config.issue_title_template == DEFAULT_ISSUE_TITLE_TEMPLATE
    assert config.issue_text_template == DEFAULT_ISSUE_TEXT_TEMPLATE
    assert config.outdated_label == DEFAULT_OUTDATED_LABEL
    assert config.go_modules == []
    assert config.github_repos == []


@pytest.mark.parametrize(
    "data,match",
    [
        pytest.param({"issue_repository": ""}, "GITHUB_REPOSITORY", id="empty repository"),
        pytest.param({"issue_repository": "tracker"}, "owner/name", id="repository without owner"),
        pytest.param({"issue_repository": "octocat/tracker", "issue_title_template": "{{ Name"}, "issue_title_template", id="broken title"),
        pytest.param({"issue_repository": "octocat/tracker", "outdated_label": "   "}, "outdated_label", id="blank label"),
    ],
)
def test_config_invalid(data: dict[str, Any], match: str) -> None:
    """Test that invalid configs are rejected."""
    with pytest.raises(ValidationError, match=match):
        DepcheckConfig.model_validate(data)


@pytest.mark.parametrize("issue_repository", ["octocat/tracker", "octocat/tracker/", "/octocat/tracker", "/octocat/tracker/"])
def test_config_normalizes_issue_repository(issue_repository: str) -> None:
    """Test that slashes around the issue repository are dropped."""
    assert DepcheckConfig(issue_repository=issue_repository).issue_repository == "octocat/tracker"
