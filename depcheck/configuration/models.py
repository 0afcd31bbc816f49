"""Pydantic models for the depcheck YAML configuration file.

Dependencies may be written either as a plain string or as a mapping::

    go_modules:
      - github.com/prometheus/prometheus
      - name: github.com/grafana/loki
        ignore_version_pattern: "-rc\\."
    github_repos:
      - github.com/prometheus/prometheus v1.2.3
      - project: github.com/grafana/loki
        version: v2.0.0
        ignore_version_pattern: "-rc\\."
"""

import re
from typing import Any

import jinja2
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from depcheck.utils.constants import DEFAULT_ISSUE_TEXT_TEMPLATE, DEFAULT_ISSUE_TITLE_TEMPLATE, DEFAULT_OUTDATED_LABEL
from depcheck.utils.github import split_repository_in_configuration
from depcheck.utils.templates import construct_jinja2_template_from_string


class DependencyOptions(BaseModel):
    """Options shared by every configured dependency."""

    model_config = ConfigDict(frozen=True)

    # Upstream versions matching this pattern are never reported.
    ignore_version_pattern: re.Pattern[str] | None = None

    def ignores(self, version: str) -> bool:
        """Return True if version matches the ignore pattern. Always False without a pattern."""
        if self.ignore_version_pattern is None:
            return False
        return self.ignore_version_pattern.search(version) is not None


class ModuleDependency(DependencyOptions):
    """A Go module to check, identified by its module path."""

    name: str

    @model_validator(mode="before")
    @classmethod
    def parse_string_or_mapping(cls, data: Any) -> Any:
        """Accept either a bare module path or a mapping."""
        if isinstance(data, str):
            return {"name": data}
        if isinstance(data, dict):
            return data
        raise ValueError(
            f"could not parse go module as a string (expected a string, got {type(data).__name__}) "
            f"or an object (expected a mapping, got {type(data).__name__})"
        )


class HostedDependency(DependencyOptions):
    """A GitHub repository pinned to a version, compared against its latest tag."""

    project: str
    version: str

    @model_validator(mode="before")
    @classmethod
    def parse_string_or_mapping(cls, data: Any) -> Any:
        """Accept either '<owner>/<name> <version>' or a mapping."""
        if isinstance(data, dict):
            return data

        string_error = f"expected a string, got {type(data).__name__}"
        if isinstance(data, str):
            project, separator, version = data.partition(" ")
            if separator and project and version:
                return {"project": project, "version": version}
            string_error = f"expected '<project> <version>', got {data!r}"
        raise ValueError(f"could not parse github repo as a string ({string_error}) or an object (expected a mapping, got {type(data).__name__})")


class DepcheckConfig(BaseModel):
    """The validated depcheck configuration."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    issue_repository: str
    issue_title_template: str = DEFAULT_ISSUE_TITLE_TEMPLATE
    issue_text_template: str = DEFAULT_ISSUE_TEXT_TEMPLATE
    outdated_label: str = DEFAULT_OUTDATED_LABEL
    go_modules: list[ModuleDependency] = Field(default_factory=list)
    github_repos: list[HostedDependency] = Field(default_factory=list)

    @field_validator("issue_title_template", "issue_text_template", "outdated_label", mode="before")
    @classmethod
    def apply_default_when_empty(cls, value: Any, info: ValidationInfo) -> Any:
        """Treat a missing or empty value as the default."""
        if value is None or value == "":
            return cls.model_fields[str(info.field_name)].default
        return value

    @field_validator("go_modules", "github_repos", mode="before")
    @classmethod
    def empty_sequence_when_null(cls, value: Any) -> Any:
        """An empty YAML key yields None, which means no dependencies."""
        return [] if value is None else value

    @field_validator("issue_repository")
    @classmethod
    def validate_issue_repository(cls, value: str) -> str:
        """The issue repository must be 'owner/name'. Surrounding slashes are dropped."""
        if not value:
            raise ValueError("either GITHUB_REPOSITORY must be set in environment or issue_repository must be set in config")
        return "/".join(split_repository_in_configuration(value))

    @field_validator("issue_title_template", "issue_text_template")
    @classmethod
    def validate_template_syntax(cls, value: str, info: ValidationInfo) -> str:
        """Templates must parse."""
        try:
            construct_jinja2_template_from_string(value)
        except jinja2.TemplateSyntaxError as exc:
            raise ValueError(f"invalid {info.field_name}: {exc}") from exc
        return value

    @field_validator("outdated_label")
    @classmethod
    def validate_outdated_label(cls, value: str) -> str:
        """The label must not be blank."""
        if not value.strip():
            raise ValueError("outdated_label must not be blank")
        return value
