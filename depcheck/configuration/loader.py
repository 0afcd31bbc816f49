"""Loads and saves the depcheck YAML configuration file."""

from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError
from ruamel.yaml.error import YAMLError

from depcheck.configuration.env import Settings
from depcheck.configuration.exceptions import ConfigurationError
from depcheck.configuration.models import DepcheckConfig
from depcheck.utils.yaml import dump_yaml_to_file, load_yaml_file

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def load_config(path: Path) -> DepcheckConfig:
    """Load the configuration from a YAML file.

    When ``issue_repository`` is not set in the file, it defaults to the
    ``GITHUB_REPOSITORY`` environment variable.

    Raises:
        ConfigurationError: If the file cannot be read or parsed, or any value is invalid.
    """
    try:
        data = load_yaml_file(path)
    except OSError as exc:
        raise ConfigurationError(f"failed to open config {path}: {exc}") from exc
    except YAMLError as exc:
        raise ConfigurationError(f"failed to parse config {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"config {path} must be a YAML mapping, got {type(data).__name__}")

    extra_keys = set(data.keys()) - set(DepcheckConfig.model_fields.keys())
    if extra_keys:
        logger.warning("Unknown keys in config will be ignored", path=str(path), extra_keys=sorted(extra_keys))

    data = apply_environment_defaults(data)
    try:
        config = DepcheckConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"invalid config {path}: {exc}") from exc

    logger.debug(
        "Loaded config",
        path=str(path),
        issue_repository=config.issue_repository,
        go_modules=len(config.go_modules),
        github_repos=len(config.github_repos),
    )
    return config


def apply_environment_defaults(data: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of the raw config with environment fallbacks applied."""
    defaulted = dict(data)
    if not defaulted.get("issue_repository"):
        defaulted["issue_repository"] = Settings().GITHUB_REPOSITORY or ""
    return defaulted


def dump_config(config: DepcheckConfig, path: Path) -> None:
    """Write the configuration to a YAML file that load_config reads back unchanged."""
    data = config.model_dump(mode="json", exclude_none=True)
    dump_yaml_to_file(data, path)
