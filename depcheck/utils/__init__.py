"""Utility modules for shared functionality."""

from .constants import DEFAULT_ISSUE_TEXT_TEMPLATE, DEFAULT_ISSUE_TITLE_TEMPLATE, DEFAULT_OUTDATED_LABEL, GENERIC_LATEST_VERSION
from .retry import retry_on_rate_limit
from .versions import compare_versions, is_newer_version

__all__ = [
    "DEFAULT_ISSUE_TITLE_TEMPLATE",
    "DEFAULT_ISSUE_TEXT_TEMPLATE",
    "DEFAULT_OUTDATED_LABEL",
    "GENERIC_LATEST_VERSION",
    "retry_on_rate_limit",
    "compare_versions",
    "is_newer_version",
]
