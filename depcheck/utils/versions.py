"""Semantic version parsing and comparison for upstream tags."""

import semver

FULL_VERSION_DOT_COUNT = 2


def parse_semantic_version(tag: str) -> semver.Version | None:
    """Parse a tag such as ``v1.2.3`` into a semantic version.

    A leading ``v`` is optional. The shorthand forms ``v1`` and ``v1.2`` are
    accepted only without pre-release or build suffixes, and stand for
    ``v1.0.0`` and ``v1.2.0``. Returns None for tags that are not semantic versions.
    """
    candidate = tag[1:] if tag.startswith("v") else tag
    if not candidate:
        return None
    core = candidate.split("-", 1)[0].split("+", 1)[0]
    if core != candidate and core.count(".") != FULL_VERSION_DOT_COUNT:
        return None
    try:
        return semver.Version.parse(candidate, optional_minor_and_patch=True)
    except (ValueError, TypeError):
        return None


def compare_versions(left: str, right: str) -> int:
    """Compare two version tags, returning -1, 0 or 1.

    Tags that are not semantic versions sort below every valid version and
    compare equal to each other.
    """
    left_version = parse_semantic_version(left)
    right_version = parse_semantic_version(right)
    if left_version is None and right_version is None:
        return 0
    if left_version is None:
        return -1
    if right_version is None:
        return 1
    return left_version.compare(right_version)


def is_newer_version(current: str, latest: str) -> bool:
    """Return True if latest is strictly greater than current."""
    return compare_versions(current, latest) < 0
