"""Contains utility functions for GitHub interactions."""

from depcheck.utils.constants import GITHUB_HOST_PREFIX


def split_repository_in_configuration(repo: str | None) -> tuple[str, str]:
    """Splits an 'owner/name' repository reference into owner and repository."""
    if repo is None:
        raise ValueError("A repository in the format 'owner/name' is required.")
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Repository {repo!r} must be in the format 'owner/name' with no extra parts.")
    owner, repository = parts
    return owner, repository


def normalize_hosted_project(project: str) -> tuple[str, str]:
    """Splits a hosted dependency project such as 'github.com/owner/repo' into owner and repository.

    The 'github.com/' prefix is optional.
    """
    sanitized = project.removeprefix(GITHUB_HOST_PREFIX)
    parts = sanitized.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"invalid project name {project}")
    owner, repository = parts
    return owner, repository
