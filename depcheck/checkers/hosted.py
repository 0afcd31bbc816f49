"""Checks GitHub repositories for tags newer than a pinned version."""

import structlog
from githubkit.exception import GitHubException

from depcheck.checkers.base import DependencyChecker
from depcheck.configuration.exceptions import CheckerError
from depcheck.configuration.models import HostedDependency
from depcheck.github.adapter import GitHubKitAdapter
from depcheck.github.client import GitHubClient
from depcheck.schemas.dependency import Dependency
from depcheck.utils.constants import GITHUB_HOST_PREFIX
from depcheck.utils.github import normalize_hosted_project
from depcheck.utils.versions import is_newer_version

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class GitHubReposChecker(DependencyChecker):
    """Compares the most recent tag of each configured repository to its pinned version."""

    def __init__(self, repos: list[HostedDependency], client: GitHubClient) -> None:
        """Initialize the checker with the shared GitHub client."""
        self.repos = repos
        self.client = client

    async def _latest_tag(self, dependency: HostedDependency, owner: str, repo_name: str) -> str:
        adapter = GitHubKitAdapter(self.client, owner, repo_name)
        try:
            tags = await adapter.list_tags(per_page=1, page=1)
        except (GitHubException, ValueError) as exc:
            raise CheckerError(f"couldn't get tags for {dependency.project}: {exc}") from exc
        if not tags:
            raise CheckerError(f"{dependency.project} has no tags")
        return tags[0].name

    async def check_outdated(self) -> list[Dependency]:
        """Return the repositories whose latest tag is newer than the pinned version."""
        outdated: list[Dependency] = []
        for dependency in self.repos:
            try:
                owner, repo_name = normalize_hosted_project(dependency.project)
            except ValueError as exc:
                raise CheckerError(str(exc)) from exc

            latest = await self._latest_tag(dependency, owner, repo_name)
            if dependency.ignores(latest):
                logger.info("Ignoring repository tag", project=dependency.project, tag=latest)
                continue

            if not is_newer_version(dependency.version, latest):
                logger.debug("Repository is up to date", project=dependency.project, pinned=dependency.version, latest=latest)
                continue

            outdated.append(
                Dependency(
                    name=f"{GITHUB_HOST_PREFIX}{owner}/{repo_name}",
                    current_version=dependency.version,
                    latest_version=latest,
                )
            )

        logger.info("Checked GitHub repositories", checked=len(self.repos), outdated=len(outdated))
        return outdated
