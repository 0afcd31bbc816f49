"""Combines the configured checkers into one."""

from pathlib import Path

from depcheck.checkers.base import DependencyChecker
from depcheck.checkers.hosted import GitHubReposChecker
from depcheck.checkers.modules import GoModulesChecker
from depcheck.configuration.models import DepcheckConfig
from depcheck.github.client import GitHubClient
from depcheck.schemas.dependency import Dependency


class MultiChecker(DependencyChecker):
    """Runs each checker in turn and concatenates their results.

    Checkers run one after the other: the Go toolchain is already a heavy
    subprocess and GitHub rate limits the tag lookups.
    """

    def __init__(self, checkers: list[DependencyChecker]) -> None:
        """Initialize with the checkers to run, in order."""
        self.checkers = checkers

    async def check_outdated(self) -> list[Dependency]:
        """Return the outdated dependencies of every checker, stopping at the first error."""
        outdated: list[Dependency] = []
        for checker in self.checkers:
            outdated.extend(await checker.check_outdated())
        return outdated


def new_checker(config: DepcheckConfig, repository_path: Path, client: GitHubClient) -> MultiChecker:
    """Build the checker for a config. Go modules are checked before GitHub repositories."""
    checkers: list[DependencyChecker] = []
    if config.go_modules:
        checkers.append(GoModulesChecker(repository_path, config.go_modules))
    if config.github_repos:
        checkers.append(GitHubReposChecker(config.github_repos, client))
    return MultiChecker(checkers)
