"""Orchestrates a dependency check run: check, report, then track outdated dependencies as issues."""

import time
from pathlib import Path

import structlog
import typer

from depcheck.checkers.composite import new_checker
from depcheck.configuration.exceptions import IssueCreatorError
from depcheck.configuration.loader import load_config
from depcheck.github.adapter import GitHubKitAdapter
from depcheck.github.client import get_github_client
from depcheck.schemas.dependency import Dependency
from depcheck.synchronize.issues import IssueCreator
from depcheck.synchronize.results import DepcheckResult, DependencyIssueResult
from depcheck.utils.constants import DEFAULT_GITHUB_API_URL

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def echo_outdated_dependencies(issue_repository: str, outdated: list[Dependency]) -> None:
    """Print the operator summary of outdated dependencies to standard output."""
    typer.echo(f"Issues will be created in {issue_repository}")
    typer.echo("Out of date dependencies:")
    typer.echo()
    for dependency in outdated:
        typer.echo(f"\tName:      {dependency.name}")
        typer.echo(f"\tVersion:   {dependency.current_version}")
        typer.echo(f"\tAvailable: {dependency.latest_version}")
        typer.echo()


async def track_dependency(creator: IssueCreator, dependency: Dependency, close_outdated: bool) -> DependencyIssueResult:
    """Find or create the tracking issue of one dependency, then close the issues it supersedes.

    Failures are logged and recorded in the result instead of being raised.
    """
    try:
        issue = await creator.create_issue(dependency)
    except IssueCreatorError as exc:
        logger.error("Failed to create issue", dependency=dependency.name, error=str(exc))
        return DependencyIssueResult(dependency, error=str(exc))

    if not close_outdated:
        return DependencyIssueResult(dependency, issue)

    try:
        closed_issue_numbers = await creator.close_outdated(issue, dependency)
    except IssueCreatorError as exc:
        logger.error("Failed to close outdated issues", dependency=dependency.name, issue_number=issue.number, error=str(exc))
        return DependencyIssueResult(dependency, issue, error=str(exc))
    return DependencyIssueResult(dependency, issue, closed_issue_numbers)


async def run_depcheck_workflow(
    repository: Path,
    config_path: Path,
    github_token: str | None,
    dry_run: bool = False,
    close_outdated: bool = True,
    github_api_url: str = DEFAULT_GITHUB_API_URL,
) -> DepcheckResult:
    """Run the depcheck workflow for the project at repository.

    config_path is relative to repository. Nothing is created or closed on
    GitHub when dry_run is set or when no dependency is outdated.

    Raises:
        ConfigurationError: If the config cannot be loaded.
        CheckerError: If the outdated dependencies cannot be determined.
        IssueTemplateError: If an issue template cannot be parsed.
    """
    config = load_config(repository / config_path)
    client = get_github_client(github_token, github_api_url)

    start_time = time.time()
    checker = new_checker(config, repository, client)
    outdated = await checker.check_outdated()
    logger.info("Checked dependencies", outdated_count=len(outdated), duration=round(time.time() - start_time, 2))

    if not outdated:
        return DepcheckResult(outdated, dry_run=dry_run)

    echo_outdated_dependencies(config.issue_repository, outdated)

    if dry_run:
        logger.info("Dry run, not creating issues", outdated_count=len(outdated))
        return DepcheckResult(outdated, dry_run=dry_run)

    github_adapter = GitHubKitAdapter.for_repository(client, config.issue_repository)
    creator = IssueCreator(config, github_adapter)

    issue_results: list[DependencyIssueResult] = []
    for dependency in outdated:
        issue_results.append(await track_dependency(creator, dependency, close_outdated))

    result = DepcheckResult(outdated, issue_results, dry_run=dry_run)
    logger.info("Tracked outdated dependencies", issue_count=len(issue_results), error_count=len(result.errors))
    return result
