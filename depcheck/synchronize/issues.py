"""Contains the tracking issue logic for outdated dependencies.

The rendered issue title is the key used to find an existing tracking issue,
so a title template that references ``LatestVersion`` yields one issue per
dependency version. Older issues for the same dependency are found by
rendering the title with ``*`` as the latest version.
"""

import re
from typing import TypeAlias

import jinja2
import structlog
from githubkit.exception import GitHubException
from githubkit.versions.latest.models import Issue, IssueSearchResultItem

from depcheck.configuration.exceptions import IssueCreatorError, IssueTemplateError
from depcheck.configuration.models import DepcheckConfig
from depcheck.github.abc import GitHubClientBase
from depcheck.schemas.dependency import Dependency
from depcheck.utils.constants import CLOSING_COMMENT_TEMPLATE, GENERIC_LATEST_VERSION
from depcheck.utils.templates import construct_jinja2_environment, construct_jinja2_template_from_string, render_template_with_dependency

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

TrackingIssue: TypeAlias = Issue | IssueSearchResultItem


def build_search_query(title: str, repository: str, label: str, only_open: bool = False) -> str:
    """Build the issue search query matching a title phrase within a repository and label."""
    query = f'"{title}" repo:"{repository}" label:"{label}" in:title'
    if only_open:
        query += " is:open"
    return query


# Stands in for the latest version when locating it in a rendered title.
LATEST_VERSION_MARKER = "\x00"


def generic_title_pattern(marked_title: str) -> re.Pattern[str]:
    """Compile a pattern matching a title rendered with LATEST_VERSION_MARKER as the latest version.

    Each marker matches any non-empty version and everything else matches
    literally. Without a marker the pattern only matches the title itself.
    """
    parts = marked_title.split(LATEST_VERSION_MARKER)
    return re.compile(".+".join(re.escape(part) for part in parts))


class IssueCreator:
    """Finds or creates the tracking issue for an outdated dependency and closes the ones it supersedes."""

    def __init__(self, config: DepcheckConfig, github_adapter: GitHubClientBase) -> None:
        """Parse the issue templates of the config.

        Raises:
            IssueTemplateError: If the title or body template cannot be parsed.
        """
        self.github_adapter = github_adapter
        self.repository = config.issue_repository
        self.label = config.outdated_label

        environment = construct_jinja2_environment()
        try:
            self.title_template = construct_jinja2_template_from_string(config.issue_title_template, environment)
        except jinja2.TemplateSyntaxError as exc:
            raise IssueTemplateError("title", str(exc)) from exc
        try:
            self.body_template = construct_jinja2_template_from_string(config.issue_text_template, environment)
        except jinja2.TemplateSyntaxError as exc:
            raise IssueTemplateError("body", str(exc)) from exc

    def render_title(self, dependency: Dependency) -> str:
        """Render the issue title for a dependency."""
        try:
            return render_template_with_dependency(dependency, self.title_template)
        except jinja2.TemplateError as exc:
            raise IssueCreatorError(dependency.name, f"failed to render issue title: {exc}") from exc

    def render_body(self, dependency: Dependency) -> str:
        """Render the issue body for a dependency."""
        try:
            return render_template_with_dependency(dependency, self.body_template)
        except jinja2.TemplateError as exc:
            raise IssueCreatorError(dependency.name, f"failed to render issue body: {exc}") from exc

    async def find_issue(self, dependency: Dependency, title: str) -> IssueSearchResultItem | None:
        """Return an open or closed labelled issue whose title is exactly title, if any."""
        query = build_search_query(title, self.repository, self.label)
        try:
            items = await self.github_adapter.search_issues(query)
        except (GitHubException, ValueError) as exc:
            raise IssueCreatorError(dependency.name, f"failed to search issues: {exc}") from exc

        for item in items:
            if item.title == title:
                logger.debug("Found existing issue", dependency=dependency.name, issue_number=item.number, state=item.state)
                return item
        return None

    async def create_issue(self, dependency: Dependency) -> TrackingIssue:
        """Return the tracking issue for the dependency, creating it if no issue has the expected title.

        A closed issue with the expected title is returned as is, so a
        dismissed update is not reported again.

        Raises:
            IssueCreatorError: If rendering, searching or creating fails.
        """
        title = self.render_title(dependency)
        body = self.render_body(dependency)

        existing_issue = await self.find_issue(dependency, title)
        if existing_issue is not None:
            logger.info("Issue already exists", dependency=dependency.name, issue_number=existing_issue.number, issue_title=title)
            return existing_issue

        try:
            issue = await self.github_adapter.create_issue(title=title, body=body, labels=[self.label])
        except (GitHubException, ValueError) as exc:
            raise IssueCreatorError(dependency.name, f"failed to create issue: {exc}") from exc
        logger.info("Created issue", dependency=dependency.name, issue_number=issue.number, issue_title=title)
        return issue

    async def close_outdated(self, latest_issue: TrackingIssue, dependency: Dependency) -> list[int]:
        """Close the open tracking issues of the dependency other than latest_issue.

        Each closed issue gets a comment pointing at latest_issue. Returns the
        numbers of the closed issues. The first failure stops the procedure,
        leaving issues closed so far closed.

        Raises:
            IssueCreatorError: If rendering, searching, commenting or closing fails.
        """
        generic_dependency = dependency.model_copy(update={"latest_version": GENERIC_LATEST_VERSION})
        generic_title = self.render_title(generic_dependency)
        marked_dependency = dependency.model_copy(update={"latest_version": LATEST_VERSION_MARKER})
        title_pattern = generic_title_pattern(self.render_title(marked_dependency))

        query = build_search_query(generic_title, self.repository, self.label, only_open=True)
        try:
            items = await self.github_adapter.search_issues(query)
        except (GitHubException, ValueError) as exc:
            raise IssueCreatorError(dependency.name, f"failed to search issues: {exc}") from exc

        closed_issue_numbers: list[int] = []
        for item in items:
            if not item.id or item.id == latest_issue.id:
                continue
            # The phrase search is fuzzier than the title template.
            if item.state != "open" or title_pattern.fullmatch(item.title) is None:
                logger.debug("Skipping search result", dependency=dependency.name, issue_number=item.number, issue_title=item.title)
                continue

            try:
                await self.github_adapter.create_issue_comment(item.number, CLOSING_COMMENT_TEMPLATE.format(number=latest_issue.number))
                await self.github_adapter.close_issue(item.number)
            except (GitHubException, ValueError) as exc:
                raise IssueCreatorError(dependency.name, f"failed to close issue #{item.number}: {exc}") from exc
            logger.info("Closed outdated issue", dependency=dependency.name, issue_number=item.number, superseded_by=latest_issue.number)
            closed_issue_numbers.append(item.number)
        return closed_issue_numbers
