"""GitHub client adapter for the githubkit library."""

from functools import wraps
from typing import Any, Awaitable, Callable, Literal, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RequestFailed
from githubkit.versions.latest.models import Issue, IssueComment, IssueSearchResultItem, Tag

from depcheck.utils.github import split_repository_in_configuration
from depcheck.utils.retry import retry_on_rate_limit

from .abc import GitHubClientBase
from .client import GitHubClient

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

# GitHub caps search results at 1000 items, i.e. 10 pages of 100.
MAX_SEARCH_PAGES = 10


def handle_github_422(func: F) -> F:
    """Decorator to handle GitHub 422 Unprocessable Entity errors, logging and raising with details."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            if exc.response.status_code != 422:
                raise
            try:
                error_data = exc.response.json()
            except ValueError:
                error_data = {}
            message = error_data.get("message", "Unprocessable Entity")
            errors = error_data.get("errors", [])
            logger.error(
                "GitHub 422 Unprocessable Entity",
                function=func.__name__,
                message=message,
                errors=errors,
                status_code=422,
            )
            raise ValueError(f"GitHub 422 error in {func.__name__}: {message} | errors: {errors}") from exc

    return wrapper  # type: ignore


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library, bound to one repository.

    Several adapters can share one client, e.g. one per checked repository
    plus one for the issue repository.
    """

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    @property
    def full_name(self) -> str:
        """The 'owner/name' of the bound repository."""
        return f"{self.owner}/{self.repo_name}"

    def _omit_null_parameters(self, **kwargs: Any) -> dict[str, Any]:
        """Omit parameters that are None."""
        return {k: v for k, v in kwargs.items() if v is not None}

    @classmethod
    def for_repository(cls, client: GitHubClient, repo: str) -> Self:
        """Create an adapter for an 'owner/name' repository using an existing client."""
        owner, repo_name = split_repository_in_configuration(repo)
        logger.debug("Creating adapter for GitHub repository", owner=owner, repo_name=repo_name)
        return cls(client, owner, repo_name)

    # Tag Operations
    @retry_on_rate_limit()
    async def list_tags(self, per_page: int = 1, page: int = 1) -> list[Tag]:
        """List one page of tags for the repository, most recent first."""
        logger.debug("Fetching tags", owner=self.owner, repo=self.repo_name, per_page=per_page, page=page)
        response: Response[list[Tag]] = await self.client.rest.repos.async_list_tags(
            owner=self.owner,
            repo=self.repo_name,
            per_page=per_page,
            page=page,
        )
        return response.parsed_data

    # Search Operations
    @handle_github_422
    @retry_on_rate_limit()
    async def search_issues(self, query: str, per_page: int = 100) -> list[IssueSearchResultItem]:
        """Search issues and pull requests, handling pagination."""
        all_items: list[IssueSearchResultItem] = []
        page: int = 1
        while page <= MAX_SEARCH_PAGES:
            logger.debug("Searching issues", query=query, page=page)
            response = await self.client.rest.search.async_issues_and_pull_requests(q=query, per_page=per_page, page=page)
            items: list[IssueSearchResultItem] = response.parsed_data.items
            all_items.extend(items)
            if len(items) < per_page:
                break
            page += 1
        logger.debug("Search finished", query=query, result_count=len(all_items))
        return all_items

    # Issue CRUD
    @handle_github_422
    @retry_on_rate_limit()
    async def create_issue(self, title: str, body: str | None = None, labels: list[str] | None = None, **kwargs: Any) -> Issue:
        """Create an issue for the repository."""
        params = self._omit_null_parameters(
            title=title,
            body=body,
            labels=labels,  # type: ignore
            **kwargs,
        )
        response: Response[Issue] = await self.client.rest.issues.async_create(
            owner=self.owner,
            repo=self.repo_name,
            **params,
        )
        return response.parsed_data

    @handle_github_422
    @retry_on_rate_limit()
    async def update_issue(self, issue_number: int, state: Literal["open", "closed"] | None = None, **kwargs: Any) -> Issue:
        """Update an issue for the repository."""
        params = self._omit_null_parameters(state=state, **kwargs)
        response: Response[Issue] = await self.client.rest.issues.async_update(
            owner=self.owner,
            repo=self.repo_name,
            issue_number=issue_number,
            **params,
        )
        return response.parsed_data

    async def close_issue(self, issue_number: int, **kwargs: Any) -> Issue:
        """Close an issue for the repository."""
        return await self.update_issue(issue_number, state="closed", **kwargs)

    @handle_github_422
    @retry_on_rate_limit()
    async def create_issue_comment(self, issue_number: int, body: str) -> IssueComment:
        """Comment on an issue for the repository."""
        response: Response[IssueComment] = await self.client.rest.issues.async_create_comment(
            owner=self.owner,
            repo=self.repo_name,
            issue_number=issue_number,
            body=body,
        )
        return response.parsed_data
