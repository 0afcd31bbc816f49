"""Base ABC for GitHub clients.

The dependency checkers and the issue creator only need these operations,
so any hosting API offering them can stand in for GitHub.
"""

from abc import ABC, abstractmethod
from typing import Any, Literal


class GitHubClientBase(ABC):
    """Base ABC for GitHub clients bound to a single repository."""

    # Tag Operations
    @abstractmethod
    async def list_tags(self, per_page: int = 1, page: int = 1) -> list[Any]:
        """List one page of tags for the repository, most recent first."""
        pass

    # Search Operations
    @abstractmethod
    async def search_issues(self, query: str) -> list[Any]:
        """Search issues and pull requests with the GitHub search syntax."""
        pass

    # Issue CRUD
    @abstractmethod
    async def create_issue(self, title: str, body: str | None = None, labels: list[str] | None = None, **kwargs: Any) -> Any:
        """Create an issue for the repository."""
        pass

    @abstractmethod
    async def update_issue(self, issue_number: int, state: Literal["open", "closed"] | None = None, **kwargs: Any) -> Any:
        """Update an issue for the repository."""
        pass

    @abstractmethod
    async def close_issue(self, issue_number: int, **kwargs: Any) -> Any:
        """Close an issue for the repository."""
        pass

    @abstractmethod
    async def create_issue_comment(self, issue_number: int, body: str) -> Any:
        """Comment on an issue for the repository."""
        pass
