"""Contains results of a dependency check run."""

from depcheck.schemas.dependency import Dependency
from depcheck.synchronize.issues import TrackingIssue


class DependencyIssueResult:
    """Contains the outcome of tracking one outdated dependency."""

    def __init__(
        self,
        dependency: Dependency,
        issue: TrackingIssue | None = None,
        closed_issue_numbers: list[int] | None = None,
        error: str | None = None,
    ) -> None:
        """Initialize the result with the dependency, its tracking issue and any error."""
        self.dependency = dependency
        self.issue = issue
        self.closed_issue_numbers = closed_issue_numbers or []
        self.error = error

    @property
    def succeeded(self) -> bool:
        """Whether the dependency was tracked without error."""
        return self.error is None


class DepcheckResult:
    """Contains results of the whole dependency check run."""

    def __init__(self, outdated: list[Dependency], issue_results: list[DependencyIssueResult] | None = None, dry_run: bool = False) -> None:
        """Initialize the result with the outdated dependencies and per-dependency issue results."""
        self.outdated = outdated
        self.issue_results = issue_results or []
        self.dry_run = dry_run

    @property
    def errors(self) -> list[DependencyIssueResult]:
        """The dependencies whose tracking failed."""
        return [result for result in self.issue_results if not result.succeeded]
