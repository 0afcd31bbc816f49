"""Sets up the authenticated githubkit client shared by the checkers and the issue creator."""

from typing import TypeAlias

import structlog
from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy, UnauthAuthStrategy

from depcheck.utils.constants import DEFAULT_GITHUB_API_URL

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

GitHubClient: TypeAlias = GitHub[TokenAuthStrategy] | GitHub[UnauthAuthStrategy]


def get_github_client(github_token: str | None, github_api_url: str = DEFAULT_GITHUB_API_URL) -> GitHubClient:
    """Returns a GitHub client authenticated with a token, or an anonymous one if no token is given.

    Anonymous clients are heavily rate limited and cannot create issues, but
    are enough for a dry run against public repositories.
    """
    if not github_token:
        logger.warning("No GitHub token provided, using unauthenticated client", github_api_url=github_api_url)
        # Disable HTTP caching to always get fresh data
        return GitHub(UnauthAuthStrategy(), base_url=github_api_url, http_cache=False)
    return GitHub(TokenAuthStrategy(github_token), base_url=github_api_url, http_cache=False)
