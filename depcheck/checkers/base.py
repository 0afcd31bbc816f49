"""Base ABC for dependency checkers."""

from abc import ABC, abstractmethod

from depcheck.schemas.dependency import Dependency


class DependencyChecker(ABC):
    """Finds dependencies that are behind their latest upstream version."""

    @abstractmethod
    async def check_outdated(self) -> list[Dependency]:
        """Return only the outdated dependencies.

        Raises:
            CheckerError: If the outdated dependencies cannot be determined.
        """
        pass
