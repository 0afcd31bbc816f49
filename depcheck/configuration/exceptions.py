"""Contains exceptions raised while checking dependencies and managing tracking issues."""


class DepcheckError(Exception):
    """Base class for errors that abort or degrade a dependency check run."""

    pass


class ConfigurationError(DepcheckError):
    """Raised when the configuration file cannot be loaded or is invalid."""

    pass


class CheckerError(DepcheckError):
    """Raised when a checker cannot determine the outdated dependencies."""

    pass


class IssueTemplateError(DepcheckError):
    """Raised when an issue title or body template cannot be parsed."""

    def __init__(self, template_name: str, message: str) -> None:
        """Initializes the exception with the name of the broken template."""
        super().__init__(f"failed to parse {template_name} template: {message}")
        self.template_name = template_name


class IssueCreatorError(DepcheckError):
    """Raised when a tracking issue cannot be found, created or superseded for a dependency."""

    def __init__(self, dependency_name: str, message: str) -> None:
        """Initializes the exception with the name of the affected dependency."""
        super().__init__(f"{dependency_name}: {message}")
        self.dependency_name = dependency_name
