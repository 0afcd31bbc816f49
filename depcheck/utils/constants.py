"""Shared constants used across the application."""

# Issue Defaults
# --------------

DEFAULT_ISSUE_TITLE_TEMPLATE = "Update {{.Name}} to {{.LatestVersion}}"
"""Default template for tracking issue titles. The rendered title is the deduplication key."""

DEFAULT_ISSUE_TEXT_TEMPLATE = (
    "An update for `{{.Name}}` (version `{{.LatestVersion}}`) is now available. Version `{{.CurrentVersion}}` is currently in use."
)
"""Default template for tracking issue bodies."""

DEFAULT_OUTDATED_LABEL = "outdated-dependency"
"""Default label attached to every tracking issue."""

GENERIC_LATEST_VERSION = "*"
"""Stand-in latest version used to render the title shared by all tracking issues of a dependency."""

CLOSING_COMMENT_TEMPLATE = "Closing in favor of #{number}"
"""Comment posted on superseded tracking issues. Use .format(number=N)."""

# Command Line Defaults
# ---------------------

DEFAULT_REPOSITORY_PATH = "."
DEFAULT_CONFIG_PATH = ".github/depcheck.yml"
DEFAULT_GITHUB_API_URL = "https://api.github.com"

# Go Toolchain
# ------------

GO_BINARY = "go"
GO_LIST_ARGUMENTS = ["list", "-mod=readonly", "-json", "-u", "-m"]
"""Arguments passed to the Go toolchain ahead of the module paths to check."""

# Hosted Repositories
# -------------------

GITHUB_HOST_PREFIX = "github.com/"
