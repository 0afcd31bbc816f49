"""Pydantic schema for an outdated dependency reported by a checker."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class Dependency(BaseModel):
    """A named dependency with the version in use and the latest version available.

    For Go modules the name is the module path. For GitHub repositories the
    name is ``github.com/<owner>/<repo>``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    current_version: str
    latest_version: str

    def template_context(self) -> dict[str, Any]:
        """Return the values exposed to issue title and body templates."""
        return {
            "Name": self.name,
            "CurrentVersion": self.current_version,
            "LatestVersion": self.latest_version,
        }
