"""Checks Go modules for available updates using the Go toolchain.

``go list -m -u -json`` prints one JSON object per module, one after the
other rather than as a JSON array, so the output is decoded as a stream of
consecutive records.
"""

import asyncio
import json
from collections.abc import Iterator
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from depcheck.checkers.base import DependencyChecker
from depcheck.configuration.exceptions import CheckerError
from depcheck.configuration.models import ModuleDependency
from depcheck.schemas.dependency import Dependency
from depcheck.utils.constants import GO_BINARY, GO_LIST_ARGUMENTS

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class GoListModuleError(BaseModel):
    """Error reported by the Go toolchain while loading a module."""

    err: str = Field(alias="Err")


class GoListModule(BaseModel):
    """A module record as printed by ``go list -m -u -json`` (see ``go help list``)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    path: str = Field(alias="Path")
    version: str = Field(default="", alias="Version")
    update: "GoListModule | None" = Field(default=None, alias="Update")
    error: GoListModuleError | None = Field(default=None, alias="Error")


def decode_go_list_output(output: str) -> Iterator[GoListModule]:
    """Decode consecutive JSON records until the output is exhausted.

    Raises:
        json.JSONDecodeError: If a record is not valid JSON.
        ValidationError: If a record is not a module.
    """
    decoder = json.JSONDecoder()
    index = 0
    while True:
        while index < len(output) and output[index].isspace():
            index += 1
        if index >= len(output):
            return
        record, index = decoder.raw_decode(output, index)
        yield GoListModule.model_validate(record)


class GoModulesChecker(DependencyChecker):
    """Checks the configured Go modules of a local module for updates."""

    def __init__(self, repository_path: Path, modules: list[ModuleDependency], go_binary: str = GO_BINARY) -> None:
        """Initialize the checker for the module rooted at repository_path."""
        self.repository_path = repository_path
        self.modules = modules
        self.go_binary = go_binary

    def go_list_arguments(self) -> list[str]:
        """Arguments passed to the Go toolchain."""
        return [*GO_LIST_ARGUMENTS, *(module.name for module in self.modules)]

    async def _run_go_list(self) -> str:
        arguments = self.go_list_arguments()
        logger.info("Running Go toolchain", binary=self.go_binary, arguments=arguments, cwd=str(self.repository_path))
        try:
            process = await asyncio.create_subprocess_exec(
                self.go_binary,
                *arguments,
                cwd=self.repository_path,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise CheckerError(f"failed running go command: {exc}") from exc

        try:
            stdout, stderr = await process.communicate()
        except asyncio.CancelledError:
            # Do not leave the toolchain running behind a cancelled run.
            if process.returncode is None:
                try:
                    process.terminate()
                except ProcessLookupError:
                    pass
                await process.wait()
            raise

        if process.returncode != 0:
            error_output = stderr.decode("utf-8", errors="replace").strip()
            logger.error("Go toolchain failed", returncode=process.returncode, stderr=error_output)
            raise CheckerError(f"failed running go command: exit status {process.returncode}: {error_output}")
        return stdout.decode("utf-8")

    async def check_outdated(self) -> list[Dependency]:
        """Return the configured modules for which the toolchain reports an update."""
        modules_by_name = {module.name: module for module in self.modules}
        output = await self._run_go_list()

        outdated: list[Dependency] = []
        try:
            for module in decode_go_list_output(output):
                if module.error is not None:
                    raise CheckerError(f"error loading module {module.path}: {module.error.err}")

                # No update available
                if module.update is None:
                    continue

                configured = modules_by_name.get(module.path)
                if configured is not None and configured.ignores(module.update.version):
                    logger.info("Ignoring module version", module=module.path, version=module.update.version)
                    continue

                outdated.append(
                    Dependency(
                        name=module.path,
                        current_version=module.version,
                        latest_version=module.update.version,
                    )
                )
        except (json.JSONDecodeError, ValidationError) as exc:
            raise CheckerError(f"error decoding dependency: {exc}") from exc

        logger.info("Checked Go modules", checked=len(self.modules), outdated=len(outdated))
        return outdated
