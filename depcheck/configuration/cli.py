"""Defines the Command Line Interface (CLI) using Typer.

Every option can also be given as a GitHub Actions input, i.e. through an
``INPUT_<NAME>`` environment variable where the input name may be spelled
with either dashes or underscores.
"""

import asyncio
from pathlib import Path
from typing import Any

import typer
from dotenv import load_dotenv
from typer import Option
from typer.core import TyperCommand
from typing_extensions import Annotated

from depcheck.configuration.env import Settings
from depcheck.configuration.exceptions import DepcheckError
from depcheck.synchronize.driver import run_depcheck_workflow
from depcheck.synchronize.results import DepcheckResult
from depcheck.utils.constants import DEFAULT_CONFIG_PATH, DEFAULT_REPOSITORY_PATH
from depcheck.utils.logging import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False)


def action_inputs(*names: str) -> list[str]:
    """Environment variables of the GitHub Actions inputs with the given names."""
    envvars: list[str] = []
    for name in names:
        for spelling in (name.upper(), name.upper().replace("-", "_")):
            envvar = f"INPUT_{spelling}"
            if envvar not in envvars:
                envvars.append(envvar)
    return envvars


def parse_bool_input(value: str) -> bool:
    """Inputs are only true when spelled 'true', in any case."""
    return value.strip().lower() == "true"


# Boolean inputs take a value, but may also be given bare to mean "true".
BOOLEAN_INPUT_FLAGS = ("--dry-run", "--close-outdated")


def expand_bare_boolean_flags(args: list[str]) -> list[str]:
    """Rewrite a bare boolean flag, one not followed by a value, as `<flag>=true`."""
    expanded: list[str] = []
    for index, arg in enumerate(args):
        if arg == "--":
            expanded.extend(args[index:])
            break
        next_arg = args[index + 1] if index + 1 < len(args) else None
        if arg in BOOLEAN_INPUT_FLAGS and (next_arg is None or next_arg.startswith("-")):
            expanded.append(f"{arg}=true")
        else:
            expanded.append(arg)
    return expanded


class DepcheckCommand(TyperCommand):
    """Accepts `--dry-run` as well as `--dry-run true` and `--dry-run=true`."""

    def parse_args(self, ctx: typer.Context, args: list[str]) -> list[str]:
        """Expand bare boolean flags before parsing."""
        return super().parse_args(ctx, expand_bare_boolean_flags(args))


async def _run_with_timeout(timeout: float, **kwargs: Any) -> DepcheckResult:
    async with asyncio.timeout(timeout if timeout > 0 else None):
        return await run_depcheck_workflow(**kwargs)


@typer_app.command(cls=DepcheckCommand)
def depcheck_cli(
    repository: Annotated[
        Path, Option(envvar=action_inputs("repository"), help="Path to the project whose dependencies are checked.")
    ] = Path(DEFAULT_REPOSITORY_PATH),
    config_path: Annotated[
        Path, Option(envvar=action_inputs("config-path"), help="Config file, relative to the repository.")
    ] = Path(DEFAULT_CONFIG_PATH),
    github_token: Annotated[
        str | None,
        Option(envvar=["GITHUB_TOKEN", *action_inputs("github-token", "token")], help="GitHub token. Anonymous access is used when empty."),
    ] = None,
    dry_run: Annotated[
        str,
        Option(envvar=action_inputs("dry-run"), help="Print outdated dependencies without creating issues ('true' or 'false'; bare means 'true')."),
    ] = "false",
    close_outdated: Annotated[
        str,
        Option(
            envvar=action_inputs("close-outdated", "close-oudated"),
            help="Close older issues of a dependency after creating its current issue ('true' or 'false'; bare means 'true').",
        ),
    ] = "true",
    github_api_url: Annotated[str | None, Option(help="GitHub API URL. Defaults to GITHUB_API_URL or https://api.github.com.")] = None,
    debug: Annotated[bool, Option(help="Enable debug logging. Also enabled by DEBUG.")] = False,
    timeout: Annotated[float, Option(envvar=action_inputs("timeout"), help="Abort the run after this many seconds. 0 disables the deadline.")] = 0,
) -> None:
    """Check dependencies for updates and track each outdated one with a GitHub issue."""
    settings = Settings()
    configure_logging(debug=debug or settings.DEBUG)

    try:
        asyncio.run(
            _run_with_timeout(
                timeout,
                repository=repository,
                config_path=config_path,
                github_token=github_token,
                dry_run=parse_bool_input(dry_run),
                close_outdated=parse_bool_input(close_outdated),
                github_api_url=github_api_url or settings.GITHUB_API_URL,
            )
        )
    except DepcheckError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    except TimeoutError as exc:
        typer.echo(f"depcheck did not finish within {timeout} seconds", err=True)
        raise typer.Exit(code=1) from exc


if __name__ == "__main__":
    typer_app()
