"""CLI interface for GitHub Talent Sourcer."""

import asyncio
import dataclasses
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from typer.core import TyperGroup

from github_talent_sourcer import __version__
from github_talent_sourcer.config import Config, get_config, parse_location_terms
from github_talent_sourcer.exceptions import (
    ConfigurationError,
    ExportIOError,
    MissingCredentialError,
)
from github_talent_sourcer.models.options import FetchOptions
from github_talent_sourcer.output.console import Console as OutputConsole


class DefaultSourceGroup(TyperGroup):
    """Treat arguments that name no subcommand as repositories for `source`."""

    def parse_args(self, ctx, args):
        group_options = {
            opt
            for param in self.get_params(ctx)
            for opt in (*param.opts, *param.secondary_opts)
        }
        if args and args[0] not in self.commands and args[0] not in group_options:
            args = ["source", *args]
        return super().parse_args(ctx, args)


app = typer.Typer(
    name="github-talent-sourcer",
    cls=DefaultSourceGroup,
    help="Find and rank contributors of GitHub repositories",
    add_completion=False,
)

console = Console()


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"github-talent-sourcer version {__version__}")
        raise typer.Exit()


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route library logging through rich."""
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """GitHub Talent Sourcer - Find and rank contributors of GitHub repositories."""
    if ctx.invoked_subcommand is None:
        OutputConsole().print_usage()
        raise typer.Exit()


@app.command()
def source(
    repos: Optional[list[str]] = typer.Argument(
        None,
        help="Repositories as owner/name or full GitHub URLs",
        show_default=False,
    ),
    location: Optional[str] = typer.Option(
        None,
        "--location",
        "-l",
        help="Comma-separated location terms (overrides LOCATION_FILTER)",
    ),
    min_contributions: Optional[int] = typer.Option(
        None,
        "--min-contributions",
        "-m",
        min=0,
        help="Minimum total contributions (overrides MIN_CONTRIBUTIONS, default 1)",
    ),
    active_within_months: Optional[int] = typer.Option(
        None,
        "--active-within-months",
        "-a",
        min=1,
        help="Stop paging PRs/issues older than this (overrides ACTIVE_WITHIN_MONTHS)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output CSV file path",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        help="Directory for the dated CSV (overrides OUTPUT_DIR)",
    ),
    commits: bool = typer.Option(True, "--commits/--no-commits", help="Collect committers"),
    pull_requests: bool = typer.Option(True, "--prs/--no-prs", help="Collect PR authors"),
    issues: bool = typer.Option(True, "--issues/--no-issues", help="Collect issue authors"),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Minimal output",
    ),
):
    """Collect, merge and rank the contributors of one or more repositories.

    Examples:
        github-talent-sourcer prisma/prisma
        github-talent-sourcer https://github.com/trpc/trpc --location berlin
        github-talent-sourcer prisma/prisma trpc/trpc -m 5 -a 12
    """
    output_console = OutputConsole(verbose=verbose, quiet=quiet)

    if not repos:
        output_console.print_usage()
        raise typer.Exit()

    setup_logging(verbose=verbose, quiet=quiet)

    try:
        config = get_config()
        config.require_token()
    except (ConfigurationError, MissingCredentialError) as e:
        output_console.print_error(str(e))
        raise typer.Exit(1)

    if output_dir is not None:
        config = dataclasses.replace(config, output_dir=output_dir)

    try:
        options = FetchOptions(
            location_filter=(
                parse_location_terms(location) if location is not None else config.location_filter
            ),
            min_contributions=(
                min_contributions if min_contributions is not None else config.min_contributions
            ),
            active_within_months=(
                active_within_months
                if active_within_months is not None
                else config.active_within_months
            ),
            include_commits=commits,
            include_pull_requests=pull_requests,
            include_issues=issues,
        )
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        output_console.print_error(f"Invalid options: {problems}")
        raise typer.Exit(1)

    try:
        asyncio.run(
            _run_sourcing(
                repos=repos,
                config=config,
                options=options,
                output_path=output,
                output_console=output_console,
            )
        )
    except KeyboardInterrupt:
        console.print("\n[yellow]Sourcing cancelled[/yellow]")
        raise typer.Exit(1)
    except (MissingCredentialError, ExportIOError) as e:
        output_console.print_error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Fatal error: {e}[/red]")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)


async def _run_sourcing(
    repos: list[str],
    config: Config,
    options: FetchOptions,
    output_path: Optional[Path],
    output_console: OutputConsole,
):
    """Run the sourcing pipeline asynchronously."""
    from github_talent_sourcer.sdk import TalentSourcer

    output_console.print_header()
    output_console.print_configuration(repos, options)

    async with TalentSourcer(config=config) as sourcer:
        result = await sourcer.source(repos, options)

    for reference, error in result.failed.items():
        output_console.print_warning(f"Skipped {reference}: {error}")

    written = sourcer.export(result.contributors, output_path)

    output_console.print_output_path(str(written))
    output_console.print_summary(result.contributors)
    output_console.print_top_contributors(result.contributors)
    output_console.print_success(
        f"Done! Exported {len(result.contributors)} contributors "
        f"from {len(result.processed)} repositories."
    )


@app.command()
def check_token():
    """Check GitHub token configuration."""
    try:
        config = get_config()
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if config.is_authenticated:
        console.print("[green]GitHub token is configured[/green]")
        console.print(f"API URL: {config.github_api_url}")
        return

    console.print("[yellow]No GitHub token configured[/yellow]")
    console.print()
    console.print("To configure a token:")
    console.print("  export GITHUB_TOKEN=your_token_here")
    console.print("  or add GITHUB_TOKEN=... to a .env file")
    console.print()
    console.print("Create a token at: https://github.com/settings/tokens")
    console.print("No special scopes needed for public repositories.")
    raise typer.Exit(1)


if __name__ == "__main__":
    app()
