"""Rich console output for sourcing runs."""

from collections.abc import Sequence

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table

from github_talent_sourcer.models.contributor import ContributorRecord
from github_talent_sourcer.models.options import FetchOptions

USAGE_TEXT = """\
Usage: github-talent-sourcer <repo1> <repo2> ...

Examples:
  github-talent-sourcer prisma/prisma
  github-talent-sourcer https://github.com/trpc/trpc
  github-talent-sourcer prisma/prisma trpc/trpc TanStack/query

The command will:
  1. Fetch contributors, PR authors, and issue creators
  2. Filter by location (if --location or LOCATION_FILTER is set)
  3. Merge data from multiple repos into a single record per user
  4. Export to CSV with contact info and contribution details
"""


class Console:
    """Wrapper for rich console output."""

    def __init__(self, verbose: bool = False, quiet: bool = False):
        self.console = RichConsole()
        self.verbose = verbose
        self.quiet = quiet

    def print(self, *args, **kwargs):
        """Print to console (respects quiet mode)."""
        if not self.quiet:
            self.console.print(*args, **kwargs)

    def print_verbose(self, *args, **kwargs):
        """Print only in verbose mode."""
        if self.verbose and not self.quiet:
            self.console.print(*args, **kwargs)

    def print_error(self, message: str):
        """Print error message."""
        self.console.print(f"[red]Error:[/red] {message}")

    def print_warning(self, message: str):
        """Print warning message."""
        self.console.print(f"[yellow]Warning:[/yellow] {message}")

    def print_success(self, message: str):
        """Print success message."""
        if not self.quiet:
            self.console.print(f"[green]{message}[/green]")

    def print_usage(self):
        """Print usage text (shown when no repositories are given)."""
        self.console.print(
            Panel("[bold blue]GitHub Talent Sourcer[/bold blue]", expand=False)
        )
        self.console.print(USAGE_TEXT, highlight=False, markup=False)

    def print_header(self):
        """Print run header."""
        if self.quiet:
            return

        self.console.print()
        self.console.print(
            Panel("[bold blue]GitHub Talent Sourcer[/bold blue]", expand=False)
        )
        self.console.print()

    def print_configuration(self, repos: Sequence[str], options: FetchOptions):
        """Print the repositories and options for this run."""
        if self.quiet:
            return

        table = Table(title="Configuration", show_header=False, expand=False)
        table.add_column("Setting", style="dim")
        table.add_column("Value")

        table.add_row("Repositories", ", ".join(repos))
        if options.location_filter:
            table.add_row("Location Filter", ", ".join(options.location_filter))
        if options.min_contributions > 1:
            table.add_row("Min Contributions", str(options.min_contributions))
        if options.active_within_months:
            table.add_row("Active Within", f"{options.active_within_months} months")

        skipped = [
            label
            for label, included in (
                ("commits", options.include_commits),
                ("pull requests", options.include_pull_requests),
                ("issues", options.include_issues),
            )
            if not included
        ]
        if skipped:
            table.add_row("Skipping", ", ".join(skipped))

        self.console.print(table)
        self.console.print()

    def print_summary(self, records: Sequence[ContributorRecord]):
        """Print aggregate statistics over the exported records."""
        if self.quiet:
            return

        table = Table(title="Summary", show_header=False, expand=False)
        table.add_column("Metric", style="dim")
        table.add_column("Value", justify="right")

        table.add_row("Total unique contributors", str(len(records)))
        table.add_row("With email", str(sum(1 for r in records if r.email)))
        table.add_row("With location", str(sum(1 for r in records if r.location)))
        table.add_row("With Twitter", str(sum(1 for r in records if r.twitter_username)))
        table.add_row("Total PRs", str(sum(r.pull_requests for r in records)))
        table.add_row("Total Issues", str(sum(r.issues for r in records)))
        table.add_row("Total Commits", str(sum(r.commits for r in records)))

        self.console.print()
        self.console.print(table)
        self.console.print()

    def print_top_contributors(self, records: Sequence[ContributorRecord], limit: int = 10):
        """Print the highest-ranked contributors."""
        if self.quiet or not records:
            return

        table = Table(title=f"Top {min(limit, len(records))} Contributors", expand=False)
        table.add_column("Username")
        table.add_column("Location")
        table.add_column("Total", justify="right")
        table.add_column("Commits", justify="right")
        table.add_column("PRs", justify="right")
        table.add_column("Issues", justify="right")

        for record in records[:limit]:
            table.add_row(
                record.username,
                record.location or "-",
                str(record.total_contributions),
                str(record.commits),
                str(record.pull_requests),
                str(record.issues),
            )

        self.console.print(table)
        self.console.print()

    def print_output_path(self, path: str):
        """Print output file path."""
        if not self.quiet:
            self.console.print(f"\n[green]Exported to:[/green] {path}")
