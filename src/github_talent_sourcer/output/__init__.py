"""Output handlers for GitHub Talent Sourcer."""

from github_talent_sourcer.output.console import Console
from github_talent_sourcer.output.csv_writer import default_output_path, write_csv_report

__all__ = [
    "write_csv_report",
    "default_output_path",
    "Console",
]
