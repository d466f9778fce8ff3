"""CSV output writer for ranked contributors."""

import csv
from collections.abc import Iterable
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

from github_talent_sourcer.exceptions import ExportIOError
from github_talent_sourcer.models.contributor import ContributorRecord

# (field, column title) in output order
CSV_COLUMNS: list[tuple[str, str]] = [
    ("username", "Username"),
    ("name", "Name"),
    ("email", "Email"),
    ("location", "Location"),
    ("company", "Company"),
    ("bio", "Bio"),
    ("twitter", "Twitter"),
    ("blog", "Blog/Website"),
    ("profile_url", "GitHub Profile"),
    ("repositories", "Repository"),
    ("total_contributions", "Total Contributions"),
    ("commits", "Commits"),
    ("pull_requests", "Pull Requests"),
    ("issues", "Issues"),
    ("notable_contributions", "Notable Contributions (Sample)"),
    ("first_contribution", "First Contribution"),
    ("last_contribution", "Last Contribution"),
    ("collected_at", "Data Fetched At"),
]

NOTABLE_DISPLAY_LIMIT = 3
NOTABLE_SEPARATOR = " | "


def format_date(value: Optional[datetime]) -> str:
    """Render a timestamp as YYYY-MM-DD, or an empty string."""
    if value is None:
        return ""
    return value.date().isoformat()


def record_to_row(record: ContributorRecord) -> dict[str, Any]:
    """Flatten a record into a CSV row keyed by column title."""
    values = {
        "username": record.username,
        "name": record.name or "",
        "email": record.email or "",
        "location": record.location or "",
        "company": record.company or "",
        "bio": record.bio or "",
        "twitter": record.twitter_username or "",
        "blog": record.blog or "",
        "profile_url": record.profile_url,
        "repositories": record.repository_names,
        "total_contributions": record.total_contributions,
        "commits": record.commits,
        "pull_requests": record.pull_requests,
        "issues": record.issues,
        "notable_contributions": NOTABLE_SEPARATOR.join(
            record.notable_contributions.sample(NOTABLE_DISPLAY_LIMIT)
        ),
        "first_contribution": format_date(record.first_contribution),
        "last_contribution": format_date(record.last_contribution),
        "collected_at": format_date(record.collected_at),
    }
    return {title: values[key] for key, title in CSV_COLUMNS}


def default_output_path(output_dir: Path, run_date: Optional[date] = None) -> Path:
    """Dated default export path, e.g. output/contributors_2024-06-01.csv."""
    run_date = run_date or date.today()
    return output_dir / f"contributors_{run_date.isoformat()}.csv"


def write_csv_report(
    records: Iterable[ContributorRecord],
    output_path: Path,
) -> Path:
    """Write ranked contributors to a CSV file.

    Args:
        records: Contributors in output order
        output_path: Destination file; parent directories are created

    Returns:
        Path to written file

    Raises:
        ExportIOError: If the directory or file cannot be written
    """
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=[title for _, title in CSV_COLUMNS])
            writer.writeheader()
            for record in records:
                writer.writerow(record_to_row(record))
    except OSError as e:
        raise ExportIOError(str(output_path), e) from e

    return output_path
