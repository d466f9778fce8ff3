#!/usr/bin/env python3
"""Manual smoke run of the GitHub Talent Sourcer SDK against the live API.

Requires the package to be installed (``pip install -e .``) and a token in
GITHUB_TOKEN or GITHUB_TALENT_SOURCER_TOKEN.
"""

import argparse
import asyncio
import json
import logging
import os
import sys

from github_talent_sourcer import FetchOptions, TalentSourcer, __version__


def setup_logging(verbose: bool = False, debug: bool = False):
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def smoke_collect(sourcer: TalentSourcer, repo: str, options: FetchOptions):
    """Collect a single repository and print what came back."""
    print(f"\n{'='*50}")
    print(f"collect_repository('{repo}')")
    print("=" * 50)

    contributors = await sourcer.collect_repository(repo, options)
    print(f"Unique contributors: {len(contributors)}")
    for record in list(contributors.values())[:5]:
        print(
            f"  {record.username}: {record.commits} commits, "
            f"{record.pull_requests} PRs, {record.issues} issues"
        )
    return contributors


async def smoke_source(sourcer: TalentSourcer, repos: list[str], options: FetchOptions):
    """Run the full multi-repository pipeline."""
    print(f"\n{'='*50}")
    print(f"source({repos})")
    print("=" * 50)

    result = await sourcer.source(repos, options)
    print(f"Processed: {result.processed}")
    print(f"Failed: {result.failed}")
    print(f"Ranked contributors: {len(result.contributors)}")
    for record in result.contributors[:10]:
        print(f"  {record.total_contributions:>5}  {record.username}  ({record.repository_names})")
    return result


async def main():
    parser = argparse.ArgumentParser(description="Smoke-test the GitHub Talent Sourcer SDK")
    parser.add_argument("repos", nargs="+", help="Repositories (owner/name or URL)")
    parser.add_argument("--months", type=int, default=3, help="Recency window in months")
    parser.add_argument("--location", help="Comma-separated location terms")
    parser.add_argument("--single", action="store_true", help="Only collect the first repo")
    parser.add_argument("--output", "-o", help="Write ranked records as JSON")
    parser.add_argument("--verbose", "-v", action="store_true")
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    setup_logging(args.verbose, args.debug)
    print(f"github-talent-sourcer {__version__}")

    token = os.getenv("GITHUB_TALENT_SOURCER_TOKEN") or os.getenv("GITHUB_TOKEN")
    if not token:
        print("Set GITHUB_TOKEN to run the smoke test.")
        sys.exit(1)

    options = FetchOptions(
        location_filter=args.location.split(",") if args.location else None,
        active_within_months=args.months,
    )

    async with TalentSourcer(token=token) as sourcer:
        try:
            if args.single:
                await smoke_collect(sourcer, args.repos[0], options)
                return

            result = await smoke_source(sourcer, args.repos, options)
            if args.output:
                with open(args.output, "w") as f:
                    json.dump(
                        [r.model_dump(mode="json") for r in result.contributors],
                        f,
                        indent=2,
                    )
                print(f"\nRecords saved to: {args.output}")

            print("\n✓ Smoke run completed successfully!")

        except Exception as e:
            print(f"\n✗ Error: {e}")
            if args.debug:
                import traceback
                traceback.print_exc()
            sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
