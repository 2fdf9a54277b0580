#!/usr/bin/env python3
"""
Main driver script for the work protocol generator.

This script provides the command-line interface and coordinates all modules
to generate a monthly work protocol (.docx) from selected GitHub commits.

Usage (example):
    python -m work_protocol.main --token GITHUB_TOKEN --repo octocat/Hello-World \
        --month 2024-05 --name "Jane Doe" --position Developer --hours 160 \
        --template protocol_template.docx
"""

import argparse
import datetime
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .compiler import DATE_FORMATTERS, ReportCompiler, short_sha
from .constants import DEFAULT_PR_HOURS
from .fetcher import GitHubFetcher
from .parser import CommitMessageParser
from .session import ReportSession
from .sink import FileSink

logger = logging.getLogger("work-protocol")


def parse_month(value: str) -> datetime.date:
    """Parse ``YYYY-MM`` into the first day of that month."""
    try:
        return datetime.datetime.strptime(value, "%Y-%m").date()
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid month {value!r}, expected YYYY-MM") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a work protocol from selected GitHub commits.")
    parser.add_argument("--token", "-t", default=os.environ.get("GITHUB_TOKEN"),
                        help="GitHub token (default: $GITHUB_TOKEN)")
    parser.add_argument("--repo", "-r", action="append", default=[],
                        help="Repository full name (owner/name) to include; repeatable")
    parser.add_argument("--month", "-m", type=parse_month, required=True, help="Report month as YYYY-MM")
    parser.add_argument("--author", help="Only fetch commits by this GitHub login or email")
    parser.add_argument("--commit", "-c", action="append", default=[],
                        help="Commit sha (or prefix) to include; repeatable. Default: all fetched commits")
    parser.add_argument("--name", default="", help="Name printed in the protocol")
    parser.add_argument("--position", default="", help="Position printed in the protocol")
    parser.add_argument("--hours", default="0", help="Total hours worked in the month")
    parser.add_argument("--pr-hours", type=float, default=DEFAULT_PR_HOURS,
                        help="Hours printed next to every pull request")
    parser.add_argument("--date-style", choices=sorted(DATE_FORMATTERS), default="month",
                        help="How the date is printed: MM/YYYY or a day range")
    parser.add_argument("--template", type=Path, help="Path to the .docx template")
    parser.add_argument("--output-dir", "-o", default=".", help="Directory for the generated document")
    parser.add_argument("--list", action="store_true",
                        help="Print repositories and commits instead of generating a document")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def print_selection(session: ReportSession) -> None:
    for entry in session.store.repositories:
        mark = "x" if entry.selected else " "
        print(f"[{mark}] {entry.repo.full_name}")
    for group in session.store.commit_groups:
        print(f"\n{group.repo_full_name} | {len(group.commits)} commit(s)")
        if not group.commits:
            print(f"  No commits for {group.repo_full_name}")
        for entry in group.commits:
            mark = "x" if entry.selected else " "
            parsed = CommitMessageParser.parse(entry.commit.message)
            pr = f" (#{parsed.pr_num})" if parsed.has_pr else ""
            print(f"  [{mark}] {short_sha(entry.commit.sha)} {(parsed.title.splitlines() or [''])[0]}{pr}")


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the work protocol generator.

    Parses command line arguments, loads repositories and commits, applies
    the requested selection and writes the rendered document.
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        if not args.list and args.template is None:
            logger.error("--template is required unless --list is given")
            raise SystemExit(2)

        logger.info("Initializing GitHub fetcher...")
        fetcher = GitHubFetcher(token=args.token)

        compiler = ReportCompiler(date_formatter=DATE_FORMATTERS[args.date_style])
        session = ReportSession(fetcher, compiler=compiler, pr_hours=args.pr_hours, author=args.author)
        session.set_name(args.name)
        session.set_position(args.position)
        session.set_hours(args.hours)
        session.set_date(args.month)

        logger.info("Fetching repositories...")
        if not session.load_repositories():
            raise RuntimeError("could not load repositories")

        for full_name in args.repo:
            if not session.select_repository_by_name(full_name):
                logger.warning("Repository %s not found for this user, skipping", full_name)

        logger.info("Fetching commits for %s...", args.month.strftime("%Y-%m"))
        if not session.fetch_commits():
            raise RuntimeError("could not fetch commits")

        if args.commit:
            for sha in args.commit:
                if not session.select_commits_by_prefix(sha):
                    logger.warning("Commit %s not found in the fetched commits", sha)
        else:
            session.store.select_all_commits()

        if args.list:
            print_selection(session)
            return

        template = args.template.read_bytes()
        path = session.generate(template, FileSink(args.output_dir))

        logger.info("Work protocol generation completed successfully")
        print(f"✓ Protocol generated successfully: {path}")
        print(f"  Repositories: {', '.join(session.store.selected_repo_full_names()) or 'none'}")
        print(f"  Commits included: {session.store.selected_commit_count()}")

    except KeyboardInterrupt:
        logger.info("Work protocol generation interrupted by user")
        print("\nOperation cancelled by user")
        sys.exit(1)
    except Exception as e:
        logger.error("Work protocol generation failed: %s", e)
        print(f"Error: work protocol generation failed - {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
