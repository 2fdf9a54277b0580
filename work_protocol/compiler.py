"""
Report compilation module.

Turns the current selection plus the user's metadata into the
``DocumentPayload`` handed to the document renderer. Compilation is a pure
function of its inputs.
"""

import calendar
import datetime
import logging
import math
from typing import Callable, Iterable, List, Tuple

from .constants import SHORT_SHA_LENGTH
from .exceptions import InvalidMetadata
from .models import CommitGroup, CompiledCommit, DocumentPayload, UserData, UserMetadata
from .parser import CommitMessageParser

logger = logging.getLogger("work-protocol.compiler")

DateFormatter = Callable[[datetime.date], str]


def month_bounds(date: datetime.date) -> Tuple[datetime.date, datetime.date]:
    """Return the first and the last day of the month containing ``date``."""
    last_day = calendar.monthrange(date.year, date.month)[1]
    return date.replace(day=1), date.replace(day=last_day)


def format_month_year(date: datetime.date) -> str:
    """Format as ``MM/YYYY``."""
    return date.strftime("%m/%Y")


def format_month_range(date: datetime.date) -> str:
    """Format as an explicit day range, ``YYYY-MM-01 - YYYY-MM-<last day>``."""
    first, last = month_bounds(date)
    return f"{first.isoformat()} - {last.isoformat()}"


DATE_FORMATTERS = {
    "month": format_month_year,
    "range": format_month_range,
}


def short_sha(sha: str) -> str:
    return (sha or "")[:SHORT_SHA_LENGTH]


class ReportCompiler:
    """
    Compile selected commits and user metadata into a document payload.

    Args:
        date_formatter: Turns the metadata date into the text printed in the
                        document. Defaults to ``MM/YYYY``.
    """

    def __init__(self, date_formatter: DateFormatter = format_month_year) -> None:
        self.date_formatter = date_formatter

    def compile(self, metadata: UserMetadata, groups: Iterable[CommitGroup]) -> DocumentPayload:
        """
        Build the document payload.

        Groups are visited in their stored order and commits within a group
        in their stored order. Only selected commits are emitted.

        Args:
            metadata: Validated user metadata
            groups: Commit groups from the selection store

        Returns:
            DocumentPayload; its commit list may be empty

        Raises:
            InvalidMetadata: If the metadata date is missing or hours are negative or not finite
        """
        user_data = self._normalize_metadata(metadata)

        commits: List[CompiledCommit] = []
        for group in groups:
            for entry in group.commits:
                if not entry.selected:
                    continue
                parsed = CommitMessageParser.parse(entry.commit.message)
                commits.append(CompiledCommit(
                    repo=group.repo_full_name,
                    sha=short_sha(entry.commit.sha),
                    message=parsed.title,
                    pr_num=parsed.pr_num,
                ))

        logger.debug("Compiled %d commits for %s", len(commits), user_data.date)
        return DocumentPayload(user_data=user_data, commits=tuple(commits))

    def _normalize_metadata(self, metadata: UserMetadata) -> UserData:
        if metadata.date is None:
            raise InvalidMetadata("Cannot compile report: date is missing")
        if metadata.hours is None or not math.isfinite(metadata.hours) or metadata.hours < 0:
            raise InvalidMetadata(f"Cannot compile report: invalid hours {metadata.hours!r}")
        return UserData(
            name=metadata.name,
            position=metadata.position,
            date=self.date_formatter(metadata.date),
            hours=metadata.hours,
        )


def compile_report(metadata: UserMetadata, groups: Iterable[CommitGroup],
                   date_formatter: DateFormatter = format_month_year) -> DocumentPayload:
    return ReportCompiler(date_formatter=date_formatter).compile(metadata, groups)
