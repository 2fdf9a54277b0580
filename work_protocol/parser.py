"""
Commit message parsing module.

This module extracts a human readable title and the pull request number from
GitHub squash-merge style commit messages such as ``"Fix login (#42)"``.
"""

import re
from dataclasses import dataclass
from typing import Optional

from .constants import NO_PR_NUMBER


@dataclass(frozen=True)
class ParsedMessage:
    """Title and pull request number extracted from a commit message."""
    title: str
    pr_num: int = NO_PR_NUMBER

    @property
    def has_pr(self) -> bool:
        """True when the message ended with a ``(#N)`` marker."""
        return self.pr_num != NO_PR_NUMBER


class CommitMessageParser:
    """
    Parse commit messages into (title, pr_num).

    Only a ``(#<digits>)`` marker at the very end of the subject line counts;
    numbers in parentheses elsewhere in the message are part of the title.
    Fallback: the raw message is the title and ``pr_num`` is ``-1``.
    """

    TRAILING_PR_RE = re.compile(r"^(?P<title>.*?\S)\s+\(#(?P<num>\d+)\)\s*$")

    @staticmethod
    def parse(message: Optional[str]) -> ParsedMessage:
        """
        Parse commit message.

        Args:
            message: Raw commit message, possibly multi-line

        Returns:
            ParsedMessage with the title and the pull request number
        """
        if not message:
            return ParsedMessage(title=message or "")

        subject = message.splitlines()[0] if message.strip() else ""
        m = CommitMessageParser.TRAILING_PR_RE.match(subject)
        if not m:
            return ParsedMessage(title=message)

        return ParsedMessage(title=m.group("title").strip(), pr_num=int(m.group("num")))

