"""
Data models for the work protocol generator.

This module contains the shared data structures used across all modules.
Every record is immutable: state changes replace records instead of
mutating them.
"""

import datetime
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Repository:
    """Repository metadata from GitHub."""
    id: str
    full_name: str
    description: Optional[str] = None
    url: Optional[str] = None
    private: bool = False


@dataclass(frozen=True)
class CommitInfo:
    """Represents a single commit with its metadata."""
    sha: str
    message: str
    author: Optional[str] = None
    date: Optional[datetime.datetime] = None


@dataclass(frozen=True)
class RepositoryEntry:
    """A repository plus its current selection flag."""
    repo: Repository
    selected: bool = False


@dataclass(frozen=True)
class CommitEntry:
    """A single commit plus its selection flag."""
    commit: CommitInfo
    selected: bool = False


@dataclass(frozen=True)
class CommitGroup:
    """All commits fetched for one selected repository."""
    repo_full_name: str
    commits: Tuple[CommitEntry, ...] = ()


@dataclass(frozen=True)
class UserMetadata:
    """Free-form user input printed in the protocol header."""
    name: str = ""
    position: str = ""
    date: Optional[datetime.date] = None
    hours: float = 0


@dataclass(frozen=True)
class UserData:
    """User metadata with the date already normalized to text."""
    name: str
    position: str
    date: str
    hours: float


@dataclass(frozen=True)
class CompiledCommit:
    """One selected commit as it appears in the protocol."""
    repo: str
    sha: str
    message: str
    pr_num: int


@dataclass(frozen=True)
class DocumentPayload:
    """The normalized structure handed to the document renderer."""
    user_data: UserData
    commits: Tuple[CompiledCommit, ...] = ()

    def to_template_context(self, pr_hours: float) -> Dict[str, Any]:
        """
        Flatten the payload into the field map the docx template expects.

        Args:
            pr_hours: Hours attributed to every listed pull request

        Returns:
            Dictionary with ``name``, ``position``, ``date``, ``hours`` and ``prs``
        """
        prs: List[Dict[str, Any]] = [
            {"title": c.message, "num": c.pr_num, "sha": c.sha, "hour": pr_hours}
            for c in self.commits
        ]
        return {
            "name": self.user_data.name,
            "position": self.user_data.position,
            "date": self.user_data.date,
            "hours": self.user_data.hours,
            "prs": prs,
        }
