"""
Report session module.

A ``ReportSession`` owns the selection store and the user metadata for one
protocol, wires GitHub fetches into the store and runs compile, render and
save when the user asks for the document.

Commit fetches are tagged with the scope they were issued for (selected
repositories and date range). A result that arrives after the scope changed
is discarded instead of overwriting state that belongs to the newer scope.
"""

import datetime
import logging
import math
from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .compiler import ReportCompiler, month_bounds
from .constants import DEFAULT_PR_HOURS
from .exceptions import InvalidMetadata, ProviderError
from .models import DocumentPayload, UserMetadata
from .renderer import DocxTemplateRenderer
from .sink import FileSink, suggested_filename
from .store import GroupSource, SelectionStore

logger = logging.getLogger("work-protocol.session")


@dataclass(frozen=True)
class FetchScope:
    """The filter a commit fetch was issued for."""
    repo_full_names: Tuple[str, ...]
    from_date: Optional[datetime.date]
    to_date: Optional[datetime.date]
    author: Optional[str] = None


class ReportSession:
    """
    State and workflow for building one work protocol.

    Args:
        fetcher: Provider with ``list_repositories()`` and ``list_commits()``
        compiler: Report compiler, defaults to the ``MM/YYYY`` date style
        pr_hours: Hours printed next to every pull request
        author: Optional commit author filter passed to the provider
    """

    def __init__(self, fetcher, compiler: Optional[ReportCompiler] = None,
                 pr_hours: float = DEFAULT_PR_HOURS, author: Optional[str] = None) -> None:
        self.fetcher = fetcher
        self.compiler = compiler or ReportCompiler()
        self.pr_hours = pr_hours
        self.author = author
        self.store = SelectionStore()
        self.metadata = UserMetadata()

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------
    def set_name(self, name: str) -> None:
        self.metadata = replace(self.metadata, name=name)

    def set_position(self, position: str) -> None:
        self.metadata = replace(self.metadata, position=position)

    def set_date(self, date: Optional[datetime.date]) -> None:
        """Set the report date; commits are fetched for the whole month containing it."""
        self.metadata = replace(self.metadata, date=date)

    def set_hours(self, hours: Union[str, float]) -> None:
        """
        Set the total hours worked in the month.

        Args:
            hours: Number or numeric string, as typed by the user

        Raises:
            InvalidMetadata: If the value is not a finite number
        """
        try:
            value = float(hours)
        except (TypeError, ValueError) as e:
            raise InvalidMetadata(f"Hours must be a number, got {hours!r}") from e
        if not math.isfinite(value):
            raise InvalidMetadata(f"Hours must be a finite number, got {hours!r}")
        self.metadata = replace(self.metadata, hours=value)

    # ------------------------------------------------------------------
    # Repositories
    # ------------------------------------------------------------------
    def load_repositories(self) -> bool:
        """
        Replace the repository list with a fresh one from the provider.

        Returns:
            True on success. On failure the error is logged and the previous
            repository list is kept.
        """
        try:
            repos = self.fetcher.list_repositories()
        except ProviderError as e:
            logger.error("Could not load repositories: %s", e)
            return False
        self.store.set_repositories(repos)
        return True

    def select_repository(self, repo_id: str) -> None:
        self.store.select_repository(repo_id)

    def unselect_repository(self, repo_id: str) -> None:
        self.store.unselect_repository(repo_id)

    def select_repository_by_name(self, full_name: str) -> bool:
        """Select a repository by ``owner/name``; returns False if it is unknown."""
        for entry in self.store.repositories:
            if entry.repo.full_name.lower() == full_name.lower():
                self.store.select_repository(entry.repo.id)
                return True
        return False

    # ------------------------------------------------------------------
    # Commits
    # ------------------------------------------------------------------
    def current_scope(self) -> FetchScope:
        """
        Describe the commit fetch the current selection calls for.

        Returns:
            FetchScope with the selected repositories, the month range of the
            metadata date (or None when no date is set) and the author filter
        """
        if self.metadata.date is None:
            from_date = to_date = None
        else:
            from_date, to_date = month_bounds(self.metadata.date)
        return FetchScope(
            repo_full_names=tuple(self.store.selected_repo_full_names()),
            from_date=from_date,
            to_date=to_date,
            author=self.author,
        )

    def fetch_commits(self) -> bool:
        """
        Fetch commits for the selected repositories in the selected month.

        Returns:
            True if the store now holds commits for the current scope
        """
        scope = self.current_scope()
        if not scope.repo_full_names:
            self.store.set_commit_groups([])
            return True
        if scope.from_date is None:
            logger.warning("No date selected, not fetching commits")
            return False

        try:
            groups = self.fetcher.list_commits(
                list(scope.repo_full_names), scope.from_date, scope.to_date, author=scope.author)
        except ProviderError as e:
            logger.error("Could not fetch commits: %s", e)
            return False
        return self.apply_commits(scope, groups)

    def apply_commits(self, scope: FetchScope, groups: List[GroupSource]) -> bool:
        """
        Store fetched commit groups unless the scope they belong to is stale.

        Args:
            scope: Scope the fetch was issued for
            groups: ``(repo_full_name, commits)`` pairs or commit groups

        Returns:
            False if the result was discarded
        """
        current = self.current_scope()
        if scope != current:
            logger.info("Discarding commits fetched for stale scope %s", scope.repo_full_names)
            return False
        self.store.set_commit_groups(groups)
        return True

    def select_commit(self, repo_full_name: str, sha: str) -> None:
        self.store.select_commit(repo_full_name, sha)

    def unselect_commit(self, repo_full_name: str, sha: str) -> None:
        self.store.unselect_commit(repo_full_name, sha)

    def select_commits_by_prefix(self, sha_prefix: str) -> int:
        """Select every commit whose sha starts with ``sha_prefix``; returns the match count."""
        matches = [
            (group.repo_full_name, entry.commit.sha)
            for group in self.store.commit_groups
            for entry in group.commits
            if sha_prefix and entry.commit.sha.startswith(sha_prefix)
        ]
        for repo_full_name, sha in matches:
            self.store.select_commit(repo_full_name, sha)
        return len(matches)

    # ------------------------------------------------------------------
    # Document
    # ------------------------------------------------------------------
    def compile(self) -> DocumentPayload:
        """
        Compile the current selection and metadata.

        Raises:
            InvalidMetadata: If the metadata is incomplete
        """
        return self.compiler.compile(self.metadata, self.store.commit_groups)

    def generate(self, template: bytes, sink: FileSink) -> Path:
        """
        Compile the selection, render it into the template and save the result.

        Args:
            template: Raw bytes of the ``.docx`` template
            sink: Where the rendered document is written

        Returns:
            Path of the written document
        """
        payload = self.compile()
        logger.info("Generating protocol with %d commits", len(payload.commits))
        renderer = DocxTemplateRenderer(template)
        data = renderer.render(payload.to_template_context(self.pr_hours))
        return sink.save(data, suggested_filename(payload.user_data))
