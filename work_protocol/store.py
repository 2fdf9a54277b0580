"""
Selection state module.

This module keeps track of which repositories and which commits the user has
selected for the protocol. Every mutation builds a new tuple and assigns it in
one step, so a reader holding the previous collection never sees a partial
update. Entries that a mutation does not target are carried over as the very
same objects.
"""

import logging
from dataclasses import replace
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .models import CommitEntry, CommitGroup, CommitInfo, Repository, RepositoryEntry

logger = logging.getLogger("work-protocol.store")

GroupSource = Union[CommitGroup, Tuple[str, Iterable[CommitInfo]]]


class SelectionStore:
    """
    Hold repository and commit selection flags.

    Repositories are identified by ``Repository.id``, commits by the pair
    ``(repo_full_name, sha)``. Selecting or unselecting an identifier that is
    not present does nothing.
    """

    def __init__(self) -> None:
        self._repositories: Tuple[RepositoryEntry, ...] = ()
        self._commit_groups: Tuple[CommitGroup, ...] = ()

    @property
    def repositories(self) -> Tuple[RepositoryEntry, ...]:
        """Current repository entries, in provider order."""
        return self._repositories

    @property
    def commit_groups(self) -> Tuple[CommitGroup, ...]:
        """Current commit groups, one per queried repository."""
        return self._commit_groups

    # ------------------------------------------------------------------
    # Repositories
    # ------------------------------------------------------------------
    def set_repositories(self, repos: Iterable[Repository]) -> None:
        """
        Replace the whole repository collection.

        Args:
            repos: Repositories returned by the provider, all start unselected
        """
        self._repositories = tuple(RepositoryEntry(repo=r) for r in repos)
        logger.debug("Stored %d repositories", len(self._repositories))

    def select_repository(self, repo_id: str) -> None:
        """
        Mark a repository as selected.

        Args:
            repo_id: Provider id of the repository; unknown ids are ignored
        """
        self._set_repository_flag(repo_id, True)

    def unselect_repository(self, repo_id: str) -> None:
        """Clear the selection flag of a repository; unknown ids are ignored."""
        self._set_repository_flag(repo_id, False)

    def _set_repository_flag(self, repo_id: str, selected: bool) -> None:
        changed = False
        entries: List[RepositoryEntry] = []
        for entry in self._repositories:
            if entry.repo.id == repo_id and entry.selected != selected:
                entries.append(replace(entry, selected=selected))
                changed = True
            else:
                entries.append(entry)
        if changed:
            self._repositories = tuple(entries)

    def find_repository(self, repo_id: str) -> Optional[RepositoryEntry]:
        """Return the entry for ``repo_id``, or None."""
        for entry in self._repositories:
            if entry.repo.id == repo_id:
                return entry
        return None

    def selected_repo_full_names(self) -> List[str]:
        """Full names of the selected repositories, in stored order."""
        return [e.repo.full_name for e in self._repositories if e.selected]

    # ------------------------------------------------------------------
    # Commits
    # ------------------------------------------------------------------
    def set_commit_groups(self, groups: Iterable[GroupSource]) -> None:
        """
        Replace the whole commit group collection.

        Args:
            groups: Either ``CommitGroup`` objects or ``(repo_full_name, commits)``
                    pairs. Every commit entry starts unselected.
        """
        built: List[CommitGroup] = []
        for group in groups:
            if isinstance(group, CommitGroup):
                name = group.repo_full_name
                commits: Sequence[CommitInfo] = [e.commit for e in group.commits]
            elif isinstance(group, Mapping):
                name, commits = group["repo_full_name"], group["commits"]
            else:
                name, commits = group
            built.append(CommitGroup(
                repo_full_name=name,
                commits=tuple(CommitEntry(commit=c) for c in commits),
            ))
        self._commit_groups = tuple(built)
        logger.debug("Stored %d commit groups", len(self._commit_groups))

    def select_commit(self, repo_full_name: str, sha: str) -> None:
        """
        Mark one commit as selected. Unknown ``(repo_full_name, sha)`` pairs are ignored.

        Args:
            repo_full_name: Full name of the group holding the commit
            sha: Full commit sha
        """
        self._set_commit_flags(repo_full_name, selected=True, sha=sha)

    def unselect_commit(self, repo_full_name: str, sha: str) -> None:
        """Clear the selection flag of one commit; unknown pairs are ignored."""
        self._set_commit_flags(repo_full_name, selected=False, sha=sha)

    def select_all_commits(self, repo_full_name: Optional[str] = None) -> None:
        """Select every commit, or every commit of one repository."""
        self._set_commit_flags(repo_full_name, selected=True)

    def unselect_all_commits(self, repo_full_name: Optional[str] = None) -> None:
        self._set_commit_flags(repo_full_name, selected=False)

    def _set_commit_flags(self, repo_full_name: Optional[str], selected: bool,
                          sha: Optional[str] = None) -> None:
        changed = False
        groups: List[CommitGroup] = []
        for group in self._commit_groups:
            if repo_full_name is not None and group.repo_full_name != repo_full_name:
                groups.append(group)
                continue

            group_changed = False
            entries: List[CommitEntry] = []
            for entry in group.commits:
                if (sha is None or entry.commit.sha == sha) and entry.selected != selected:
                    entries.append(replace(entry, selected=selected))
                    group_changed = True
                else:
                    entries.append(entry)

            if group_changed:
                groups.append(replace(group, commits=tuple(entries)))
                changed = True
            else:
                groups.append(group)

        if changed:
            self._commit_groups = tuple(groups)

    def selected_commit_count(self) -> int:
        """Number of selected commits across all groups."""
        return sum(1 for g in self._commit_groups for e in g.commits if e.selected)
