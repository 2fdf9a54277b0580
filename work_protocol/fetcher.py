"""
GitHub data fetching module.

This module handles all GitHub API interactions for fetching the user's
repositories and the commits made in a date range, using PyGithub. Raw
PyGithub objects are converted into the package's typed records here, so the
rest of the package never sees them.
"""

import datetime
import logging
from typing import List, Optional, Sequence, Tuple

from github import Auth, Github, GithubException
from requests.exceptions import RequestException

from .exceptions import ProviderError
from .models import CommitInfo, Repository

# Set up logging
logger = logging.getLogger("work-protocol.fetcher")


def _day_start(day: datetime.date) -> datetime.datetime:
    return datetime.datetime.combine(day, datetime.time.min, tzinfo=datetime.timezone.utc)


def _day_end(day: datetime.date) -> datetime.datetime:
    return datetime.datetime.combine(day, datetime.time.max, tzinfo=datetime.timezone.utc)


class GitHubFetcher:
    """
    Fetch repositories and commits from GitHub using PyGithub.

    Args:
        token: Personal access token (or None for unauthenticated, but rate-limited).
        client: Preconfigured ``github.Github`` instance, mainly for tests.
    """

    def __init__(self, token: Optional[str] = None, client: Optional[Github] = None) -> None:
        if client is not None:
            self._g = client
            return
        try:
            self._g = Github(auth=Auth.Token(token)) if token else Github()
            logger.debug("GitHub client initialized (authenticated=%s)", bool(token))
        except Exception as e:
            logger.error("Failed to initialize GitHub client: %s", e)
            raise ProviderError(f"GitHub client initialization failed: {e}") from e

    def list_repositories(self) -> List[Repository]:
        """
        Fetch the repositories visible to the authenticated user.

        Returns:
            List of Repository records, in the order GitHub returns them

        Raises:
            ProviderError: If the repository list cannot be fetched
        """
        try:
            user = self._g.get_user()
            result: List[Repository] = []
            for r in user.get_repos():
                result.append(Repository(
                    id=str(r.id),
                    full_name=r.full_name,
                    description=r.description,
                    url=r.html_url,
                    private=bool(r.private),
                ))
            logger.info("Fetched %d repositories", len(result))
            return result

        except (GithubException, RequestException) as e:
            error_msg = f"Failed to fetch repositories: {e}"
            logger.error(error_msg)
            raise ProviderError(error_msg) from e

    def fetch_commits(self, repo_full_name: str, from_date: datetime.date,
                      to_date: datetime.date, author: Optional[str] = None) -> List[CommitInfo]:
        """
        Fetch the commits of one repository made between two days, inclusive.

        Args:
            repo_full_name: ``owner/name`` of the repository
            from_date: First day of the range
            to_date: Last day of the range
            author: Optional GitHub login or email to filter commits by

        Returns:
            List of CommitInfo objects, most recent first

        Raises:
            ProviderError: If commits cannot be fetched
        """
        try:
            repo = self._g.get_repo(repo_full_name)
            kwargs = {"since": _day_start(from_date), "until": _day_end(to_date)}
            if author:
                kwargs["author"] = author
            commits = repo.get_commits(**kwargs)
            result: List[CommitInfo] = []

            for c in commits:
                commit_obj = c.commit
                if not c.sha or commit_obj is None or commit_obj.message is None:
                    logger.debug("Skipping malformed commit in %s", repo_full_name)
                    continue

                # Extract author information with fallbacks
                author_name = None
                if c.author:
                    author_name = c.author.login
                elif commit_obj.author and commit_obj.author.name:
                    author_name = commit_obj.author.name

                date = commit_obj.author.date if commit_obj.author else None

                result.append(CommitInfo(
                    sha=c.sha,
                    message=commit_obj.message,
                    author=author_name,
                    date=date,
                ))

            logger.info("Fetched %d commits from %s", len(result), repo_full_name)
            return result

        except (GithubException, RequestException) as e:
            error_msg = f"Failed to fetch commits for {repo_full_name}: {e}"
            logger.error(error_msg)
            raise ProviderError(error_msg) from e

    def list_commits(self, repo_full_names: Sequence[str], from_date: datetime.date,
                     to_date: datetime.date, author: Optional[str] = None
                     ) -> List[Tuple[str, List[CommitInfo]]]:
        """
        Fetch commits for several repositories.

        Returns:
            One ``(repo_full_name, commits)`` pair per requested repository,
            in request order
        """
        return [
            (name, self.fetch_commits(name, from_date, to_date, author=author))
            for name in repo_full_names
        ]
